"""
Tests pour le service du sommeil : remplacement par jour, derniere nuit, semaine.
"""
import pytest
from uuid import uuid4

from sqlmodel import select

from hydrosleep.core.errors import NotFoundError, ValidationError
from hydrosleep.domain.entities import GoalType, SleepEntry, SleepEntryCreate, SleepEntryUpdate
from hydrosleep.domain.services import log_store
from hydrosleep.domain.services.goal_service import goal_service
from hydrosleep.domain.services.sleep_service import (
    ONBOARDING_SUGGESTION,
    SLEEP_SUGGESTIONS,
    format_duration,
    sleep_service,
)

from conftest import SUNDAY, MONDAY, TUESDAY, WEDNESDAY


def _night(day, minutes=480, notes=None, **overrides):
    fields = dict(rested_percent=80, rem_percent=22, deep_sleep_percent=25)
    fields.update(overrides)
    return SleepEntryCreate(day=day, duration_minutes=minutes, notes=notes, **fields)


class TestFormatDuration:
    def test_pads_minutes(self):
        assert format_duration(425) == "7h 05m"

    def test_whole_hours(self):
        assert format_duration(480) == "8h 00m"

    def test_zero(self):
        assert format_duration(0) == "0h 00m"


class TestRecordSleep:
    def test_creates_entry(self, session, user_id):
        entry = sleep_service.record_sleep(session, user_id, _night(MONDAY, notes="Slept well"))

        assert entry.day == MONDAY
        assert entry.duration_minutes == 480
        assert entry.notes == "Slept well"

    def test_missing_notes_stored_empty(self, session, user_id):
        entry = sleep_service.record_sleep(session, user_id, _night(MONDAY))
        assert entry.notes == ""

    def test_second_entry_replaces_whole_record(self, session, user_id):
        first = sleep_service.record_sleep(
            session, user_id, _night(MONDAY, 480, notes="first", rem_percent=30)
        )
        second = sleep_service.record_sleep(session, user_id, _night(MONDAY, 390))

        assert second.id == first.id
        assert second.duration_minutes == 390
        assert second.rem_percent == 22
        assert second.notes == ""
        assert len(session.exec(select(SleepEntry)).all()) == 1

    def test_fractional_percents_stored(self, session, user_id):
        entry = sleep_service.record_sleep(session, user_id, _night(
            MONDAY, rested_percent=72.5, rem_percent=20.5, deep_sleep_percent=18.25,
        ))
        session.expire_all()

        stored = sleep_service.get_for_day(session, user_id, MONDAY)
        assert stored.id == entry.id
        assert stored.rested_percent == 72.5
        assert stored.rem_percent == 20.5
        assert stored.deep_sleep_percent == 18.25

    def test_percent_out_of_range_rejected(self, session, user_id):
        data = SleepEntryCreate.model_construct(
            day=MONDAY, duration_minutes=480, rested_percent=120,
            rem_percent=20, deep_sleep_percent=20, notes=None,
        )
        with pytest.raises(ValidationError) as exc_info:
            sleep_service.record_sleep(session, user_id, data)
        assert exc_info.value.field == "rested_percent"

    def test_negative_duration_rejected(self, session, user_id):
        data = SleepEntryCreate.model_construct(
            day=MONDAY, duration_minutes=-5, rested_percent=80,
            rem_percent=20, deep_sleep_percent=20, notes=None,
        )
        with pytest.raises(ValidationError):
            sleep_service.record_sleep(session, user_id, data)


class TestEditAndDelete:
    def test_partial_update(self, session, user_id):
        entry = sleep_service.record_sleep(session, user_id, _night(MONDAY, notes="keep"))
        updated = sleep_service.update_entry(
            session, entry.id, user_id, SleepEntryUpdate(duration_minutes=420)
        )

        assert updated.duration_minutes == 420
        assert updated.notes == "keep"
        assert updated.rested_percent == 80

    def test_partial_update_fractional_percent(self, session, user_id):
        entry = sleep_service.record_sleep(session, user_id, _night(MONDAY))
        updated = sleep_service.update_entry(
            session, entry.id, user_id, SleepEntryUpdate(rem_percent=21.5)
        )

        assert updated.rem_percent == 21.5
        assert updated.rested_percent == 80

    def test_update_other_users_entry(self, session, user_id, other_user):
        entry = sleep_service.record_sleep(session, user_id, _night(MONDAY))
        with pytest.raises(NotFoundError):
            sleep_service.update_entry(
                session, entry.id, str(other_user.id), SleepEntryUpdate(duration_minutes=1)
            )

    def test_delete(self, session, user_id):
        entry = sleep_service.record_sleep(session, user_id, _night(MONDAY))
        sleep_service.delete_entry(session, entry.id, user_id)

        assert sleep_service.get_for_day(session, user_id, MONDAY) is None

    def test_delete_unknown(self, session, user_id):
        with pytest.raises(NotFoundError):
            sleep_service.delete_entry(session, uuid4(), user_id)


class TestLatest:
    def test_onboarding_when_empty(self, session, user_id):
        latest = sleep_service.get_latest(session, user_id)

        assert latest.entry is None
        assert latest.suggestion == ONBOARDING_SUGGESTION

    def test_most_recent_day_wins(self, session, user_id):
        sleep_service.record_sleep(session, user_id, _night(WEDNESDAY, 425))
        sleep_service.record_sleep(session, user_id, _night(MONDAY, 480))

        latest = sleep_service.get_latest(session, user_id)
        assert latest.entry.day == WEDNESDAY
        assert latest.entry.duration_formatted == "7h 05m"
        assert latest.suggestion in SLEEP_SUGGESTIONS


class TestSleepWeek:
    def test_week_flags_against_goal(self, session, user_id):
        sleep_service.record_sleep(session, user_id, _night(MONDAY, 480))
        sleep_service.record_sleep(session, user_id, _night(WEDNESDAY, 420))

        week = sleep_service.get_week(session, user_id, today=WEDNESDAY)

        assert week.start_date == SUNDAY
        assert week.goal_hours == 8
        assert [e.duration_minutes for e in week.entries] == [0, 480, 0, 420, 0, 0, 0]
        assert [e.goal_met for e in week.entries][:4] == [False, True, False, False]
        assert week.goal_met_count == 1
        assert week.eligible_day_count == 4
        assert week.weekly_goal_met is False
        assert week.entries[1].entry.duration_formatted == "8h 00m"
        assert week.entries[0].entry is None

    def test_lower_goal(self, session, user_id):
        goal_service.update_goal_by_type(session, user_id, GoalType.SLEEP, 7)
        for day in (SUNDAY, MONDAY, TUESDAY):
            sleep_service.record_sleep(session, user_id, _night(day, 420))

        week = sleep_service.get_week(session, user_id, today=TUESDAY)
        assert week.weekly_goal_met is True

    def test_week_loads_entries_once(self, session, user_id, monkeypatch):
        sleep_service.record_sleep(session, user_id, _night(MONDAY, 480))
        calls = []
        original = log_store.find_in_range

        def _counting(*args, **kwargs):
            calls.append(args[1])
            return original(*args, **kwargs)

        monkeypatch.setattr(log_store, "find_in_range", _counting)
        week = sleep_service.get_week(session, user_id, today=WEDNESDAY)

        assert calls == [SleepEntry]
        assert week.entries[1].entry.day == MONDAY
        assert week.entries[1].entry.rested_percent == 80
