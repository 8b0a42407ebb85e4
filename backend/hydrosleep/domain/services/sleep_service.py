"""
Service du sommeil : saisie (remplacement par jour), dernière nuit, semaine, édition.
"""
import logging
import random
from sqlmodel import Session, select
from uuid import UUID
from datetime import date, datetime, timedelta
from typing import Optional, List

from hydrosleep.core.errors import NotFoundError, ValidationError
from hydrosleep.domain.entities import (
    SleepEntry, SleepEntryCreate, SleepEntryUpdate, SleepEntryRead,
    SleepLatest, SleepWeek, SleepWeekEntry, GoalType, Metric,
)
from hydrosleep.domain.services import log_store
from hydrosleep.domain.services.calendar import DAYS_PER_WEEK, DayLike, start_of_week, to_calendar_day
from hydrosleep.domain.services.goal_service import goal_service, goal_value
from hydrosleep.domain.services.goal_evaluator import evaluate
from hydrosleep.domain.services.series_builder import series_from_records
from hydrosleep.domain.services.units import hours_to_minutes

logger = logging.getLogger(__name__)

SLEEP_SUGGESTIONS = [
    "A consistent sleep schedule helps your body recover.",
    "Try to avoid screens 30 minutes before bed for better sleep quality.",
    "Keep your bedroom cool and dark for optimal rest.",
    "Regular exercise can improve your sleep quality.",
    "Avoid caffeine in the afternoon for better sleep.",
    "A bedtime routine can signal your body it's time to sleep.",
    "Consider limiting naps to 20-30 minutes during the day.",
]
ONBOARDING_SUGGESTION = "Start tracking your sleep for personalized insights!"

PERCENT_FIELDS = ("rested_percent", "rem_percent", "deep_sleep_percent")


def format_duration(minutes: int) -> str:
    """450 -> '7h 30m'"""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins:02d}m"


def to_read(entry: SleepEntry) -> SleepEntryRead:
    return SleepEntryRead(
        id=entry.id,
        day=entry.day,
        duration_minutes=entry.duration_minutes,
        duration_formatted=format_duration(entry.duration_minutes),
        rested_percent=entry.rested_percent,
        rem_percent=entry.rem_percent,
        deep_sleep_percent=entry.deep_sleep_percent,
        notes=entry.notes or "",
    )


def _validate_fields(values: dict) -> None:
    duration = values.get("duration_minutes")
    if duration is not None and duration < 0:
        raise ValidationError("Duration must be a non-negative number", field="duration_minutes")
    for field in PERCENT_FIELDS:
        percent = values.get(field)
        if percent is not None and not 0 <= percent <= 100:
            raise ValidationError(f"{field} must be between 0 and 100", field=field)


class SleepService:

    # ---- Store ----

    def record_sleep(self, session: Session, user_id: str, data: SleepEntryCreate) -> SleepEntry:
        """Crée ou remplace intégralement l'entrée du jour (pas de fusion)."""
        if data.day is None:
            raise ValidationError("Valid date is required", field="day")
        values = {
            "duration_minutes": data.duration_minutes,
            "rested_percent": data.rested_percent,
            "rem_percent": data.rem_percent,
            "deep_sleep_percent": data.deep_sleep_percent,
            "notes": data.notes or "",
        }
        for field, value in values.items():
            if value is None:
                raise ValidationError(f"{field} is required", field=field)
        _validate_fields(values)

        entry_day = to_calendar_day(data.day)

        def _replace(existing: SleepEntry) -> None:
            for key, value in values.items():
                setattr(existing, key, value)

        record = log_store.upsert_by_day(
            session,
            SleepEntry,
            UUID(str(user_id)),
            entry_day,
            values=values,
            on_conflict=lambda excluded: {key: getattr(excluded, key) for key in values},
            apply_existing=_replace,
        )
        logger.info(f"Sommeil enregistré pour user {user_id} le {entry_day} ({record.duration_minutes} min)")
        return record

    def find_in_range(self, session: Session, user_id: str, start: date, end_exclusive: date) -> List[SleepEntry]:
        return log_store.find_in_range(session, SleepEntry, UUID(str(user_id)), start, end_exclusive)

    def get_for_day(self, session: Session, user_id: str, day: date) -> Optional[SleepEntry]:
        return log_store.get_for_day(session, SleepEntry, UUID(str(user_id)), day)

    def get(self, session: Session, entry_id: UUID, user_id: str) -> SleepEntry:
        entry = session.exec(
            select(SleepEntry).where(
                SleepEntry.id == entry_id,
                SleepEntry.user_id == UUID(str(user_id)),
            )
        ).first()
        if not entry:
            raise NotFoundError("Sleep entry not found")
        return entry

    def update_entry(
        self, session: Session, entry_id: UUID, user_id: str, updates: SleepEntryUpdate
    ) -> SleepEntry:
        entry = self.get(session, entry_id, user_id)
        values = updates.model_dump(exclude_unset=True, exclude_none=True)
        _validate_fields(values)

        for field, value in values.items():
            setattr(entry, field, value)

        entry.updated_at = datetime.utcnow()
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    def delete_entry(self, session: Session, entry_id: UUID, user_id: str) -> dict:
        entry = self.get(session, entry_id, user_id)
        session.delete(entry)
        session.commit()
        return {"message": "Sleep entry deleted successfully"}

    def get_latest_entry(self, session: Session, user_id: str) -> Optional[SleepEntry]:
        return session.exec(
            select(SleepEntry)
            .where(SleepEntry.user_id == UUID(str(user_id)))
            .order_by(SleepEntry.day.desc())
            .limit(1)
        ).first()

    # ---- Vues ----

    def get_latest(self, session: Session, user_id: str) -> SleepLatest:
        entry = self.get_latest_entry(session, user_id)
        if not entry:
            return SleepLatest(entry=None, suggestion=ONBOARDING_SUGGESTION)
        return SleepLatest(entry=to_read(entry), suggestion=random.choice(SLEEP_SUGGESTIONS))

    def get_week(
        self,
        session: Session,
        user_id: str,
        week_start: Optional[DayLike] = None,
        today: Optional[date] = None,
    ) -> SleepWeek:
        today = today or date.today()
        start = to_calendar_day(week_start) if week_start is not None else start_of_week(today)

        week_entries = self.find_in_range(session, user_id, start, start + timedelta(days=DAYS_PER_WEEK))
        series = series_from_records(week_entries, start, Metric.SLEEP)
        goal_hours = goal_value(goal_service.list_goals(session, user_id), GoalType.SLEEP)
        evaluation = evaluate(series, hours_to_minutes(goal_hours), today)

        entries_by_id = {entry.id: entry for entry in week_entries}

        entries = []
        for i, point in enumerate(series.points):
            entry = entries_by_id.get(point.record_id)
            entries.append(SleepWeekEntry(
                day=point.day,
                label=point.label,
                duration_minutes=int(point.value),
                goal_met=evaluation.per_day_met[i],
                entry=to_read(entry) if entry else None,
            ))

        return SleepWeek(
            start_date=start,
            goal_hours=goal_hours,
            weekly_goal_met=evaluation.weekly_goal_met,
            goal_met_count=evaluation.met_count,
            eligible_day_count=evaluation.eligible_day_count,
            entries=entries,
        )


sleep_service = SleepService()
