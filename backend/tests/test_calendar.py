"""
Tests pour le decoupage calendaire (semaine commencant le dimanche).
"""
import pytest
from datetime import date, datetime, timezone

from hydrosleep.core.errors import ValidationError
from hydrosleep.domain.services.calendar import (
    DAY_NAMES,
    day_label,
    days_in_range,
    days_in_week,
    start_of_week,
    to_calendar_day,
    weekday_index,
)

from conftest import SUNDAY, MONDAY, WEDNESDAY, SATURDAY


class TestWeekdayIndex:
    def test_sunday_is_zero(self):
        assert weekday_index(SUNDAY) == 0
        assert day_label(SUNDAY) == "Sun"

    def test_saturday_is_six(self):
        assert weekday_index(SATURDAY) == 6
        assert day_label(SATURDAY) == "Sat"

    def test_labels_follow_day_names(self):
        labels = [day_label(d) for d in days_in_week(SUNDAY)]
        assert labels == list(DAY_NAMES)


class TestStartOfWeek:
    def test_midweek_goes_back_to_sunday(self):
        assert start_of_week(WEDNESDAY) == SUNDAY

    def test_sunday_is_its_own_start(self):
        assert start_of_week(SUNDAY) == SUNDAY

    def test_saturday_belongs_to_previous_sunday(self):
        assert start_of_week(SATURDAY) == SUNDAY

    def test_accepts_datetime_and_iso_string(self):
        assert start_of_week(datetime(2024, 1, 10, 23, 59)) == SUNDAY
        assert start_of_week("2024-01-10") == SUNDAY

    def test_monday_week_start(self):
        assert start_of_week(WEDNESDAY, week_start=1) == MONDAY
        # Le dimanche appartient alors a la semaine commencee le lundi precedent
        assert start_of_week(SUNDAY, week_start=1) == date(2024, 1, 1)

    def test_invalid_week_start(self):
        with pytest.raises(ValidationError):
            start_of_week(WEDNESDAY, week_start=7)


class TestToCalendarDay:
    def test_date_passthrough(self):
        assert to_calendar_day(MONDAY) == MONDAY

    def test_datetime_truncated(self):
        assert to_calendar_day(datetime(2024, 1, 8, 6, 30)) == MONDAY

    def test_iso_string_with_z_suffix(self, local_tz):
        local_tz("UTC")
        assert to_calendar_day("2024-01-10T08:15:00Z") == WEDNESDAY

    def test_utc_timestamp_uses_local_day(self, local_tz):
        # 21h UTC le samedi = 6h le dimanche a Tokyo
        local_tz("Asia/Tokyo")
        assert to_calendar_day("2024-01-13T21:00:00Z") == date(2024, 1, 14)
        assert start_of_week("2024-01-13T21:00:00Z") == date(2024, 1, 14)

    def test_aware_datetime_uses_local_day(self, local_tz):
        local_tz("America/New_York")
        moment = datetime(2024, 1, 8, 2, 0, tzinfo=timezone.utc)
        assert to_calendar_day(moment) == SUNDAY
        assert start_of_week(moment) == SUNDAY

    def test_naive_datetime_not_shifted(self, local_tz):
        local_tz("Asia/Tokyo")
        assert to_calendar_day(datetime(2024, 1, 13, 23, 30)) == SATURDAY

    def test_malformed_string(self):
        with pytest.raises(ValidationError) as exc_info:
            to_calendar_day("not-a-date")
        assert exc_info.value.field == "date"

    def test_unsupported_type(self):
        with pytest.raises(ValidationError):
            to_calendar_day(20240110)


class TestDaysInRange:
    def test_week_has_seven_consecutive_days(self):
        days = days_in_week(SUNDAY)
        assert len(days) == 7
        assert days[0] == SUNDAY
        assert days[-1] == SATURDAY

    def test_crosses_month_boundary(self):
        days = days_in_week(date(2024, 1, 28))
        assert days[-1] == date(2024, 2, 3)

    def test_leap_day_included(self):
        days = days_in_week(date(2024, 2, 25))
        assert date(2024, 2, 29) in days
        assert days[-1] == date(2024, 3, 2)

    def test_custom_length(self):
        assert len(days_in_range(SUNDAY, 14)) == 14
