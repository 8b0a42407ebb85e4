"""
Découpage calendaire : début de semaine et jours d'une fenêtre.

Tout est calculé sur le jour calendaire local du process : un horodatage
portant un fuseau est d'abord converti en heure locale. Deux clients dans des
fuseaux différents peuvent donc voir des bornes de semaine différentes.
"""
from datetime import date, datetime, timedelta
from typing import List, Union

from hydrosleep.core.errors import ValidationError

# Table des jours indexée Dimanche = 0
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
SUNDAY = 0
DAYS_PER_WEEK = 7

DayLike = Union[date, datetime, str]


def weekday_index(day: date) -> int:
    """Index du jour dans DAY_NAMES (date.weekday() commence au lundi)."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def day_label(day: date) -> str:
    return DAY_NAMES[weekday_index(day)]


def _local_date(value: datetime) -> date:
    # Un datetime naif est deja en heure locale
    if value.tzinfo is None:
        return value.date()
    return value.astimezone().date()


def to_calendar_day(value: DayLike) -> date:
    """Normalise une date, un datetime ou une chaîne ISO en jour calendaire."""
    if isinstance(value, datetime):
        return _local_date(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}", field="date")
        return _local_date(parsed)
    raise ValidationError(f"Invalid date: {value!r}", field="date")


def start_of_week(reference: DayLike, week_start: int = SUNDAY) -> date:
    """
    Premier jour de la semaine contenant `reference`.

    Recule depuis le jour de `reference` jusqu'au jour d'index `week_start`
    (inclus : un dimanche est son propre début de semaine).
    """
    if not 0 <= week_start < DAYS_PER_WEEK:
        raise ValidationError("week_start must be between 0 and 6", field="week_start")
    day = to_calendar_day(reference)
    offset = (weekday_index(day) - week_start) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


def days_in_range(start: DayLike, count: int) -> List[date]:
    first = to_calendar_day(start)
    return [first + timedelta(days=i) for i in range(count)]


def days_in_week(start: DayLike) -> List[date]:
    return days_in_range(start, DAYS_PER_WEEK)
