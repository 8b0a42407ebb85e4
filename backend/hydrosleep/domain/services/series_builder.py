"""
Construction des séries journalières (eau ou sommeil) sur une fenêtre de jours.
"""
import logging
from datetime import timedelta
from typing import Dict, Iterable, Type
from uuid import UUID

from sqlmodel import Session, SQLModel

from hydrosleep.core.errors import ValidationError
from hydrosleep.domain.entities import Metric, SeriesPoint, SleepEntry, WaterLog, WeeklySeries
from hydrosleep.domain.services import log_store
from hydrosleep.domain.services.calendar import DAYS_PER_WEEK, DayLike, day_label, days_in_range, to_calendar_day

logger = logging.getLogger(__name__)

# Store et champ de valeur (unités stockées) par métrique
METRIC_STORES: Dict[Metric, Type[SQLModel]] = {
    Metric.WATER: WaterLog,
    Metric.SLEEP: SleepEntry,
}
METRIC_FIELDS: Dict[Metric, str] = {
    Metric.WATER: "amount_ml",
    Metric.SLEEP: "duration_minutes",
}


def build_series(
    session: Session,
    user_id: str,
    week_start: DayLike,
    metric: Metric,
    length: int = DAYS_PER_WEEK,
) -> WeeklySeries:
    """
    Série de `length` points à partir de `week_start`, un par jour calendaire.

    Les jours sans entrée valent 0. Les valeurs restent dans les unités
    stockées (ml pour l'eau, minutes pour le sommeil) ; la conversion en
    litres/heures se fait côté agrégation.
    """
    if length < 1:
        raise ValidationError("Series length must be at least 1 day", field="range")

    metric = Metric(metric)
    days = days_in_range(to_calendar_day(week_start), length)
    records = log_store.find_in_range(
        session, METRIC_STORES[metric], UUID(str(user_id)), days[0], days[-1] + timedelta(days=1)
    )
    return series_from_records(records, days[0], metric, length)


def series_from_records(
    records: Iterable[SQLModel],
    week_start: DayLike,
    metric: Metric,
    length: int = DAYS_PER_WEEK,
) -> WeeklySeries:
    """Même série que build_series, à partir d'entrées déjà chargées (hors fenêtre ignorées)."""
    if length < 1:
        raise ValidationError("Series length must be at least 1 day", field="range")

    metric = Metric(metric)
    field = METRIC_FIELDS[metric]
    days = days_in_range(to_calendar_day(week_start), length)
    by_day = {record.day: record for record in records}

    points = []
    for day in days:
        record = by_day.get(day)
        points.append(SeriesPoint(
            day=day,
            value=getattr(record, field) if record else 0,
            label=day_label(day),
            record_id=record.id if record else None,
        ))

    return WeeklySeries(metric=metric, start=days[0], points=points)
