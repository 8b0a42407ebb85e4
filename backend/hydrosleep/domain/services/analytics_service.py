"""
Service d'Analytics - Domain Layer
Agrège les journaux d'eau et de sommeil en séries hebdomadaires, moyennes
et taux de complétion des objectifs.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlmodel import Session

from hydrosleep.core.errors import ValidationError
from hydrosleep.core.settings import get_settings
from hydrosleep.domain.entities import (
    AnalyticsSummary, GoalsSummary, GoalType, Metric, SeriesPoint,
    SleepSummary, WaterSummary, WeeklySeries,
)
from hydrosleep.domain.services.calendar import DAYS_PER_WEEK, start_of_week, to_calendar_day
from hydrosleep.domain.services.goal_evaluator import evaluate
from hydrosleep.domain.services.goal_service import goal_service, goal_value
from hydrosleep.domain.services.series_builder import build_series
from hydrosleep.domain.services.sleep_service import sleep_service
from hydrosleep.domain.services.units import (
    hours_to_minutes, liters_to_ml, minutes_to_hours, ml_to_liters, round_half_up,
)
from hydrosleep.domain.services.water_service import water_service

logger = logging.getLogger(__name__)

TRACKED_METRICS = 2  # eau + sommeil


def parse_range(value: Optional[str]) -> int:
    """'7d' / '14' -> nombre de jours (7 par défaut)."""
    if value is None or value == "":
        return DAYS_PER_WEEK
    digits = value.strip().lower().rstrip("d")
    if not digits.isdigit():
        raise ValidationError(f"Invalid range: {value!r}", field="range")
    return int(digits)


def range_start(today: date, range_days: int) -> date:
    """
    Premier jour de la fenêtre analysée.

    7 jours = la semaine calendaire en cours (alignée sur le dimanche),
    les jours à venir sont tronqués ensuite. Autre durée = fenêtre glissante
    se terminant aujourd'hui.
    """
    if range_days == DAYS_PER_WEEK:
        return start_of_week(today)
    return today - timedelta(days=range_days - 1)


def _convert(series: WeeklySeries, convert) -> WeeklySeries:
    return WeeklySeries(
        metric=series.metric,
        start=series.start,
        points=[
            SeriesPoint(day=p.day, value=convert(p.value), label=p.label, record_id=p.record_id)
            for p in series.points
        ],
    )


def _average_non_zero(values: List[float]) -> float:
    # Les jours sans sommeil saisi ne comptent pas au dénominateur
    logged = [v for v in values if v > 0]
    if not logged:
        return 0.0
    return round_half_up(sum(logged) / len(logged), 2)


class AnalyticsService:
    """Résumé analytics d'un utilisateur, recalculé à chaque appel"""

    def summarize(
        self,
        session: Session,
        user_id: str,
        range_days: int = DAYS_PER_WEEK,
        now: Optional[datetime] = None,
    ) -> AnalyticsSummary:
        """
        Construit le résumé analytics sur `range_days` jours.

        Args:
            session: Session de base de données
            user_id: Utilisateur authentifié
            range_days: Taille de la fenêtre (7 = semaine calendaire en cours)
            now: Instant d'évaluation (défaut : maintenant, heure locale)

        Returns:
            AnalyticsSummary avec séries, moyennes et taux de complétion.
            Toute erreur du stockage interrompt le calcul : pas de résumé partiel.
        """
        max_days = get_settings().ANALYTICS_MAX_RANGE_DAYS
        if not 1 <= range_days <= max_days:
            raise ValidationError(f"Range must be between 1 and {max_days} days", field="range")

        today = to_calendar_day(now or datetime.now())
        start = range_start(today, range_days)

        goals = goal_service.list_goals(session, user_id)
        water_goal_liters = goal_value(goals, GoalType.WATER)
        sleep_goal_hours = goal_value(goals, GoalType.SLEEP)

        water_raw = build_series(session, user_id, start, Metric.WATER, length=range_days)
        sleep_raw = build_series(session, user_id, start, Metric.SLEEP, length=range_days)

        water = _convert(water_raw, ml_to_liters)
        sleep = _convert(sleep_raw, minutes_to_hours)

        # Les tableaux de sortie s'arrêtent à aujourd'hui
        elapsed_water = [p for p in water.points if p.day <= today]
        elapsed_sleep = [p for p in sleep.points if p.day <= today]
        sleep_hours = [p.value for p in elapsed_sleep]

        water_eval = evaluate(water, water_goal_liters, today)
        sleep_eval = evaluate(sleep, sleep_goal_hours, today)

        completed_today = self._completed_today(
            session, user_id, today, water_goal_liters, sleep_goal_hours
        )

        elapsed_days = water_eval.eligible_day_count
        if elapsed_days > 0:
            rate = round_half_up(
                100 * (water_eval.met_count + sleep_eval.met_count) / (TRACKED_METRICS * elapsed_days)
            )
        else:
            rate = 0

        logger.debug(
            f"Analytics user {user_id}: {start} +{range_days}j, "
            f"eau {water_eval.met_count}/{elapsed_days}, sommeil {sleep_eval.met_count}/{elapsed_days}"
        )

        return AnalyticsSummary(
            sleep=SleepSummary(
                days=[p.label for p in elapsed_sleep],
                hours=sleep_hours,
                average=_average_non_zero(sleep_hours),
                goal_hours=sleep_goal_hours,
                goal_met_count=sleep_eval.met_count,
            ),
            water=WaterSummary(
                days=[p.label for p in elapsed_water],
                liters=[p.value for p in elapsed_water],
                daily_goal_liters=water_goal_liters,
                goal_met_count=water_eval.met_count,
            ),
            goals=GoalsSummary(
                total_goals=len(goals),
                completed_today=completed_today,
                weekly_completion_rate_percent=int(rate),
            ),
        )

    def _completed_today(
        self,
        session: Session,
        user_id: str,
        today: date,
        water_goal_liters: float,
        sleep_goal_hours: float,
    ) -> int:
        """Objectifs eau/sommeil atteints aujourd'hui, sur les valeurs brutes du jour."""
        completed = 0
        water_log = water_service.get_for_day(session, user_id, today)
        if water_log and water_log.amount_ml >= liters_to_ml(water_goal_liters):
            completed += 1
        sleep_entry = sleep_service.get_for_day(session, user_id, today)
        if sleep_entry and sleep_entry.duration_minutes >= hours_to_minutes(sleep_goal_hours):
            completed += 1
        return completed


analytics_service = AnalyticsService()
