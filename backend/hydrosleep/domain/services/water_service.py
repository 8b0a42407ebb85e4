"""
Service de l'eau : ajout (upsert par jour), eau du jour, semaine, correction.
"""
import logging
from sqlmodel import Session, select
from uuid import UUID
from datetime import date, datetime
from typing import Optional, List

from hydrosleep.core.errors import NotFoundError, ValidationError
from hydrosleep.domain.entities import (
    WaterLog, GoalType, Metric,
    WaterLogRecorded, WaterToday, WaterWeek, WaterWeekEntry,
)
from hydrosleep.domain.services import log_store
from hydrosleep.domain.services.calendar import DayLike, start_of_week, to_calendar_day
from hydrosleep.domain.services.goal_service import goal_service, goal_value
from hydrosleep.domain.services.goal_evaluator import evaluate
from hydrosleep.domain.services.series_builder import build_series
from hydrosleep.domain.services.units import liters_to_ml, progress_percent

logger = logging.getLogger(__name__)


class WaterService:

    # ---- Store ----

    def record_water(
        self,
        session: Session,
        user_id: str,
        amount_ml: int,
        day: Optional[DayLike] = None,
        today: Optional[date] = None,
    ) -> WaterLog:
        """Ajoute `amount_ml` au cumul du jour (créé au premier ajout)."""
        if amount_ml is None or amount_ml <= 0:
            raise ValidationError("Amount must be a positive number", field="amount_ml")

        log_day = to_calendar_day(day) if day is not None else (today or date.today())
        uid = UUID(str(user_id))

        record = log_store.upsert_by_day(
            session,
            WaterLog,
            uid,
            log_day,
            values={"amount_ml": amount_ml},
            on_conflict=lambda excluded: {"amount_ml": WaterLog.amount_ml + excluded.amount_ml},
            apply_existing=lambda existing: setattr(existing, "amount_ml", existing.amount_ml + amount_ml),
        )
        logger.info(f"Eau +{amount_ml} ml pour user {user_id} le {log_day} (total {record.amount_ml} ml)")
        return record

    def find_in_range(self, session: Session, user_id: str, start: date, end_exclusive: date) -> List[WaterLog]:
        return log_store.find_in_range(session, WaterLog, UUID(str(user_id)), start, end_exclusive)

    def get_for_day(self, session: Session, user_id: str, day: date) -> Optional[WaterLog]:
        return log_store.get_for_day(session, WaterLog, UUID(str(user_id)), day)

    def update_log(self, session: Session, log_id: UUID, user_id: str, amount_ml: int) -> WaterLog:
        """Remplace le cumul d'une entrée existante (correction manuelle)."""
        if amount_ml is None or amount_ml < 0:
            raise ValidationError("Amount must be a non-negative number", field="amount_ml")

        log = session.exec(
            select(WaterLog).where(
                WaterLog.id == log_id,
                WaterLog.user_id == UUID(str(user_id)),
            )
        ).first()
        if not log:
            raise NotFoundError("Water log not found")

        log.amount_ml = amount_ml
        log.updated_at = datetime.utcnow()
        session.add(log)
        session.commit()
        session.refresh(log)
        return log

    # ---- Vues ----

    def daily_goal_ml(self, session: Session, user_id: str) -> int:
        goals = goal_service.list_goals(session, user_id)
        return liters_to_ml(goal_value(goals, GoalType.WATER))

    def record_with_progress(
        self,
        session: Session,
        user_id: str,
        amount_ml: int,
        day: Optional[DayLike] = None,
        today: Optional[date] = None,
    ) -> WaterLogRecorded:
        log = self.record_water(session, user_id, amount_ml, day=day, today=today)
        goal_ml = self.daily_goal_ml(session, user_id)
        return WaterLogRecorded(
            id=log.id,
            day=log.day,
            amount_ml=log.amount_ml,
            daily_goal_ml=goal_ml,
            progress=progress_percent(log.amount_ml, goal_ml),
        )

    def get_today(self, session: Session, user_id: str, today: Optional[date] = None) -> WaterToday:
        today = today or date.today()
        log = self.get_for_day(session, user_id, today)
        goal_ml = self.daily_goal_ml(session, user_id)
        amount = log.amount_ml if log else 0
        return WaterToday(
            day=today,
            amount_ml=amount,
            daily_goal_ml=goal_ml,
            progress=progress_percent(amount, goal_ml),
        )

    def get_week(
        self,
        session: Session,
        user_id: str,
        week_start: Optional[DayLike] = None,
        today: Optional[date] = None,
    ) -> WaterWeek:
        today = today or date.today()
        start = to_calendar_day(week_start) if week_start is not None else start_of_week(today)

        series = build_series(session, user_id, start, Metric.WATER)
        goal_ml = self.daily_goal_ml(session, user_id)
        evaluation = evaluate(series, goal_ml, today)

        entries = [
            WaterWeekEntry(
                day=point.day,
                label=point.label,
                amount_ml=int(point.value),
                goal_met=evaluation.per_day_met[i],
                id=point.record_id,
            )
            for i, point in enumerate(series.points)
        ]

        return WaterWeek(
            start_date=start,
            daily_goal_ml=goal_ml,
            daily_goal_liters=goal_ml / 1000,
            weekly_goal_met=evaluation.weekly_goal_met,
            goal_met_count=evaluation.met_count,
            eligible_day_count=evaluation.eligible_day_count,
            entries=entries,
        )


water_service = WaterService()
