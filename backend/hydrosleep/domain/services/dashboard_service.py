"""
Service du tableau de bord : profil, eau du jour, dernière nuit et objectifs.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Session

from hydrosleep.domain.entities import (
    DashboardSummary, DashboardWater, DashboardSleep, GoalRead, GoalType, Metric, UserRead,
)
from hydrosleep.domain.services.auth_service import auth_service
from hydrosleep.domain.services.calendar import start_of_week, to_calendar_day
from hydrosleep.domain.services.goal_evaluator import evaluate
from hydrosleep.domain.services.goal_service import goal_service, goal_value
from hydrosleep.domain.services.series_builder import build_series
from hydrosleep.domain.services.sleep_service import sleep_service, format_duration
from hydrosleep.domain.services.units import liters_to_ml, progress_percent


class DashboardService:

    def summary(self, session: Session, user_id: str, now: Optional[datetime] = None) -> DashboardSummary:
        user = auth_service.get_user(session, user_id)
        today = to_calendar_day(now or datetime.now())

        goals = goal_service.list_goals(session, user_id)
        daily_goal_ml = liters_to_ml(goal_value(goals, GoalType.WATER))

        week = build_series(session, user_id, start_of_week(today), Metric.WATER)
        evaluation = evaluate(week, daily_goal_ml, today)
        today_ml = next((int(p.value) for p in week.points if p.day == today), 0)

        latest = sleep_service.get_latest_entry(session, user_id)
        sleep = None
        if latest:
            sleep = DashboardSleep(
                day=latest.day,
                duration_minutes=latest.duration_minutes,
                duration_formatted=format_duration(latest.duration_minutes),
                rested_percent=latest.rested_percent,
                rem_percent=latest.rem_percent,
                deep_sleep_percent=latest.deep_sleep_percent,
            )

        return DashboardSummary(
            user=UserRead.model_validate(user),
            water=DashboardWater(
                today_amount_ml=today_ml,
                daily_goal_ml=daily_goal_ml,
                progress=progress_percent(today_ml, daily_goal_ml),
                weekly_goal_met=evaluation.weekly_goal_met,
                weekly_goal_met_count=evaluation.met_count,
            ),
            sleep=sleep,
            goals=[GoalRead.model_validate(goal) for goal in goals],
        )


dashboard_service = DashboardService()
