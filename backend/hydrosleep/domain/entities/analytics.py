"""
Modèles dérivés de l'analytics (jamais persistés).
Recalculés à chaque requête à partir des journaux d'eau et de sommeil.
"""
from sqlmodel import SQLModel
from typing import List, Optional
from datetime import date
from uuid import UUID
from enum import Enum

from .user import UserRead
from .goal import GoalRead


class Metric(str, Enum):
    """Métriques suivies par jour"""
    WATER = "water"
    SLEEP = "sleep"


class SeriesPoint(SQLModel):
    """Valeur d'un jour calendaire (unités stockées : ml ou minutes)"""
    day: date
    value: float
    label: str
    record_id: Optional[UUID] = None


class WeeklySeries(SQLModel):
    """Série ordonnée, index 0 = premier jour de la fenêtre"""
    metric: Metric
    start: date
    points: List[SeriesPoint]

    @property
    def values(self) -> List[float]:
        return [p.value for p in self.points]

    @property
    def labels(self) -> List[str]:
        return [p.label for p in self.points]

    def __len__(self) -> int:
        return len(self.points)


class GoalEvaluation(SQLModel):
    """Résultat de l'évaluation d'une série contre un seuil journalier"""
    per_day_met: List[bool]
    met_count: int
    eligible_day_count: int

    @property
    def weekly_goal_met(self) -> bool:
        # Une fenêtre sans jour écoulé n'est jamais "atteinte"
        return self.eligible_day_count > 0 and self.met_count == self.eligible_day_count


class SleepSummary(SQLModel):
    days: List[str]
    hours: List[float]
    average: float
    goal_hours: float
    goal_met_count: int


class WaterSummary(SQLModel):
    days: List[str]
    liters: List[float]
    daily_goal_liters: float
    goal_met_count: int


class GoalsSummary(SQLModel):
    total_goals: int
    completed_today: int
    weekly_completion_rate_percent: int


class AnalyticsSummary(SQLModel):
    """Réponse du résumé analytics"""
    sleep: SleepSummary
    water: WaterSummary
    goals: GoalsSummary


class DashboardWater(SQLModel):
    today_amount_ml: int
    daily_goal_ml: int
    progress: float
    weekly_goal_met: bool
    weekly_goal_met_count: int


class DashboardSleep(SQLModel):
    day: date
    duration_minutes: int
    duration_formatted: str
    rested_percent: float
    rem_percent: float
    deep_sleep_percent: float


class DashboardSummary(SQLModel):
    """Écran d'accueil : profil, eau du jour, dernière nuit, objectifs"""
    user: UserRead
    water: DashboardWater
    sleep: Optional[DashboardSleep]
    goals: List[GoalRead]
