"""
Initialisation des entités du domaine
Résout les imports circulaires entre les modèles
"""

# Import des modèles dans l'ordre correct pour éviter les imports circulaires
from .user import User, UserCreate, UserRead, UserUpdate, PasswordChange, AvatarUpdate
from .goal import Goal, GoalType, GoalCreate, GoalUpdate, GoalValueUpdate, GoalRead
from .water_log import (
    WaterLog, WaterLogCreate, WaterLogUpdate, WaterLogRead, WaterLogRecorded,
    WaterToday, WaterWeek, WaterWeekEntry,
)
from .sleep_entry import (
    SleepEntry, SleepEntryCreate, SleepEntryUpdate, SleepEntryRead,
    SleepLatest, SleepWeek, SleepWeekEntry,
)
from .analytics import (
    Metric, SeriesPoint, WeeklySeries, GoalEvaluation, AnalyticsSummary,
    SleepSummary, WaterSummary, GoalsSummary, DashboardSummary, DashboardWater, DashboardSleep,
)

__all__ = [
    "User", "UserCreate", "UserRead", "UserUpdate", "PasswordChange", "AvatarUpdate",
    "Goal", "GoalType", "GoalCreate", "GoalUpdate", "GoalValueUpdate", "GoalRead",
    "WaterLog", "WaterLogCreate", "WaterLogUpdate", "WaterLogRead", "WaterLogRecorded",
    "WaterToday", "WaterWeek", "WaterWeekEntry",
    "SleepEntry", "SleepEntryCreate", "SleepEntryUpdate", "SleepEntryRead",
    "SleepLatest", "SleepWeek", "SleepWeekEntry",
    "Metric", "SeriesPoint", "WeeklySeries", "GoalEvaluation", "AnalyticsSummary",
    "SleepSummary", "WaterSummary", "GoalsSummary", "DashboardSummary", "DashboardWater", "DashboardSleep",
]
