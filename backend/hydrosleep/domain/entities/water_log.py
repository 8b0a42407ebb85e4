"""
Entité WaterLog - Domain Layer
Eau cumulée d'un utilisateur sur un jour calendaire, une entrée par utilisateur par jour.
"""
from sqlmodel import SQLModel, Field, Relationship, UniqueConstraint
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID, uuid4
from datetime import date as date_type, datetime

if TYPE_CHECKING:
    from .user import User


class WaterLog(SQLModel, table=True):
    """Eau bue sur une journée ; chaque ajout incrémente la même ligne."""
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_water_log_user_day"),
    )

    id: Optional[UUID] = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    day: date_type = Field(index=True)
    amount_ml: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relations
    user: "User" = Relationship(back_populates="water_logs")


class WaterLogCreate(SQLModel):
    """Ajout d'eau ; day vaut aujourd'hui si absent"""
    amount_ml: int = Field(ge=1)
    day: Optional[date_type] = None


class WaterLogUpdate(SQLModel):
    """Remplacement du volume d'une entrée existante"""
    amount_ml: int = Field(ge=0)


class WaterLogRead(SQLModel):
    """Schéma pour lire une entrée d'eau (réponse API)"""
    id: UUID
    day: date_type
    amount_ml: int


class WaterLogRecorded(WaterLogRead):
    """Réponse de l'ajout d'eau avec la progression vers l'objectif"""
    daily_goal_ml: int
    progress: float


class WaterToday(SQLModel):
    """Eau du jour et progression"""
    day: date_type
    amount_ml: int
    daily_goal_ml: int
    progress: float


class WaterWeekEntry(SQLModel):
    """Un jour de la semaine d'eau"""
    day: date_type
    label: str
    amount_ml: int
    goal_met: bool
    id: Optional[UUID] = None


class WaterWeek(SQLModel):
    """Semaine d'eau avec les drapeaux d'objectif"""
    start_date: date_type
    daily_goal_ml: int
    daily_goal_liters: float
    weekly_goal_met: bool
    goal_met_count: int
    eligible_day_count: int
    entries: List[WaterWeekEntry]
