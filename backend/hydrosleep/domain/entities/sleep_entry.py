"""
Entité SleepEntry - Domain Layer
Résumé d'une nuit de sommeil, une entrée par utilisateur par jour (remplacée à chaque saisie).
"""
from sqlmodel import SQLModel, Field, Relationship, UniqueConstraint
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID, uuid4
from datetime import date as date_type, datetime

if TYPE_CHECKING:
    from .user import User


class SleepEntryBase(SQLModel):
    """Champs de sommeil saisis par l'utilisateur"""
    duration_minutes: int = Field(ge=0)
    # Pourcentages indépendants, aucune contrainte de somme
    rested_percent: float = Field(ge=0, le=100)
    rem_percent: float = Field(ge=0, le=100)
    deep_sleep_percent: float = Field(ge=0, le=100)
    notes: str = Field(default="")


class SleepEntry(SleepEntryBase, table=True):
    """Entité SleepEntry pour la base de données"""
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_sleep_entry_user_day"),
    )

    id: Optional[UUID] = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    day: date_type = Field(index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relations
    user: "User" = Relationship(back_populates="sleep_entries")


class SleepEntryCreate(SleepEntryBase):
    """Saisie d'une nuit (remplace l'entrée existante du même jour)"""
    day: date_type
    notes: Optional[str] = None


class SleepEntryUpdate(SQLModel):
    """Mise à jour partielle d'une entrée existante"""
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    rested_percent: Optional[float] = Field(default=None, ge=0, le=100)
    rem_percent: Optional[float] = Field(default=None, ge=0, le=100)
    deep_sleep_percent: Optional[float] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None


class SleepEntryRead(SleepEntryBase):
    """Schéma pour lire une entrée de sommeil (réponse API)"""
    id: UUID
    day: date_type
    duration_formatted: str


class SleepLatest(SQLModel):
    """Dernière nuit saisie et conseil"""
    entry: Optional[SleepEntryRead]
    suggestion: str


class SleepWeekEntry(SQLModel):
    """Un jour de la semaine de sommeil"""
    day: date_type
    label: str
    duration_minutes: int
    goal_met: bool
    entry: Optional[SleepEntryRead] = None


class SleepWeek(SQLModel):
    """Semaine de sommeil avec les drapeaux d'objectif"""
    start_date: date_type
    goal_hours: float
    weekly_goal_met: bool
    goal_met_count: int
    eligible_day_count: int
    entries: List[SleepWeekEntry]
