"""
Entité Goal - Domain Layer
Objectif d'un utilisateur (eau, sommeil, exercice ou personnalisé)
"""
from sqlmodel import SQLModel, Field, Relationship, Column
from sqlalchemy import String
from pydantic import field_validator
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4
from enum import Enum

if TYPE_CHECKING:
    from .user import User


class GoalType(str, Enum):
    """Types d'objectifs"""
    EXERCISE = "exercise"
    WATER = "water"
    SLEEP = "sleep"
    CUSTOM = "custom"


# Objectifs créés à l'inscription (jamais supprimables)
DEFAULT_GOALS = [
    {"type": GoalType.EXERCISE, "label": "Exercise Regularly", "value": 4, "unit": "times/week"},
    {"type": GoalType.WATER, "label": "Drink Water", "value": 3, "unit": "L/day"},
    {"type": GoalType.SLEEP, "label": "Improve Sleep", "value": 8, "unit": "hours/night"},
]

DEFAULT_WATER_GOAL_LITERS = 3.0
DEFAULT_SLEEP_GOAL_HOURS = 8.0


def _not_blank(v: Optional[str], message: str) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError(message)
    return v


class Goal(SQLModel, table=True):
    """Entité Goal pour la base de données"""
    id: Optional[UUID] = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)

    # Colonne TEXT pour éviter les problèmes d'enum SQLAlchemy
    type: GoalType = Field(sa_column=Column("type", String, nullable=False))
    label: str
    value: float
    unit: str
    is_default: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relations
    user: "User" = Relationship(back_populates="goals")


class GoalCreate(SQLModel):
    """Schéma pour créer un objectif personnalisé"""
    label: str
    value: float = Field(ge=0)
    unit: str

    @field_validator('label')
    @classmethod
    def validate_label(cls, v: str) -> str:
        return _not_blank(v, 'Label is required')

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v: str) -> str:
        return _not_blank(v, 'Unit is required')


class GoalUpdate(SQLModel):
    """Schéma pour mettre à jour un objectif (label/unit ignorés sur les objectifs par défaut)"""
    value: Optional[float] = Field(default=None, ge=0)
    label: Optional[str] = None
    unit: Optional[str] = None

    @field_validator('label')
    @classmethod
    def validate_label(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, 'Label cannot be empty')

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, 'Unit cannot be empty')


class GoalValueUpdate(SQLModel):
    """Mise à jour de la valeur seule (route par type)"""
    value: float = Field(ge=0)


class GoalRead(SQLModel):
    """Schéma pour lire un objectif (réponse API)"""
    id: UUID
    type: GoalType
    label: str
    value: float
    unit: str
    is_default: bool
