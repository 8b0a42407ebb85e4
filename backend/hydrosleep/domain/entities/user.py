"""
Entité User - Domain Layer
Représente un utilisateur de l'application HydroSleep
"""
import re
from sqlmodel import SQLModel, Field, Relationship
from pydantic import field_validator
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .goal import Goal
    from .water_log import WaterLog
    from .sleep_entry import SleepEntry


EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

# Suppression d'un utilisateur => suppression de ses objectifs et journaux
_CASCADE = {"cascade": "all, delete-orphan"}


def _normalize_email(v: str) -> str:
    v = v.strip()
    if not re.match(EMAIL_PATTERN, v):
        raise ValueError('Invalid email format')
    return v.lower()


class UserBase(SQLModel):
    """Modèle de base pour User"""
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(min_length=1, max_length=120)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Name is required')
        return v


class User(UserBase, table=True):
    """Entité User complète pour la base de données"""
    id: Optional[UUID] = Field(default_factory=uuid4, primary_key=True)
    display_name: Optional[str] = None
    hashed_password: str
    profile_image_url: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relations
    goals: List["Goal"] = Relationship(back_populates="user", sa_relationship_kwargs=_CASCADE)
    water_logs: List["WaterLog"] = Relationship(back_populates="user", sa_relationship_kwargs=_CASCADE)
    sleep_entries: List["SleepEntry"] = Relationship(back_populates="user", sa_relationship_kwargs=_CASCADE)


class UserCreate(UserBase):
    """Schéma pour créer un utilisateur"""
    password: str = Field(min_length=6)


class UserRead(SQLModel):
    """Schéma pour lire un utilisateur (réponse API, jamais le hash du mot de passe)"""
    id: UUID
    name: str
    display_name: Optional[str]
    email: str
    profile_image_url: Optional[str]
    created_at: datetime


class UserUpdate(SQLModel):
    """Schéma pour mettre à jour le profil"""
    display_name: Optional[str] = None
    email: Optional[str] = None

    @field_validator('display_name', mode='before')
    @classmethod
    def validate_display_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('Display name cannot be empty')
        return v

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _normalize_email(v)


class PasswordChange(SQLModel):
    """Schéma pour changer le mot de passe"""
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class AvatarUpdate(SQLModel):
    """Référence de l'image de profil (l'upload lui-même est géré par le client)"""
    profile_image_url: str = Field(min_length=1)
