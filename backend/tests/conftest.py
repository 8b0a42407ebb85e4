"""
Fixtures partagees : base SQLite en memoire, utilisateur inscrit, dates de reference.
"""
import os
import time

# Configuration minimale avant tout import de hydrosleep (Settings est mis en cache)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

import hydrosleep.domain.entities  # noqa: F401
from hydrosleep.domain.entities import User, UserCreate
from hydrosleep.domain.services.auth_service import auth_service

# Semaine de reference : dimanche 7 janvier 2024 -> samedi 13 janvier 2024
SUNDAY = date(2024, 1, 7)
MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 9)
WEDNESDAY = date(2024, 1, 10)
SATURDAY = date(2024, 1, 13)

PASSWORD = "password123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def local_tz(monkeypatch):
    """Fixe le fuseau horaire local du process le temps du test"""
    def _set(name: str):
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


def _signup(session: Session, name: str, email: str) -> User:
    auth_service.signup(session, UserCreate(name=name, email=email, password=PASSWORD))
    return session.exec(select(User).where(User.email == email)).one()


@pytest.fixture
def user(session):
    """Utilisateur inscrit avec ses trois objectifs par defaut"""
    return _signup(session, "Alice Johnson", "alice@example.com")


@pytest.fixture
def other_user(session):
    return _signup(session, "Bob Smith", "bob@example.com")


@pytest.fixture
def user_id(user):
    return str(user.id)
