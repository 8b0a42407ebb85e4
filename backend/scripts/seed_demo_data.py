#!/usr/bin/env python3
"""
Script pour peupler la base avec des comptes de demonstration
(objectifs par defaut, objectifs personnalises, 14 jours d'eau et de sommeil).
"""

import sys
import random
import argparse
from pathlib import Path
from datetime import date, timedelta

# Ajouter le répertoire backend au path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from sqlmodel import select
from hydrosleep.core.database import get_session, create_db_and_tables
from hydrosleep.domain.entities import User, UserCreate, SleepEntryCreate
from hydrosleep.domain.services.auth_service import auth_service
from hydrosleep.domain.services.goal_service import goal_service
from hydrosleep.domain.services.water_service import water_service
from hydrosleep.domain.services.sleep_service import sleep_service

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("Alice Johnson", "alice@example.com"),
    ("Bob Smith", "bob@example.com"),
    ("Carol Davis", "carol@example.com"),
    ("David Wilson", "david@example.com"),
    ("Emma Brown", "emma@example.com"),
]

CUSTOM_GOALS = [
    ("Meditate", (10, 30), "min/day"),
    ("Read Books", (20, 60), "pages/day"),
]

HISTORY_DAYS = 14


def seed_demo_data(reset: bool = False, seed: int | None = None):
    """Cree les comptes de demo et leur historique"""
    rng = random.Random(seed)
    create_db_and_tables()
    session = next(get_session())

    try:
        if reset:
            existing = session.exec(
                select(User).where(User.email.in_([email for _, email in DEMO_USERS]))
            ).all()
            for user in existing:
                session.delete(user)
            session.commit()
            print(f"🗑️  {len(existing)} comptes de demo supprimes")

        today = date.today()
        for name, email in DEMO_USERS:
            if session.exec(select(User).where(User.email == email)).first():
                print(f"⏭️  {email} existe deja")
                continue

            auth_service.signup(session, UserCreate(name=name, email=email, password=DEMO_PASSWORD))
            user = session.exec(select(User).where(User.email == email)).one()
            user_id = str(user.id)

            for label, (low, high), unit in CUSTOM_GOALS:
                if rng.random() > 0.5:
                    goal_service.create_custom_goal(session, user_id, label, rng.randint(low, high), unit)

            for offset in range(HISTORY_DAYS):
                day = today - timedelta(days=offset)
                water_service.record_water(session, user_id, rng.randint(1500, 4000), day=day)
                sleep_service.record_sleep(session, user_id, SleepEntryCreate(
                    day=day,
                    duration_minutes=rng.randint(300, 540),
                    rested_percent=rng.randint(60, 95),
                    rem_percent=rng.randint(15, 30),
                    deep_sleep_percent=rng.randint(15, 35),
                ))

            print(f"✅ {name} ({email}) : {HISTORY_DAYS} jours d'historique")

        print("=" * 60)
        print(f"Mot de passe des comptes de demo : {DEMO_PASSWORD}")
    finally:
        session.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Peuple la base avec des comptes de demonstration")
    parser.add_argument("--reset", action="store_true", help="Supprime d'abord les comptes de demo existants")
    parser.add_argument("--seed", type=int, default=None, help="Graine aleatoire pour un jeu reproductible")
    args = parser.parse_args()
    seed_demo_data(reset=args.reset, seed=args.seed)
