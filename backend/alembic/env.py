import os
import sys
from logging.config import fileConfig

from alembic import context

# Ajouter le chemin du backend pour les imports
sys.path.append(os.path.dirname(os.path.abspath(__file__)) + "/..")

# Import des modeles SQLModel (enregistre les tables dans la metadata)
from hydrosleep.domain.entities import User, Goal, WaterLog, SleepEntry  # noqa: F401
from hydrosleep.core.database import engine
from sqlmodel import SQLModel

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Utiliser les metadonnees SQLModel pour l'autogenerate
target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Configure le contexte avec la seule URL, sans Engine ni DBAPI.
    """
    from hydrosleep.core.settings import get_settings
    settings = get_settings()
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode, avec l'engine de l'application."""
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite ne supporte pas ALTER sur les contraintes
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
