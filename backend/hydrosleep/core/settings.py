"""
Configuration centralisée pour l'application HydroSleep
Utilise pydantic-settings pour la gestion des variables d'environnement
"""
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Configuration de l'application"""

    # Database
    DATABASE_URL: str = Field(
        description="URL de la base de données (PostgreSQL en production, SQLite en local)"
    )

    # JWT Configuration
    JWT_SECRET_KEY: str = Field(
        description="Clé secrète pour signer les JWT (obligatoire, pas de valeur par défaut)"
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24)
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7)

    # URLs de l'application
    FRONTEND_URL: str = Field(
        default="http://localhost:8081",
        description="URL du client (Expo en développement), ajoutée aux origines CORS"
    )

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=[],
        description="Origines autorisées pour CORS (configuré automatiquement selon ENVIRONMENT si vide)"
    )

    # Monitoring (Sentry)
    SENTRY_DSN: str = Field(
        default="",
        description="DSN Sentry pour le error tracking (vide = Sentry desactive)"
    )

    # Redis
    REDIS_URL: str = Field(
        default="",
        description="URL Redis pour le stockage du rate limiting (vide = stockage en mémoire)"
    )

    # Analytics
    ANALYTICS_MAX_RANGE_DAYS: int = Field(
        default=31,
        description="Fenêtre maximale (en jours) acceptée par le résumé analytics"
    )

    # Application
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(
        default="",
        description="Niveau de logging (auto-configuré selon ENVIRONMENT si vide)"
    )

    @model_validator(mode="after")
    def _configure_environment(self) -> "Settings":
        """Configure DEBUG et LOG_LEVEL selon ENVIRONMENT."""
        is_prod = self.ENVIRONMENT == "production"
        # En production, forcer DEBUG=False
        if is_prod:
            self.DEBUG = False
        if not self.LOG_LEVEL:
            self.LOG_LEVEL = "WARNING" if is_prod else "INFO"
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        return self

    @model_validator(mode="after")
    def _set_default_origins(self) -> "Settings":
        """Définit les origines CORS par défaut selon ENVIRONMENT si non configurées."""
        if not self.ALLOWED_ORIGINS:
            if self.ENVIRONMENT == "production":
                self.ALLOWED_ORIGINS = []
            else:
                self.ALLOWED_ORIGINS = [
                    "http://localhost:8081",
                    "http://127.0.0.1:8081",
                    "http://localhost:19006",
                ]
        # Toujours inclure FRONTEND_URL dans les origines autorisees
        frontend = self.FRONTEND_URL.rstrip("/")
        if frontend and frontend not in self.ALLOWED_ORIGINS:
            self.ALLOWED_ORIGINS.append(frontend)
        return self

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Récupère la configuration (mise en cache pour le process)"""
    return Settings()
