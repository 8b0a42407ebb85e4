"""
Client Redis pour HydroSleep.
Fournit une connexion partagée (stockage du rate limiting) et un health check.
"""
import logging
from functools import lru_cache
from typing import Optional

import redis

from hydrosleep.core.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_redis_client() -> Optional[redis.Redis]:
    """Retourne un client Redis (singleton via lru_cache), None si REDIS_URL est vide."""
    settings = get_settings()
    if not settings.REDIS_URL:
        return None
    return redis.Redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )


def check_redis_health() -> Optional[bool]:
    """
    Vérifie que Redis répond à un PING.
    Retourne None si Redis n'est pas configuré, True si OK, False sinon.
    """
    client = get_redis_client()
    if client is None:
        return None
    try:
        return client.ping()
    except redis.RedisError as exc:
        logger.warning(f"Redis health check échoué: {exc}")
        return False
