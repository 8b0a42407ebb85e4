"""
Routers API pour HydroSleep.

Ce module regroupe tous les sous-routers et expose un router principal
a inclure dans l'application FastAPI.
"""
from fastapi import APIRouter

from hydrosleep.api.routers.auth_router import router as auth_router
from hydrosleep.api.routers.user_router import router as user_router
from hydrosleep.api.routers.goal_router import router as goal_router
from hydrosleep.api.routers.water_router import router as water_router
from hydrosleep.api.routers.sleep_router import router as sleep_router
from hydrosleep.api.routers.analytics_router import router as analytics_router
from hydrosleep.api.routers._shared import limiter

router = APIRouter()

router.include_router(auth_router)
router.include_router(user_router)
router.include_router(goal_router)
router.include_router(water_router)
router.include_router(sleep_router)
router.include_router(analytics_router)

__all__ = ["router", "limiter"]
