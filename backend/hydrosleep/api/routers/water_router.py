"""
Routes de l'eau : semaine, aujourd'hui, ajout, correction.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional
from uuid import UUID
from datetime import date

from hydrosleep.core.database import get_session
from hydrosleep.auth.jwt import get_current_user_id
from hydrosleep.domain.entities import (
    WaterLogCreate, WaterLogUpdate, WaterLogRead, WaterLogRecorded, WaterToday, WaterWeek,
)
from hydrosleep.domain.services.water_service import water_service
from hydrosleep.api.routers._shared import security

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/water/week", response_model=WaterWeek)
async def get_water_week(
    start: Optional[date] = None,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Semaine d'eau (semaine en cours si start absent)"""
    user_id = get_current_user_id(token.credentials)
    return water_service.get_week(session, user_id, week_start=start)


@router.get("/water/today", response_model=WaterToday)
async def get_water_today(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Eau du jour et progression"""
    user_id = get_current_user_id(token.credentials)
    return water_service.get_today(session, user_id)


@router.post("/water", response_model=WaterLogRecorded, status_code=status.HTTP_201_CREATED)
async def add_water(
    payload: WaterLogCreate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Ajoute de l'eau au cumul du jour"""
    user_id = get_current_user_id(token.credentials)
    return water_service.record_with_progress(session, user_id, payload.amount_ml, day=payload.day)


@router.put("/water/{log_id}", response_model=WaterLogRead)
async def update_water_log(
    log_id: UUID,
    payload: WaterLogUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Remplace le cumul d'une entree existante"""
    user_id = get_current_user_id(token.credentials)
    return water_service.update_log(session, log_id, user_id, payload.amount_ml)
