"""
Routes du sommeil : derniere nuit, semaine, saisie, edition, suppression.
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
    SleepEntryCreate, SleepEntryUpdate, SleepEntryRead, SleepLatest, SleepWeek,
)
from hydrosleep.domain.services.sleep_service import sleep_service, to_read
from hydrosleep.api.routers._shared import security

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sleep/latest", response_model=SleepLatest)
async def get_latest_sleep(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Derniere nuit saisie avec un conseil"""
    user_id = get_current_user_id(token.credentials)
    return sleep_service.get_latest(session, user_id)


@router.get("/sleep/week", response_model=SleepWeek)
async def get_sleep_week(
    start: Optional[date] = None,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Semaine de sommeil (semaine en cours si start absent)"""
    user_id = get_current_user_id(token.credentials)
    return sleep_service.get_week(session, user_id, week_start=start)


@router.post("/sleep", response_model=SleepEntryRead, status_code=status.HTTP_201_CREATED)
async def log_sleep(
    payload: SleepEntryCreate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Enregistre une nuit (remplace l'entree du meme jour)"""
    user_id = get_current_user_id(token.credentials)
    return to_read(sleep_service.record_sleep(session, user_id, payload))


@router.put("/sleep/{entry_id}", response_model=SleepEntryRead)
async def update_sleep(
    entry_id: UUID,
    updates: SleepEntryUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Met a jour une entree existante"""
    user_id = get_current_user_id(token.credentials)
    return to_read(sleep_service.update_entry(session, entry_id, user_id, updates))


@router.delete("/sleep/{entry_id}")
async def delete_sleep(
    entry_id: UUID,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Supprime une entree de sommeil"""
    user_id = get_current_user_id(token.credentials)
    return sleep_service.delete_entry(session, entry_id, user_id)
