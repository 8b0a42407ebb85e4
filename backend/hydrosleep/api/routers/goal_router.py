"""
Routes des objectifs : liste, creation, mise a jour, suppression.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
from uuid import UUID

from hydrosleep.core.database import get_session
from hydrosleep.auth.jwt import get_current_user_id
from hydrosleep.domain.entities import GoalRead, GoalCreate, GoalUpdate, GoalValueUpdate, GoalType
from hydrosleep.domain.services.goal_service import goal_service
from hydrosleep.api.routers._shared import security

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/goals", response_model=List[GoalRead])
async def list_goals(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Recupere les objectifs (par defaut en premier)"""
    user_id = get_current_user_id(token.credentials)
    return goal_service.list_goals(session, user_id)


@router.post("/goals", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_data: GoalCreate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Cree un objectif personnalise"""
    user_id = get_current_user_id(token.credentials)
    return goal_service.create_custom_goal(
        session, user_id, goal_data.label, goal_data.value, goal_data.unit
    )


@router.put("/goals/type/{goal_type}", response_model=GoalRead)
async def update_goal_by_type(
    goal_type: GoalType,
    payload: GoalValueUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Met a jour la valeur de l'objectif d'un type donne"""
    user_id = get_current_user_id(token.credentials)
    return goal_service.update_goal_by_type(session, user_id, goal_type, payload.value)


@router.put("/goals/{goal_id}", response_model=GoalRead)
async def update_goal(
    goal_id: UUID,
    updates: GoalUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Met a jour un objectif (label/unit reserves aux objectifs personnalises)"""
    user_id = get_current_user_id(token.credentials)
    return goal_service.update_goal(
        session, goal_id, user_id,
        value=updates.value, label=updates.label, unit=updates.unit,
    )


@router.delete("/goals/{goal_id}")
async def delete_goal(
    goal_id: UUID,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Supprime un objectif personnalise"""
    user_id = get_current_user_id(token.credentials)
    return goal_service.delete_goal(session, goal_id, user_id)
