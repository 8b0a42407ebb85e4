"""
Routes du profil : mise a jour, mot de passe, avatar, suppression du compte.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends
from sqlmodel import Session

from hydrosleep.core.database import get_session
from hydrosleep.auth.jwt import get_current_user_id
from hydrosleep.domain.entities import UserRead, UserUpdate, PasswordChange, AvatarUpdate
from hydrosleep.domain.services.user_service import user_service
from hydrosleep.api.routers._shared import security

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put("/user/me", response_model=UserRead)
async def update_profile(
    updates: UserUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Met a jour le nom affiche et/ou l'email"""
    user_id = get_current_user_id(token.credentials)
    return user_service.update_profile(session, user_id, updates)


@router.put("/user/me/password")
async def change_password(
    payload: PasswordChange,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Change le mot de passe (verifie le mot de passe actuel)"""
    user_id = get_current_user_id(token.credentials)
    return user_service.change_password(
        session, user_id, payload.current_password, payload.new_password
    )


@router.put("/user/me/avatar", response_model=UserRead)
async def update_avatar(
    payload: AvatarUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Enregistre la reference de l'image de profil"""
    user_id = get_current_user_id(token.credentials)
    return user_service.update_avatar(session, user_id, payload.profile_image_url)


@router.delete("/user/me")
async def delete_account(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Supprime le compte et toutes ses donnees"""
    user_id = get_current_user_id(token.credentials)
    return user_service.delete_account(session, user_id)
