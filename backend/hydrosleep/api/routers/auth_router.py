"""
Routes d'authentification : signup, login, refresh, me.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request, Form
from fastapi.responses import JSONResponse
from sqlmodel import Session

from hydrosleep.core.database import get_session
from hydrosleep.core.errors import BusinessRuleError
from hydrosleep.auth.jwt import jwt_manager, get_current_user_id
from hydrosleep.domain.entities import UserCreate, UserRead
from hydrosleep.domain.services.auth_service import auth_service
from hydrosleep.api.routers._shared import security, limiter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/auth/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit("3/hour")
async def signup(
    request: Request,
    user_data: UserCreate,
    session: Session = Depends(get_session)
):
    """Inscription d'un nouvel utilisateur (objectifs par defaut inclus)"""
    tokens = auth_service.signup(session, user_data)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=tokens.model_dump())


@router.post("/auth/login")
@limiter.limit("5/minute")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    session: Session = Depends(get_session)
):
    """Connexion utilisateur"""
    try:
        tokens = auth_service.login(session, email, password)
    except BusinessRuleError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    return JSONResponse(content=tokens.model_dump())


@router.post("/auth/refresh")
async def refresh_token(request: Request):
    """Rafraichit l'access token a partir du refresh token (body JSON)."""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    refresh_tok = body.get("refresh_token") if isinstance(body, dict) else None
    if not refresh_tok:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token missing")

    return {"access_token": jwt_manager.refresh_access_token(refresh_tok)}


@router.get("/auth/me", response_model=UserRead)
async def get_current_user(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Recupere les informations de l'utilisateur connecte"""
    user_id = get_current_user_id(token.credentials)
    return auth_service.get_user(session, user_id)
