"""
Routes de lecture agregee : tableau de bord et resume analytics.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import Optional

from hydrosleep.core.database import get_session
from hydrosleep.auth.jwt import get_current_user_id
from hydrosleep.domain.entities import AnalyticsSummary, DashboardSummary
from hydrosleep.domain.services.analytics_service import analytics_service, parse_range
from hydrosleep.domain.services.dashboard_service import dashboard_service
from hydrosleep.api.routers._shared import security

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Ecran d'accueil : profil, eau du jour, derniere nuit, objectifs"""
    user_id = get_current_user_id(token.credentials)
    return dashboard_service.summary(session, user_id)


@router.get("/analytics/summary", response_model=AnalyticsSummary)
async def get_analytics_summary(
    range_param: Optional[str] = Query(
        default="7d",
        alias="range",
        description=(
            "Fenetre en jours, ex. 7d ou 14 (de 1 a ANALYTICS_MAX_RANGE_DAYS, 31 par defaut). "
            "7 = semaine calendaire en cours, du dimanche a aujourd'hui ; "
            "toute autre valeur = fenetre glissante de N jours finissant aujourd'hui."
        ),
    ),
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Resume analytics : series, moyennes, taux de completion"""
    user_id = get_current_user_id(token.credentials)
    return analytics_service.summarize(session, user_id, range_days=parse_range(range_param))
