"""
Service d'authentification : signup (avec objectifs par défaut), login, utilisateur courant.
"""
import logging
from sqlmodel import Session, select
from uuid import UUID

from hydrosleep.auth.jwt import jwt_manager, password_manager, TokenResponse
from hydrosleep.core.errors import BusinessRuleError, NotFoundError
from hydrosleep.domain.entities import User, UserCreate
from hydrosleep.domain.services.goal_service import goal_service

logger = logging.getLogger(__name__)


class AuthService:

    def signup(self, session: Session, user_data: UserCreate) -> TokenResponse:
        existing_user = session.exec(
            select(User).where(User.email == user_data.email)
        ).first()
        if existing_user:
            raise BusinessRuleError("Email already registered")

        db_user = User(
            email=user_data.email,
            name=user_data.name,
            display_name=user_data.name,
            hashed_password=password_manager.hash_password(user_data.password),
        )
        session.add(db_user)
        # Utilisateur et objectifs par défaut dans la même transaction
        try:
            session.flush()
            goal_service.seed_default_goals(session, db_user.id)
            session.commit()
        except Exception:
            session.rollback()
            raise
        session.refresh(db_user)
        logger.info(f"Nouvel utilisateur {db_user.id} avec objectifs par défaut")

        return jwt_manager.create_token_pair(str(db_user.id), db_user.email)

    def login(self, session: Session, email: str, password: str) -> TokenResponse:
        user = session.exec(select(User).where(User.email == email.strip().lower())).first()

        if not user or not password_manager.verify_password(password, user.hashed_password):
            raise BusinessRuleError("Invalid email or password")

        return jwt_manager.create_token_pair(str(user.id), user.email)

    def get_user(self, session: Session, user_id: str) -> User:
        user = session.get(User, UUID(str(user_id)))
        if not user:
            raise NotFoundError("User not found")
        return user


auth_service = AuthService()
