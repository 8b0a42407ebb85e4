"""
Service du profil utilisateur : nom affiché, email, mot de passe, avatar, suppression du compte.
"""
import logging
from sqlmodel import Session, select

from hydrosleep.auth.jwt import password_manager
from hydrosleep.core.errors import BusinessRuleError
from hydrosleep.domain.entities import User, UserUpdate
from hydrosleep.domain.services.auth_service import auth_service

logger = logging.getLogger(__name__)


class UserService:

    def update_profile(self, session: Session, user_id: str, updates: UserUpdate) -> User:
        user = auth_service.get_user(session, user_id)

        if updates.email and updates.email != user.email:
            taken = session.exec(
                select(User).where(User.email == updates.email, User.id != user.id)
            ).first()
            if taken:
                raise BusinessRuleError("Email already in use")
            user.email = updates.email
        if updates.display_name:
            user.display_name = updates.display_name

        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def change_password(
        self, session: Session, user_id: str, current_password: str, new_password: str
    ) -> dict:
        user = auth_service.get_user(session, user_id)
        if not password_manager.verify_password(current_password, user.hashed_password):
            raise BusinessRuleError("Current password is incorrect")

        user.hashed_password = password_manager.hash_password(new_password)
        session.add(user)
        session.commit()
        return {"message": "Password updated successfully"}

    def update_avatar(self, session: Session, user_id: str, profile_image_url: str) -> User:
        user = auth_service.get_user(session, user_id)
        user.profile_image_url = profile_image_url
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete_account(self, session: Session, user_id: str) -> dict:
        """Supprime le compte ; objectifs et journaux suivent par cascade."""
        user = auth_service.get_user(session, user_id)
        counts = {
            "deleted_goals": len(user.goals),
            "deleted_water_logs": len(user.water_logs),
            "deleted_sleep_entries": len(user.sleep_entries),
        }
        session.delete(user)
        session.commit()
        logger.info(f"Compte {user_id} supprimé ({counts})")
        return {"message": "Account deleted successfully", **counts}


user_service = UserService()
