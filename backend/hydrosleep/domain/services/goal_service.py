"""
Service des objectifs : liste, création, mise à jour, suppression, objectifs par défaut.
"""
import logging
from sqlmodel import Session, select
from uuid import UUID
from typing import Optional, List, Iterable

from hydrosleep.core.errors import NotFoundError, BusinessRuleError, ValidationError
from hydrosleep.domain.entities import Goal, GoalType
from hydrosleep.domain.entities.goal import (
    DEFAULT_GOALS,
    DEFAULT_WATER_GOAL_LITERS,
    DEFAULT_SLEEP_GOAL_HOURS,
)

logger = logging.getLogger(__name__)

_FALLBACKS = {
    GoalType.WATER: DEFAULT_WATER_GOAL_LITERS,
    GoalType.SLEEP: DEFAULT_SLEEP_GOAL_HOURS,
}


def goal_value(goals: Iterable[Goal], goal_type: GoalType, fallback: Optional[float] = None) -> float:
    """Valeur du premier objectif du type donné, sinon la valeur de repli."""
    for goal in goals:
        if goal.type == goal_type:
            return goal.value
    if fallback is None:
        fallback = _FALLBACKS.get(goal_type, 0.0)
    return fallback


def _check_value(value: float) -> None:
    if value is None or value < 0:
        raise ValidationError("Value must be a non-negative number", field="value")


def _check_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    return value.strip()


class GoalService:

    def list_goals(self, session: Session, user_id: str) -> List[Goal]:
        return session.exec(
            select(Goal)
            .where(Goal.user_id == UUID(str(user_id)))
            .order_by(Goal.is_default.desc(), Goal.created_at)
        ).all()

    def get(self, session: Session, goal_id: UUID, user_id: str) -> Goal:
        # Un objectif d'un autre utilisateur est traité comme inexistant
        goal = session.exec(
            select(Goal).where(
                Goal.id == goal_id,
                Goal.user_id == UUID(str(user_id)),
            )
        ).first()
        if not goal:
            raise NotFoundError("Goal not found")
        return goal

    def create_custom_goal(
        self, session: Session, user_id: str, label: str, value: float, unit: str
    ) -> Goal:
        _check_value(value)
        goal = Goal(
            user_id=UUID(str(user_id)),
            type=GoalType.CUSTOM.value,
            label=_check_text(label, "label"),
            value=value,
            unit=_check_text(unit, "unit"),
            is_default=False,
        )
        session.add(goal)
        session.commit()
        session.refresh(goal)
        return goal

    def update_goal(
        self,
        session: Session,
        goal_id: UUID,
        user_id: str,
        value: Optional[float] = None,
        label: Optional[str] = None,
        unit: Optional[str] = None,
    ) -> Goal:
        goal = self.get(session, goal_id, user_id)

        if value is not None:
            _check_value(value)
            goal.value = value
        # Seuls les objectifs personnalisés peuvent être renommés
        if not goal.is_default:
            if label is not None:
                goal.label = _check_text(label, "label")
            if unit is not None:
                goal.unit = _check_text(unit, "unit")

        session.add(goal)
        session.commit()
        session.refresh(goal)
        return goal

    def update_goal_value(self, session: Session, goal_id: UUID, user_id: str, value: float) -> Goal:
        return self.update_goal(session, goal_id, user_id, value=value)

    def update_goal_by_type(
        self, session: Session, user_id: str, goal_type: GoalType, value: float
    ) -> Goal:
        _check_value(value)
        goal = session.exec(
            select(Goal).where(
                Goal.user_id == UUID(str(user_id)),
                Goal.type == GoalType(goal_type).value,
            )
        ).first()
        if not goal:
            raise NotFoundError("Goal not found")

        goal.value = value
        session.add(goal)
        session.commit()
        session.refresh(goal)
        return goal

    def delete_goal(self, session: Session, goal_id: UUID, user_id: str) -> dict:
        goal = self.get(session, goal_id, user_id)
        if goal.is_default:
            raise BusinessRuleError("Cannot delete default goals")

        session.delete(goal)
        session.commit()
        return {"message": "Goal deleted successfully"}

    def seed_default_goals(self, session: Session, user_id: UUID) -> List[Goal]:
        """
        Ajoute les trois objectifs par défaut à la session, sans commit.

        L'appelant commite avec la création de l'utilisateur pour que les deux
        soient atomiques. Sans effet si l'utilisateur possède déjà des objectifs.
        """
        existing = session.exec(select(Goal).where(Goal.user_id == user_id)).first()
        if existing:
            logger.info(f"Objectifs déjà présents pour user {user_id}, seeding ignoré")
            return []

        goals = [
            Goal(
                user_id=user_id,
                type=default["type"].value,
                label=default["label"],
                value=default["value"],
                unit=default["unit"],
                is_default=True,
            )
            for default in DEFAULT_GOALS
        ]
        session.add_all(goals)
        return goals


goal_service = GoalService()
