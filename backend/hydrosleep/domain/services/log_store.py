"""
Upsert atomique par (user_id, day) pour les journaux quotidiens.

PostgreSQL et SQLite : un seul INSERT .. ON CONFLICT DO UPDATE, donc deux
ajouts concurrents pour le même jour ne créent jamais deux lignes.
Autres moteurs : SELECT .. FOR UPDATE puis écriture ; une violation de la
contrainte unique y est remontée en ConflictError.
"""
import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from hydrosleep.core.errors import ConflictError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)

CONFLICT_KEYS = ["user_id", "day"]


def _dialect_insert(session: Session):
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None


def _locked_get(session: Session, model: Type[ModelT], user_id: UUID, day: date) -> Optional[ModelT]:
    # Verrou ligne jusqu'au commit (ignoré par SQLite)
    return session.exec(
        select(model)
        .where(model.user_id == user_id, model.day == day)
        .with_for_update()
    ).first()


def get_for_day(session: Session, model: Type[ModelT], user_id: UUID, day: date) -> Optional[ModelT]:
    return session.exec(
        select(model).where(model.user_id == user_id, model.day == day)
    ).first()


def find_in_range(
    session: Session, model: Type[ModelT], user_id: UUID, start: date, end_exclusive: date
) -> List[ModelT]:
    """Entrées de [start, end_exclusive[ triées par jour ; liste vide si rien."""
    return session.exec(
        select(model)
        .where(
            model.user_id == user_id,
            model.day >= start,
            model.day < end_exclusive,
        )
        .order_by(model.day)
    ).all()


def upsert_by_day(
    session: Session,
    model: Type[ModelT],
    user_id: UUID,
    day: date,
    values: Dict[str, Any],
    on_conflict: Callable[[Any], Dict[str, Any]],
    apply_existing: Callable[[ModelT], None],
) -> ModelT:
    """
    Crée la ligne (user_id, day) avec `values` ou met à jour la ligne existante.

    `on_conflict(excluded)` construit le SET SQL de la branche conflit ;
    `apply_existing(record)` fait la même mise à jour en Python pour le repli
    verrouillé. Retourne l'état persisté après l'upsert.
    """
    now = datetime.utcnow()
    insert = _dialect_insert(session)

    if insert is not None:
        stmt = insert(model).values(
            id=uuid4(), user_id=user_id, day=day, created_at=now, updated_at=now, **values
        )
        update_set = on_conflict(stmt.excluded)
        update_set["updated_at"] = now
        stmt = stmt.on_conflict_do_update(index_elements=CONFLICT_KEYS, set_=update_set)
        session.execute(stmt)
        session.commit()
    else:
        existing = _locked_get(session, model, user_id, day)
        if existing:
            apply_existing(existing)
            existing.updated_at = now
            session.add(existing)
        else:
            session.add(model(user_id=user_id, day=day, **values))
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.error(f"Doublon {model.__name__} pour user {user_id} le {day}: {exc}")
            raise ConflictError(f"Duplicate {model.__name__} for {day.isoformat()}")

    record = get_for_day(session, model, user_id, day)
    # La ligne a pu être modifiée hors ORM : forcer le rechargement
    session.refresh(record)
    return record
