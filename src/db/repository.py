"""
User and template persistence.

Template reads return an empty list when the store is unavailable or a
query fails; saves return None and deletes return False in the same cases.
Callers turn those into user-visible notices.
"""

import datetime
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config.settings import settings

from .database import get_session_factory
from .models import MessageTemplate, User

logger = logging.getLogger(__name__)

USER_TEXT_FIELDS = ("name", "email", "login_method")


def _find_user(session: Session, open_id: str) -> Optional[User]:
    return session.scalars(select(User).where(User.open_id == open_id)).first()


def _apply_updates(user: User, updates: Dict[str, Any]) -> None:
    for field, value in updates.items():
        setattr(user, field, value)


def upsert_user(
    open_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    login_method: Optional[str] = None,
    role: Optional[str] = None,
) -> Optional[User]:
    """
    Insert or update a user keyed by external identity.

    Only fields that were passed are overwritten; last_signed_in is always
    refreshed. A duplicate insert from a concurrent first sign-in falls back
    to updating the existing row. Other database errors propagate.
    """
    if not open_id:
        raise ValueError("User open_id is required for upsert")

    session_factory = get_session_factory()
    if session_factory is None:
        logger.warning("[Database] Cannot upsert user: database not available")
        return None

    updates: Dict[str, Any] = {
        field: value
        for field, value in zip(USER_TEXT_FIELDS, (name, email, login_method))
        if value is not None
    }
    if role is not None:
        updates["role"] = role
    elif settings.owner_open_id and open_id == settings.owner_open_id:
        updates["role"] = "admin"
    updates["last_signed_in"] = datetime.datetime.now(datetime.timezone.utc)

    try:
        with session_factory() as session:
            user = _find_user(session, open_id)
            if user is None:
                try:
                    user = User(open_id=open_id, **updates)
                    session.add(user)
                    session.commit()
                except IntegrityError:
                    # A concurrent first sign-in inserted the same open_id
                    session.rollback()
                    user = _find_user(session, open_id)
                    if user is None:
                        raise
                    _apply_updates(user, updates)
                    session.commit()
            else:
                _apply_updates(user, updates)
                session.commit()
            session.refresh(user)
            return user
    except SQLAlchemyError as e:
        logger.error(f"[Database] Failed to upsert user: {e}")
        raise


def get_user_by_open_id(open_id: str) -> Optional[User]:
    session_factory = get_session_factory()
    if session_factory is None:
        logger.warning("[Database] Cannot get user: database not available")
        return None

    with session_factory() as session:
        return session.scalars(select(User).where(User.open_id == open_id).limit(1)).first()


def save_template(user_id: int, template: Dict[str, Any]) -> Optional[MessageTemplate]:
    """Store a template for its owner and return the saved row, or None on failure."""
    session_factory = get_session_factory()
    if session_factory is None:
        return None

    try:
        with session_factory() as session:
            row = MessageTemplate(**{**template, "user_id": user_id})
            session.add(row)
            session.commit()
            session.refresh(row)
            return row
    except SQLAlchemyError as e:
        logger.error(f"[Database] Failed to save template: {e}")
        return None


def get_user_templates(user_id: int) -> List[MessageTemplate]:
    session_factory = get_session_factory()
    if session_factory is None:
        return []

    try:
        with session_factory() as session:
            query = (
                select(MessageTemplate)
                .where(MessageTemplate.user_id == user_id)
                .order_by(MessageTemplate.created_at.desc(), MessageTemplate.id.desc())
            )
            return list(session.scalars(query).all())
    except SQLAlchemyError as e:
        logger.error(f"[Database] Failed to get templates: {e}")
        return []


def get_templates_by_segment(user_id: int, segment: str) -> List[MessageTemplate]:
    session_factory = get_session_factory()
    if session_factory is None:
        return []

    try:
        with session_factory() as session:
            query = (
                select(MessageTemplate)
                .where(
                    and_(
                        MessageTemplate.user_id == user_id,
                        MessageTemplate.customer_segment == segment,
                    )
                )
                .order_by(MessageTemplate.created_at.desc(), MessageTemplate.id.desc())
            )
            return list(session.scalars(query).all())
    except SQLAlchemyError as e:
        logger.error(f"[Database] Failed to get templates by segment: {e}")
        return []


def delete_template(template_id: int, user_id: int) -> bool:
    """Delete a template only if it belongs to user_id. True when a row was removed."""
    session_factory = get_session_factory()
    if session_factory is None:
        return False

    try:
        with session_factory() as session:
            result = session.execute(
                delete(MessageTemplate).where(
                    and_(MessageTemplate.id == template_id, MessageTemplate.user_id == user_id)
                )
            )
            session.commit()
            return result.rowcount > 0
    except SQLAlchemyError as e:
        logger.error(f"[Database] Failed to delete template: {e}")
        return False
