"""
Caller identity for template endpoints.

Authentication happens upstream: the gateway forwards the signed-in user's
external identity in X-User-Id (plus optional profile headers). Each
authenticated request upserts the user so templates have an owner row; if the
store fails, the caller is still identified but has no owner id, so reads
come back empty and writes fail.
"""

import logging
from typing import Optional

from fastapi import Header
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from src.api.errors import AuthenticationError
from src.db.repository import upsert_user

logger = logging.getLogger(__name__)


class CurrentUser(BaseModel):
    """The authenticated caller."""

    open_id: str
    id: Optional[int] = None  # None when the template store is unavailable
    name: Optional[str] = None
    role: str = "user"


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
    x_login_method: Optional[str] = Header(None),
) -> CurrentUser:
    """FastAPI dependency resolving the caller from identity headers."""
    open_id = (x_user_id or "").strip()
    if not open_id:
        raise AuthenticationError()

    try:
        user = upsert_user(
            open_id,
            name=x_user_name,
            email=x_user_email,
            login_method=x_login_method,
        )
    except SQLAlchemyError as e:
        logger.warning(f"[Database] Cannot resolve user {open_id}, template store degraded: {e}")
        user = None

    if user is None:
        return CurrentUser(open_id=open_id, name=x_user_name)

    return CurrentUser(open_id=user.open_id, id=user.id, name=user.name, role=user.role)
