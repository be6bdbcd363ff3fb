"""Relational store for users and saved message templates."""

from .database import configure_database, get_session_factory, is_database_available
from .models import Base, MessageTemplate, User

__all__ = [
    "Base",
    "MessageTemplate",
    "User",
    "configure_database",
    "get_session_factory",
    "is_database_available",
]
