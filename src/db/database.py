"""
Database engine and session factory.

The engine is created lazily from settings.database_url. When no URL is
configured, or the engine cannot be created, the store is reported as
unavailable and callers degrade instead of failing.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.config.settings import settings

from .models import Base

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def configure_database(url: Optional[str], **engine_kwargs) -> Optional[sessionmaker]:
    """
    (Re)bind the store to a database URL and create missing tables.

    Passing None disconnects the store.
    """
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None

    if not url:
        return None

    try:
        engine = create_engine(url, echo=settings.database_echo, **engine_kwargs)
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        logger.warning(f"[Database] Failed to connect: {e}")
        return None

    _engine = engine
    _session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    logger.info("[Database] Connected (dialect=%s)", engine.dialect.name)
    return _session_factory


def get_session_factory() -> Optional[sessionmaker]:
    """Session factory for the configured store, or None when unavailable."""
    if _session_factory is None and settings.database_url:
        configure_database(settings.database_url, pool_pre_ping=True)
    return _session_factory


def get_session() -> Optional[Session]:
    factory = get_session_factory()
    return factory() if factory is not None else None


def is_database_available() -> bool:
    return get_session_factory() is not None
