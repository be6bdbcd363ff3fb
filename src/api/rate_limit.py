"""Shared per-IP rate limiter (registered on app.state.limiter in main.py)."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from src.config.settings import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
