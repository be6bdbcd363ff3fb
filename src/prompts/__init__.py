"""Prompt templates for AI operations."""

from .message_generation import (
    CHANNEL_INSTRUCTIONS,
    GENERATE_MESSAGE_SYSTEM,
    GENERATE_MESSAGE_USER,
    NO_HARDSHIP_REASON,
)

__all__ = [
    "CHANNEL_INSTRUCTIONS",
    "GENERATE_MESSAGE_SYSTEM",
    "GENERATE_MESSAGE_USER",
    "NO_HARDSHIP_REASON",
]
