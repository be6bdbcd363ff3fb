"""
Message generation API endpoints.

POST /generate-message  - Draft a collection message for a customer profile.
POST /messages/download - Render a generated message as a text attachment.

Security:
- Rate limited: configurable via settings (default 30/minute per IP)
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from src.api.errors import ErrorResponse
from src.api.models.requests import CustomerProfile
from src.api.models.responses import GeneratedMessage
from src.api.rate_limit import limiter
from src.config.settings import settings
from src.engine.generator import format_message_text, generator

logger = logging.getLogger(__name__)
router = APIRouter()

DOWNLOAD_FILENAME = "message.txt"


@router.post(
    "/generate-message",
    response_model=GeneratedMessage,
    response_model_exclude_none=True,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid customer profile"},
        429: {"description": "Rate limit exceeded"},
        503: {"model": ErrorResponse, "description": "Failed to generate message"},
    },
)
@limiter.limit(settings.rate_limit_generate)
async def generate_message(request: Request, profile: CustomerProfile) -> GeneratedMessage:
    """
    Draft a collection message.

    Returns the channel, the tone that was selected, the subject (omitted
    when none could be recovered) and the message content.
    """
    logger.info(
        f"Generating {profile.preferred_channel.value} message "
        f"(segment={profile.customer_segment.value}, days_past_due={profile.days_past_due})"
    )
    return await generator.generate(profile)


@router.post("/messages/download", response_class=PlainTextResponse)
async def download_message(message: GeneratedMessage) -> PlainTextResponse:
    """Return the message as a plain-text file with the subject on the first line."""
    return PlainTextResponse(
        format_message_text(message, label_subject=False),
        headers={"Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"'},
    )
