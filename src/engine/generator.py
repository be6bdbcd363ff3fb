"""
Collection message generation engine.

Selects a tone from the customer profile, builds the prompt, makes one LLM
call and scrapes the free-text reply into a subject/content pair. Any
failure on the LLM side surfaces as a single MessageGenerationError; there
is no retry and no partial result.
"""

import logging

from src.api.errors import LLMResponseInvalidError, MessageGenerationError
from src.api.models.requests import CustomerProfile
from src.api.models.responses import GeneratedMessage
from src.config.settings import settings
from src.engine.parser import parse_message_response
from src.engine.tone import determine_tone
from src.llm.factory import llm_client
from src.prompts import (
    CHANNEL_INSTRUCTIONS,
    GENERATE_MESSAGE_SYSTEM,
    GENERATE_MESSAGE_USER,
    NO_HARDSHIP_REASON,
)

logger = logging.getLogger(__name__)


def format_amount(amount: float) -> str:
    """Thousands separators, at most two decimals, no trailing zeros (1500 -> '1,500')."""
    return f"{amount:,.2f}".rstrip("0").rstrip(".")


def build_user_prompt(profile: CustomerProfile, tone: str) -> str:
    channel = profile.preferred_channel.value
    return GENERATE_MESSAGE_USER.format(
        name=profile.name,
        currency=settings.currency,
        debt_amount=format_amount(profile.debt_amount),
        days_past_due=profile.days_past_due,
        customer_segment=profile.customer_segment.value,
        hardship_reason=profile.hardship_reason or NO_HARDSHIP_REASON,
        channel=channel,
        channel_instruction=CHANNEL_INSTRUCTIONS[channel],
        tone=tone,
    )


def format_message_text(message: GeneratedMessage, label_subject: bool = True) -> str:
    """
    Render a message as plain text.

    The copy form labels the subject ("Subject: ..."); the download form
    (label_subject=False) puts the bare subject on the first line.
    """
    if not message.subject:
        return message.content
    subject_line = f"Subject: {message.subject}" if label_subject else message.subject
    return f"{subject_line}\n\n{message.content}"


class MessageGenerator:
    """Generates collection messages for a single customer profile."""

    async def generate(self, profile: CustomerProfile) -> GeneratedMessage:
        tone = determine_tone(profile)
        user_prompt = build_user_prompt(profile, tone)

        try:
            response = await llm_client.complete(
                system_prompt=GENERATE_MESSAGE_SYSTEM,
                user_prompt=user_prompt,
            )
            raw_content = response.content
            if not raw_content or not raw_content.strip():
                raise LLMResponseInvalidError(
                    message="LLM returned no text content",
                    details={"provider": response.provider, "model": response.model},
                )
        except Exception as e:
            logger.error(f"Error generating message for {profile.name}: {e}")
            raise MessageGenerationError(
                provider=llm_client.provider_name,
                reason=type(e).__name__,
            ) from e

        parsed = parse_message_response(raw_content)

        logger.info(
            f"Generated {profile.preferred_channel.value} message: tone={tone}, "
            f"has_subject={parsed.subject is not None}, "
            f"tokens={response.usage.get('total_tokens', 0)}"
        )

        return GeneratedMessage(
            channel=profile.preferred_channel.value,
            tone=tone,
            subject=parsed.subject,
            content=parsed.content,
        )


# Singleton instance
generator = MessageGenerator()
