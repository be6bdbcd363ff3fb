"""
Tone selection for collection messages.

Rules are checked in order and the first match wins:
hardship > loyal customer shortly overdue > seriously overdue or chronic > default.
"""

from src.api.models.requests import CustomerProfile, CustomerSegment

TONE_EMPATHETIC = "highly empathetic and supportive"
TONE_FRIENDLY = "friendly reminder, appreciative of loyalty"
TONE_FIRM = "firm, formal, and urgent"
TONE_PROFESSIONAL = "professional and helpful"

LOYALTY_GRACE_DAYS = 30
SERIOUSLY_OVERDUE_DAYS = 90


def determine_tone(profile: CustomerProfile) -> str:
    """Pick the tone for a message to this customer."""
    if profile.hardship_reason:
        return TONE_EMPATHETIC
    if (
        profile.customer_segment == CustomerSegment.LONG_TERM
        and profile.days_past_due < LOYALTY_GRACE_DAYS
    ):
        return TONE_FRIENDLY
    if (
        profile.days_past_due > SERIOUSLY_OVERDUE_DAYS
        or profile.customer_segment == CustomerSegment.CHRONIC_DEFAULTER
    ):
        return TONE_FIRM
    return TONE_PROFESSIONAL
