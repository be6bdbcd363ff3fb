"""
Request models for the Debt Communication Assistant API.

All string fields carry max_length limits so a single request cannot
blow up the prompt or the template table.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CustomerSegment(str, Enum):
    """Relationship segment the bank assigns to a debtor."""

    LONG_TERM = "long-term"
    NEW = "new"
    CHRONIC_DEFAULTER = "chronic_defaulter"


class Channel(str, Enum):
    """Delivery channel for a collection message."""

    EMAIL = "email"
    SMS = "sms"
    WHATSAPP = "whatsapp"


class CustomerProfile(BaseModel):
    """Debtor profile used to generate one message. Never persisted."""

    name: str = Field(..., min_length=1, max_length=200)
    debt_amount: float = Field(..., ge=0)
    days_past_due: int = Field(..., ge=0)
    customer_segment: CustomerSegment
    hardship_reason: Optional[str] = Field(None, max_length=1000)
    preferred_channel: Channel

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Customer name is required")
        return v


class SaveTemplateRequest(BaseModel):
    """Template fields supplied by the caller; the owner comes from the identity header."""

    name: str = Field(..., max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    customer_segment: CustomerSegment
    channel: Channel
    tone: str = Field(..., max_length=100)
    subject: Optional[str] = Field(None, max_length=500)
    content: str = Field(..., max_length=20000)
    tags: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Template name is required")
        return v

    @field_validator("content")
    @classmethod
    def content_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Template content is required")
        return v
