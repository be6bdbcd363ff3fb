from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class GeneratedMessage(BaseModel):
    """Message produced by one generation call."""

    model_config = ConfigDict(frozen=True)

    channel: str
    tone: str
    subject: Optional[str] = None
    content: str


class MessageTemplateResponse(BaseModel):
    """A saved template as stored for its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    customer_segment: str
    channel: str
    tone: str
    subject: Optional[str] = None
    content: str
    tags: Optional[str] = None
    is_public: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeleteTemplateResponse(BaseModel):
    """Result of a template delete."""
    success: bool


class HealthResponse(BaseModel):
    """Health check response."""
    status: str  # "healthy", "degraded"
    version: str
    provider: str  # "gemini", "openai"
    model: str
    model_available: bool = True
    database_available: bool = False
    uptime_seconds: Optional[float] = None
