"""
Structured error handling for the Debt Communication Assistant.

Provides custom exceptions and standardized error response models
for consistent API error responses.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"

    # Generation errors (5xx)
    GENERATION_FAILED = "GENERATION_FAILED"
    LLM_RESPONSE_INVALID = "LLM_RESPONSE_INVALID"

    # Template store errors (5xx)
    TEMPLATE_SAVE_FAILED = "TEMPLATE_SAVE_FAILED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """
    Standardized error response format.

    All API errors return this structure for consistent client handling.
    """

    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional error details (field errors, etc.)",
    )
    request_id: Optional[str] = Field(
        None,
        description="Request ID for tracing",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the error occurred",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Failed to generate message",
                "error_code": "GENERATION_FAILED",
                "details": {"provider": "gemini"},
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "timestamp": "2025-03-04T10:30:00Z",
            }
        }
    }


# Custom Exceptions


class DebtCommBaseError(Exception):
    """Base exception for all Debt Communication Assistant errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(DebtCommBaseError):
    """Raised when a template endpoint is called without a caller identity."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            error_code=ErrorCode.AUTHENTICATION_REQUIRED,
            status_code=401,
        )


class LLMResponseInvalidError(DebtCommBaseError):
    """Raised when the LLM response carries no usable text."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.LLM_RESPONSE_INVALID,
            details=details,
            status_code=500,
        )


class MessageGenerationError(DebtCommBaseError):
    """
    Raised when a message could not be generated.

    Every LLM failure (unreachable provider, provider error, empty or
    malformed response) collapses into this single error.
    """

    def __init__(self, provider: Optional[str] = None, reason: Optional[str] = None):
        details = {}
        if provider:
            details["provider"] = provider
        if reason:
            details["reason"] = reason
        super().__init__(
            message="Failed to generate message",
            error_code=ErrorCode.GENERATION_FAILED,
            details=details or None,
            status_code=503,
        )


class TemplateSaveError(DebtCommBaseError):
    """Raised when a template could not be stored."""

    def __init__(self):
        super().__init__(
            message="Failed to save template",
            error_code=ErrorCode.TEMPLATE_SAVE_FAILED,
            status_code=500,
        )
