"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)


class ValidationErrorResponse(ErrorResponse):
    """Field-level validation error response format."""

    error: str = "SIGNUP_INVALID"
    fields: dict[str, str] = Field(default_factory=dict)
