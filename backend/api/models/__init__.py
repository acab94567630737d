"""API models package."""

from .errors import ErrorResponse, ValidationErrorResponse
from .pages import PageResponse

__all__ = [
    "ErrorResponse",
    "ValidationErrorResponse",
    "PageResponse",
]
