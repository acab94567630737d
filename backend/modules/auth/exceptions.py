"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ExternalServiceError, ValidationError


class SessionError(AuthenticationError):
    """Raised when the auth backend cannot produce or validate a session."""

    def __init__(self, reason: str, message: str = "Authentication failed"):
        super().__init__(
            message,
            code="SESSION_ERROR",
            details={"reason": reason},
        )


class InvalidSessionError(AuthenticationError):
    """Raised when a session carries no user id."""

    def __init__(self, message: str = "Invalid session: no user ID found"):
        super().__init__(message, code="INVALID_SESSION")


class OAuthProviderError(AuthenticationError):
    """Raised when the OAuth provider reported an error on the callback."""

    def __init__(self, error: str, description: Optional[str] = None):
        super().__init__(
            description or f"OAuth error: {error}",
            code="OAUTH_PROVIDER_ERROR",
            details={"error": error, "description": description},
        )
        self.error = error
        self.description = description

    @property
    def is_cancellation(self) -> bool:
        """The user declined consent or closed the provider screen."""
        return self.error == "access_denied"


class SignInError(ExternalServiceError):
    """Raised when a magic link or OAuth redirect cannot be started."""

    def __init__(self, reason: str, message: str = "Could not start sign-in"):
        super().__init__(
            message,
            service="supabase",
            code="SIGN_IN_FAILED",
            details={"reason": reason},
        )


class SignOutError(ExternalServiceError):
    """Raised when the auth backend rejects a sign-out."""

    def __init__(self, reason: str):
        super().__init__(
            "Sign-out failed",
            service="supabase",
            code="SIGN_OUT_FAILED",
            details={"reason": reason},
        )


class SignupValidationError(ValidationError):
    """Raised when the signup form has field-level errors."""

    def __init__(self, fields: dict[str, str]):
        super().__init__(
            next(iter(fields.values()), "Invalid signup form"),
            code="SIGNUP_INVALID",
            details={"fields": fields},
        )
        self.fields = fields
