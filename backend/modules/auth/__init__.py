"""
Authentication module.

Wraps the hosted auth provider (Supabase Auth) and the account entry
points: magic-link and OAuth sign-in, signup and sign-out.

Public API:
- ISessionStore: Interface for session operations
- AuthChangeEvent, OAuthProvider, SignupForm, LoginRequest: models
- Auth exceptions: SessionError, OAuthProviderError, SignInError, etc.
"""

from .interfaces import ISessionStore
from .models import (
    AuthChangeEvent,
    OAuthProvider,
    SignupForm,
    LoginRequest,
    MagicLinkResponse,
    OAuthStartResponse,
)
from .exceptions import (
    SessionError,
    InvalidSessionError,
    OAuthProviderError,
    SignInError,
    SignOutError,
    SignupValidationError,
)

__all__ = [
    # Interface
    "ISessionStore",
    # Models
    "AuthChangeEvent",
    "OAuthProvider",
    "SignupForm",
    "LoginRequest",
    "MagicLinkResponse",
    "OAuthStartResponse",
    # Exceptions
    "SessionError",
    "InvalidSessionError",
    "OAuthProviderError",
    "SignInError",
    "SignOutError",
    "SignupValidationError",
]
