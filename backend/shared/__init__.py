"""
Shared infrastructure for the Brewhouse storefront.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- storage: Per-browser key/value storage kept server-side
- urls: Absolute redirect URL construction
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_browser_client
from .exceptions import (
    BrewhouseError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ExternalServiceError,
)
from .models import Session
from .storage import BrowserStorage, BrowserStore, KeyValueStorage, MemoryStorage
from .urls import build_redirect, get_app_url

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_browser_client",
    "BrewhouseError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "ExternalServiceError",
    "Session",
    "BrowserStorage",
    "BrowserStore",
    "KeyValueStorage",
    "MemoryStorage",
    "build_redirect",
    "get_app_url",
]
