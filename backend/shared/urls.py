"""
Absolute URL construction for auth redirects.

OAuth providers and magic-link emails need an absolute return address.
Both are built from the configured application base URL.
"""

from typing import Optional

from .config import Settings, get_settings
from .exceptions import ConfigurationError


def get_app_url(settings: Optional[Settings] = None) -> str:
    """
    Return the configured application base URL without trailing slashes.

    Raises:
        ConfigurationError: If APP_URL is not configured
    """
    settings = settings or get_settings()
    app_url = settings.app_url.strip()

    if not app_url:
        raise ConfigurationError(
            "APP_URL is not defined in environment variables.",
            code="APP_URL_MISSING",
        )

    return app_url.rstrip("/")


def build_redirect(path: str, settings: Optional[Settings] = None) -> str:
    """
    Build an absolute URL for a path inside the application.

    Args:
        path: Relative path, with or without a leading slash

    Returns:
        Absolute URL with exactly one slash between base and path
    """
    safe_path = "/" + path.lstrip("/")
    return f"{get_app_url(settings)}{safe_path}"
