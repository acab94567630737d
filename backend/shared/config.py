"""
Centralized configuration for the Brewhouse storefront.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, AUTH_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Brewhouse"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Public base URL of the storefront, used to build OAuth/email return addresses
    app_url: str = ""

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Auth flow
    auth_failure_redirect_ms: int = 3000
    remember_me_default: bool = False


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
