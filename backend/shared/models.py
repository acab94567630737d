"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, Field


class Session(BaseModel):
    """
    Snapshot of an auth session issued by Supabase.

    The storefront never mutates a session; it only reacts to its
    presence or absence. Built by the session store from whatever the
    auth provider returned.
    """

    user_id: str = Field(..., description="Auth user ID (UUID from Supabase)")
    user_email: str = Field(default="", description="Email on the auth user")
    provider_metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="user_metadata supplied by the sign-in provider",
    )
    access_token: str = Field(default="", description="Bearer token for the session")
    expires_at: Optional[int] = Field(None, description="Expiry as a unix timestamp")

    model_config = {
        "frozen": True,  # Sessions are read-only to this system
        "extra": "ignore",
    }

    @property
    def expiry(self) -> Optional[datetime]:
        """Expiry as an aware datetime, if the provider reported one."""
        if self.expires_at is None:
            return None
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)
