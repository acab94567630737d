"""
Callback module data models.
"""

from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from modules.profiles.models import Role

AUTH_FAILED_MESSAGE = "Authentication failed. Please try again."


class CallbackState(str, Enum):
    """States of the redirect-back flow."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    ABORTED = "aborted"  # finished after cancellation or behind a newer run


class FailureKind(str, Enum):
    """Why a callback failed. The first two are silent."""

    CANCELLED = "cancelled"            # provider reported access_denied
    NO_SESSION = "no_session"          # nothing materialized from the redirect
    PROVIDER = "provider"              # any other provider-reported error
    SESSION = "session"                # session store failed
    RECONCILIATION = "reconciliation"  # profile could not be ensured

    @property
    def silent(self) -> bool:
        return self in (FailureKind.CANCELLED, FailureKind.NO_SESSION)


class Navigation(BaseModel):
    """A navigation request: go to ``path``, optionally after a delay."""

    path: str
    replace: bool = True
    delay_ms: int = 0

    model_config = {"frozen": True}


class CallbackParams(BaseModel):
    """
    Parameters the provider put on the callback URL.

    With the PKCE flow both the code and any provider error arrive in the
    query string. Fragments never reach the server, so they are not read.
    """

    code: Optional[str] = None
    error: Optional[str] = None
    error_description: Optional[str] = None

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> "CallbackParams":
        return cls(
            code=query.get("code") or None,
            error=query.get("error") or None,
            error_description=query.get("error_description") or None,
        )

    def provider_error(self) -> Optional[tuple[str, Optional[str]]]:
        """``(error, description)`` if the provider reported one."""
        if self.error:
            return self.error, self.error_description
        return None


class CallbackOutcome(BaseModel):
    """Terminal result of a callback run."""

    state: CallbackState
    navigation: Optional[Navigation] = None
    failure: Optional[FailureKind] = None
    message: Optional[str] = Field(None, description="User-facing message, absent for silent outcomes")
    recovery_path: Optional[str] = Field(None, description="Manual way back for failures")
    user_id: Optional[str] = None
    role: Optional[Role] = None

    model_config = {"frozen": True}
