"""
Profile module exceptions.
"""

from shared.exceptions import ExternalServiceError


class ProfileLookupError(ExternalServiceError):
    """Raised when the users table cannot be queried."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Could not look up profile: {user_id}",
            service="supabase",
            code="PROFILE_LOOKUP_FAILED",
            details={"user_id": user_id, "reason": reason},
        )


class ProfilePersistenceError(ExternalServiceError):
    """Raised when a profile row cannot be written."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Could not persist profile: {user_id}",
            service="supabase",
            code="PROFILE_PERSIST_FAILED",
            details={"user_id": user_id, "reason": reason},
        )
