"""
Profile module interfaces.

Other modules should depend on these protocols, not the concrete
Supabase-backed implementations. Tests substitute in-memory fakes.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import Session

from .models import CachedUserData, PendingSignup, Profile


@runtime_checkable
class IProfileRepository(Protocol):
    """Record store holding one profile row per auth user."""

    def find_by_id(self, user_id: str) -> Optional[Profile]:
        """
        Point lookup of a profile.

        Returns:
            Profile if found, None otherwise

        Raises:
            ProfileLookupError: If the query itself fails
        """
        ...

    def list_users(self) -> list[Profile]:
        """
        All profile rows, oldest first.

        Row Level Security decides which rows a browser may read.

        Raises:
            ProfileLookupError: If the query fails
        """
        ...

    def insert(self, profile: Profile) -> Profile:
        """
        Insert a new profile row.

        Raises:
            ProfilePersistenceError: If the insert fails (including conflicts)
        """
        ...

    def upsert(self, profile: Profile, conflict_key: str = "id") -> Profile:
        """
        Insert a profile unless a row with the same conflict key exists.

        An existing row is never overwritten; the stored row is returned.

        Raises:
            ProfilePersistenceError: If the write fails
        """
        ...


@runtime_checkable
class IProfileReconciler(Protocol):
    """Ensures a profile row exists for a live session."""

    async def ensure_profile(
        self,
        session: Session,
        pending: Optional[PendingSignup] = None,
    ) -> Profile:
        """
        Return the session's profile, creating it if missing.

        Args:
            session: Live session with a non-empty user id
            pending: Optional signup form data used to seed a new profile

        Returns:
            The stored profile, or the synthesized one if it could not be persisted

        Raises:
            InvalidSessionError: If the session has no user id
            ProfileLookupError: If the existing profile cannot be queried
        """
        ...


@runtime_checkable
class ICurrentUserResolver(Protocol):
    """Resolves the signed-in user's cached projection."""

    async def resolve(self) -> Optional[CachedUserData]:
        ...
