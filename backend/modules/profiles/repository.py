"""
Profile repository for database access.

Encapsulates the Supabase queries against the ``users`` table. Row Level
Security on that table is what scopes a browser to its own row; the
repository performs no authorization checks itself.
"""

from typing import Any, Optional

from supabase import Client

from shared.repository import QUERY_ERRORS, BaseRepository

from .exceptions import ProfileLookupError, ProfilePersistenceError
from .interfaces import IProfileRepository
from .models import Profile

LIST_COLUMNS = "id, email, firstname, lastname, phone, role, status, city, zipcode, created_at"


class ProfileRepository(BaseRepository[Profile], IProfileRepository):
    """
    Repository for profile rows.

    Uniqueness of profiles is enforced by the table's primary key on
    ``id``; ``upsert`` relies on it to make concurrent creation idempotent.
    """

    TABLE = "users"

    def __init__(self, db: Client) -> None:
        super().__init__(db)

    def find_by_id(self, user_id: str) -> Optional[Profile]:
        """Get a profile by auth user id, or None if there is no row."""
        try:
            result = self._table().select("*").eq("id", user_id).limit(1).execute()
        except QUERY_ERRORS as e:
            raise ProfileLookupError(user_id, self.describe_error(e)) from e

        row = self._first(result)
        return self._map_to_profile(row) if row else None

    def list_users(self) -> list[Profile]:
        """List profile rows, oldest first."""
        try:
            result = self._table().select(LIST_COLUMNS).order("created_at").execute()
        except QUERY_ERRORS as e:
            raise ProfileLookupError("*", self.describe_error(e)) from e

        return [self._map_to_profile(row) for row in result.data or []]

    def insert(self, profile: Profile) -> Profile:
        """Insert a profile row and return the stored representation."""
        try:
            result = self._table().insert(profile.to_row()).execute()
        except QUERY_ERRORS as e:
            raise ProfilePersistenceError(profile.id, self.describe_error(e)) from e

        row = self._first(result)
        return self._map_to_profile(row) if row else profile

    def upsert(self, profile: Profile, conflict_key: str = "id") -> Profile:
        """
        Create a profile row unless one already exists for the conflict key.

        Uses ``ON CONFLICT DO NOTHING`` semantics: a concurrent creator that
        lost the race gets no row back, in which case the winner's row is
        read and returned.
        """
        try:
            result = (
                self._table()
                .upsert(
                    profile.to_row(),
                    on_conflict=conflict_key,
                    ignore_duplicates=True,
                )
                .execute()
            )
        except QUERY_ERRORS as e:
            raise ProfilePersistenceError(profile.id, self.describe_error(e)) from e

        row = self._first(result)
        if row:
            return self._map_to_profile(row)

        try:
            stored = self.find_by_id(profile.id)
        except ProfileLookupError as e:
            raise ProfilePersistenceError(profile.id, e.details.get("reason", "")) from e

        return stored or profile

    def _map_to_profile(self, data: dict[str, Any]) -> Profile:
        """Map database row to Profile model."""
        return Profile(
            id=str(data["id"]),
            email=data.get("email") or "",
            firstname=data.get("firstname"),
            lastname=data.get("lastname"),
            phone=data.get("phone"),
            address=data.get("address"),
            city=data.get("city"),
            zipcode=data.get("zipcode"),
            role=data.get("role"),
            status=data.get("status"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
