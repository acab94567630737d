"""
Base repository class for database access.

Repositories talk to Supabase through the browser-bound client, so every
query runs under that browser's Row Level Security policies.
"""

from typing import Any, ClassVar, Generic, Optional, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# Errors raised by the PostgREST client for a failed query
QUERY_ERRORS = (APIError, httpx.HTTPError)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses set ``TABLE`` and map rows to their model.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            TABLE = "users"

            def find_by_id(self, user_id: str) -> Optional[Profile]:
                result = self._table().select("*").eq("id", user_id).limit(1).execute()
                row = self._first(result)
                return self._map_to_profile(row) if row else None
    """

    TABLE: ClassVar[str] = ""

    def __init__(self, db: Client) -> None:
        self._db = db

    def _table(self):
        """Query builder for this repository's table."""
        return self._db.table(self.TABLE)

    @staticmethod
    def _first(result: Any) -> Optional[dict[str, Any]]:
        """First row of a query result, or None."""
        if not result.data:
            return None
        return result.data[0]

    @staticmethod
    def describe_error(error: Exception) -> str:
        """Short description of a query error for logs and error details."""
        if isinstance(error, APIError):
            return f"{error.code}: {error.message}"
        return str(error) or error.__class__.__name__
