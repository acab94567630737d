"""
Browser-local caches for the auth flow.

Two slots are kept per browser:

- pending signup data, written right before an OAuth redirect and
  consumed exactly once by the callback that follows it;
- a minimal user projection, kept only while "remember me" is set.

Both caches accept ``storage=None`` for contexts without per-browser
storage; every operation is then a no-op and reads return ``None``.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.storage import KeyValueStorage

from .models import CachedUserData, PendingSignup, Profile

logger = logging.getLogger(__name__)

PENDING_SIGNUP_KEY = "pending_oauth_signup"
USER_DATA_KEY = "user_data"
REMEMBER_ME_KEY = "remember_me"


class PendingSignupCache:
    """Consume-once slot for signup form data surviving an OAuth redirect."""

    def __init__(self, storage: Optional[KeyValueStorage]) -> None:
        self._storage = storage

    def save(self, data: PendingSignup) -> None:
        """Store signup data, replacing any unconsumed earlier attempt."""
        if self._storage is None:
            return
        self._storage.set_item(PENDING_SIGNUP_KEY, data.model_dump_json(exclude_none=True))

    def read(self) -> Optional[PendingSignup]:
        """
        Return the pending data and remove it from storage.

        Malformed content is treated as absent; the slot is cleared either way.
        """
        if self._storage is None:
            return None

        raw = self._storage.get_item(PENDING_SIGNUP_KEY)
        if raw is None:
            return None

        self._storage.remove_item(PENDING_SIGNUP_KEY)
        try:
            return PendingSignup.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Discarding malformed pending signup data")
            return None

    def clear(self) -> None:
        if self._storage is None:
            return
        self._storage.remove_item(PENDING_SIGNUP_KEY)


class UserDataCache:
    """Remembered user projection plus the "remember me" preference."""

    def __init__(self, storage: Optional[KeyValueStorage]) -> None:
        self._storage = storage

    def set_remember(self, remember: bool) -> None:
        if self._storage is None:
            return
        self._storage.set_item(REMEMBER_ME_KEY, json.dumps(remember))

    def should_remember(self) -> bool:
        if self._storage is None:
            return False
        return self._storage.get_item(REMEMBER_ME_KEY) == "true"

    def save(self, data: CachedUserData) -> None:
        if self._storage is None:
            return
        self._storage.set_item(USER_DATA_KEY, data.model_dump_json())

    def save_if_remember(self, profile: Profile) -> Optional[CachedUserData]:
        """Store the profile's projection when "remember me" is set."""
        if not self.should_remember():
            return None
        data = CachedUserData.from_profile(profile)
        self.save(data)
        return data

    def read(self) -> Optional[CachedUserData]:
        """
        Return the remembered projection.

        Content that is not valid JSON or lacks the expected fields is
        cleared and reported as absent.
        """
        if self._storage is None:
            return None

        raw = self._storage.get_item(USER_DATA_KEY)
        if raw is None:
            return None

        try:
            return CachedUserData.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Discarding malformed cached user data")
            self.clear()
            return None

    def clear(self) -> None:
        if self._storage is None:
            return
        self._storage.remove_item(USER_DATA_KEY)

    def clear_all(self) -> None:
        """Forget everything kept for this browser (sign-out)."""
        if self._storage is None:
            return
        for key in (USER_DATA_KEY, PENDING_SIGNUP_KEY, REMEMBER_ME_KEY):
            self._storage.remove_item(key)
