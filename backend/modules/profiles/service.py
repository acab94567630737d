"""
Profile reconciliation.

Every signed-in browser must end up with exactly one row in ``users``.
The row is created lazily, the first time a session is seen without one,
seeded from pending signup data or provider metadata.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from modules.auth.exceptions import InvalidSessionError, SessionError
from modules.auth.interfaces import ISessionStore
from shared.exceptions import BrewhouseError
from shared.models import Session

from .cache import UserDataCache
from .exceptions import ProfilePersistenceError
from .interfaces import ICurrentUserResolver, IProfileReconciler, IProfileRepository
from .models import CachedUserData, PendingSignup, Profile, ProfileStatus, Role

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("phone", "address", "city", "zipcode")


def _first_present(*values: Any) -> Optional[str]:
    """Return the first value that is a non-blank string."""
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def split_full_name(metadata: dict[str, Any]) -> tuple[Optional[str], Optional[str]]:
    """Split a provider's full name on the first space."""
    full_name = _first_present(metadata.get("full_name"), metadata.get("name"))
    if not full_name:
        return None, None
    first, _, rest = full_name.partition(" ")
    return first, (rest.strip() or None)


def build_new_profile(session: Session, pending: Optional[PendingSignup] = None) -> Profile:
    """
    Synthesize a profile for a session that has no row yet.

    Each field is taken from the pending form first, then from provider
    metadata, then from a fixed fallback. The role is always customer.
    """
    metadata = session.provider_metadata or {}
    form = pending.model_dump() if pending else {}
    meta_first, meta_last = split_full_name(metadata)

    now = datetime.now(timezone.utc)
    return Profile(
        id=session.user_id,
        email=session.user_email,
        firstname=_first_present(form.get("firstname"), metadata.get("firstname"), meta_first) or "User",
        lastname=_first_present(form.get("lastname"), metadata.get("lastname"), meta_last) or "",
        **{
            field: _first_present(form.get(field), metadata.get(field))
            for field in CONTACT_FIELDS
        },
        role=Role.CUSTOMER,
        status=ProfileStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )


class ProfileReconciler(IProfileReconciler):
    """
    Creates missing profile rows on first sight of a session.

    Concurrent calls for the same user are safe: creation goes through the
    repository's upsert, which ignores duplicates on ``id``.
    """

    def __init__(
        self,
        repository: IProfileRepository,
        session_store: Optional[ISessionStore] = None,
    ):
        self._repository = repository
        self._session_store = session_store

    async def ensure_profile(
        self,
        session: Session,
        pending: Optional[PendingSignup] = None,
    ) -> Profile:
        if session is None or not session.user_id:
            raise InvalidSessionError()

        existing = self._repository.find_by_id(session.user_id)
        if existing is not None:
            return existing

        profile = build_new_profile(session, pending)

        try:
            return self._repository.upsert(profile, conflict_key="id")
        except ProfilePersistenceError as e:
            # The session proceeds with the in-memory profile; the next
            # session check retries the insert.
            logger.error(
                "Profile insert failed for user %s: %s",
                session.user_id,
                e.details.get("reason", e.message),
            )
            self._stash_in_metadata(profile)
            return profile

    def _stash_in_metadata(self, profile: Profile) -> None:
        """Copy the synthesized fields onto the auth user, best effort."""
        if self._session_store is None:
            return

        data = {
            "firstname": profile.firstname,
            "lastname": profile.lastname,
            **{field: getattr(profile, field) for field in CONTACT_FIELDS},
        }
        try:
            self._session_store.update_user_metadata(data)
        except BrewhouseError as e:
            logger.warning("Could not stash profile fields in user metadata: %s", e.message)


class CurrentUserResolver(ICurrentUserResolver):
    """
    Resolves who is signed in for the current browser.

    The session store is always re-checked; remembered data is only used
    when it belongs to the live session's user.
    """

    def __init__(
        self,
        session_store: ISessionStore,
        reconciler: IProfileReconciler,
        user_cache: UserDataCache,
    ):
        self._session_store = session_store
        self._reconciler = reconciler
        self._user_cache = user_cache

    async def resolve(self) -> Optional[CachedUserData]:
        try:
            session = self._session_store.get_session()
        except SessionError as e:
            logger.warning("Session check failed: %s", e.details.get("reason", e.message))
            session = None

        if session is None:
            self._user_cache.clear()
            return None

        cached = self._user_cache.read()
        if cached is not None and cached.id == session.user_id:
            return cached

        profile = await self._reconciler.ensure_profile(session)
        data = CachedUserData.from_profile(profile)
        if self._user_cache.should_remember():
            self._user_cache.save(data)
        return data
