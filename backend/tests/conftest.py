"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
in-memory fakes for the session store and the profile repository, plus
browser storage and caches wired on top of them.
"""

from typing import Any, Optional

import pytest

from modules.auth.exceptions import SessionError, SignInError
from modules.profiles.cache import PendingSignupCache, UserDataCache
from modules.profiles.exceptions import ProfileLookupError, ProfilePersistenceError
from modules.profiles.models import Profile, ProfileStatus, Role
from shared.config import get_settings
from shared.models import Session
from shared.storage import MemoryStorage

TEST_APP_URL = "https://shop.example.com"


class FakeSessionStore:
    """In-memory ISessionStore with switchable failures."""

    def __init__(self, session: Optional[Session] = None):
        self.session = session
        self.exchange_result: Optional[Session] = None
        self.fail_get = False
        self.fail_exchange = False
        self.fail_sign_in = False
        self.fail_update = False
        self.exchanged_codes: list[str] = []
        self.email_links: list[dict[str, Any]] = []
        self.oauth_requests: list[dict[str, Any]] = []
        self.metadata_updates: list[dict[str, Any]] = []
        self.signed_out = False
        self.listeners: list = []
        self.calls: list[str] = []

    def get_session(self) -> Optional[Session]:
        self.calls.append("get_session")
        if self.fail_get:
            raise SessionError("refresh token revoked")
        return self.session

    def sign_in_with_email_link(self, email, redirect_to, data=None) -> None:
        if self.fail_sign_in:
            raise SignInError("rate limited")
        self.email_links.append({"email": email, "redirect_to": redirect_to, "data": data})

    def sign_in_with_oauth(self, provider, redirect_to, extra_params=None) -> str:
        if self.fail_sign_in:
            raise SignInError("provider disabled")
        self.oauth_requests.append(
            {"provider": provider, "redirect_to": redirect_to, "extra_params": extra_params}
        )
        return f"https://auth.example.com/authorize?provider={provider}"

    def exchange_code_for_session(self, code: str) -> Session:
        self.calls.append("exchange_code_for_session")
        self.exchanged_codes.append(code)
        if self.fail_exchange:
            raise SessionError("invalid flow state")
        if self.exchange_result is not None:
            self.session = self.exchange_result
        if self.session is None:
            raise SessionError("Invalid session data returned")
        self.emit("SIGNED_IN", self.session)
        return self.session

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self.listeners:
                self.listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, session: Optional[Session]) -> None:
        for listener in list(self.listeners):
            listener(event, session)

    def sign_out(self) -> None:
        self.signed_out = True
        self.session = None
        self.emit("SIGNED_OUT", None)

    def update_user_metadata(self, data: dict[str, Any]) -> None:
        if self.fail_update:
            raise SessionError("user update rejected")
        self.metadata_updates.append(data)


class FakeProfileRepository:
    """Dict-backed IProfileRepository; upsert ignores duplicates on id."""

    def __init__(self, rows: Optional[dict[str, Profile]] = None):
        self.rows: dict[str, Profile] = dict(rows or {})
        self.fail_lookup = False
        self.fail_upsert = False
        self.upsert_calls = 0
        self.calls: list[str] = []

    def find_by_id(self, user_id: str) -> Optional[Profile]:
        self.calls.append("find_by_id")
        if self.fail_lookup:
            raise ProfileLookupError(user_id, "connection refused")
        return self.rows.get(user_id)

    def list_users(self) -> list[Profile]:
        self.calls.append("list_users")
        if self.fail_lookup:
            raise ProfileLookupError("*", "connection refused")
        return list(self.rows.values())

    def insert(self, profile: Profile) -> Profile:
        if profile.id in self.rows:
            raise ProfilePersistenceError(profile.id, "23505: duplicate key")
        self.rows[profile.id] = profile
        return profile

    def upsert(self, profile: Profile, conflict_key: str = "id") -> Profile:
        self.calls.append("upsert")
        self.upsert_calls += 1
        if self.fail_upsert:
            raise ProfilePersistenceError(profile.id, "42501: permission denied")
        return self.rows.setdefault(profile.id, profile)


def make_session(
    user_id: str = "user-123",
    email: str = "jane@example.com",
    **metadata: Any,
) -> Session:
    return Session(user_id=user_id, user_email=email, provider_metadata=metadata)


def make_profile(
    user_id: str = "user-123",
    role: Role = Role.CUSTOMER,
    status: ProfileStatus = ProfileStatus.ACTIVE,
    **fields: Any,
) -> Profile:
    data = {"email": "jane@example.com", "firstname": "Jane", "lastname": "Doe"}
    data.update(fields)
    return Profile(id=user_id, role=role, status=status, **data)


@pytest.fixture(autouse=True)
def app_settings(monkeypatch):
    """Point every test at a fixed application URL."""
    monkeypatch.setenv("APP_URL", TEST_APP_URL)
    monkeypatch.setenv("AUTH_FAILURE_REDIRECT_MS", "3000")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def pending_cache(storage) -> PendingSignupCache:
    return PendingSignupCache(storage)


@pytest.fixture
def user_cache(storage) -> UserDataCache:
    return UserDataCache(storage)


@pytest.fixture
def session_store() -> FakeSessionStore:
    return FakeSessionStore()


@pytest.fixture
def repository() -> FakeProfileRepository:
    return FakeProfileRepository()


@pytest.fixture
def session_factory():
    """Build sessions: ``session_factory(user_id, email, **metadata)``."""
    return make_session


@pytest.fixture
def profile_factory():
    """Build profiles: ``profile_factory(user_id, role, status, **fields)``."""
    return make_profile
