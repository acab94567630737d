"""
Dependency injection setup for FastAPI.

Every browser gets its own Supabase client, bound to that browser's slots
in the server-side BrowserStore. The session cookie carries only the
browser id. The BrowserContext is the per-request "container" that wires
that client into the module implementations. Services are created lazily
on first access and cached for the rest of the request.

Tests replace ``get_browser_context`` through ``app.dependency_overrides``.
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Request

from modules.profiles.cache import PendingSignupCache, UserDataCache
from shared.config import get_settings
from shared.storage import BrowserStore, KeyValueStorage

from .config import get_settings as get_api_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.account import AccountService
    from modules.auth.interfaces import ISessionStore
    from modules.callback.flow import AuthCallbackFlow
    from modules.callback.navigation import INavigator
    from modules.profiles.interfaces import (
        ICurrentUserResolver,
        IProfileReconciler,
        IProfileRepository,
    )
    from modules.routing.guard import RouteGuard


class BrowserContext:
    """
    Container for one browser's service instances.

    Subclasses (or tests) may pre-populate the session store and profile
    repository; everything else is derived from those two.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        session_store: "ISessionStore | None" = None,
        profile_repository: "IProfileRepository | None" = None,
    ) -> None:
        self.storage = storage
        self._client: "Client | None" = None
        self._session_store = session_store
        self._profile_repository = profile_repository
        self._reconciler: "IProfileReconciler | None" = None
        self._pending_cache: Optional[PendingSignupCache] = None
        self._user_cache: Optional[UserDataCache] = None

    @property
    def client(self) -> "Client":
        """Get the browser-bound Supabase client."""
        if self._client is None:
            from shared.database import get_supabase_browser_client
            self._client = get_supabase_browser_client(self.storage)
        return self._client

    @property
    def session_store(self) -> "ISessionStore":
        """Get the session store instance."""
        if self._session_store is None:
            from modules.auth.service import SupabaseSessionStore
            self._session_store = SupabaseSessionStore(self.client)
        return self._session_store

    @property
    def profile_repository(self) -> "IProfileRepository":
        """Get the profile repository instance."""
        if self._profile_repository is None:
            from modules.profiles.repository import ProfileRepository
            self._profile_repository = ProfileRepository(self.client)
        return self._profile_repository

    @property
    def reconciler(self) -> "IProfileReconciler":
        """Get the profile reconciler instance."""
        if self._reconciler is None:
            from modules.profiles.service import ProfileReconciler
            self._reconciler = ProfileReconciler(
                self.profile_repository,
                session_store=self.session_store,
            )
        return self._reconciler

    @property
    def pending_cache(self) -> PendingSignupCache:
        if self._pending_cache is None:
            self._pending_cache = PendingSignupCache(self.storage)
        return self._pending_cache

    @property
    def user_cache(self) -> UserDataCache:
        if self._user_cache is None:
            self._user_cache = UserDataCache(self.storage)
        return self._user_cache

    @property
    def accounts(self) -> "AccountService":
        from modules.auth.account import AccountService
        return AccountService(self.session_store, self.pending_cache, self.user_cache)

    @property
    def current_user(self) -> "ICurrentUserResolver":
        from modules.profiles.service import CurrentUserResolver
        return CurrentUserResolver(self.session_store, self.reconciler, self.user_cache)

    @property
    def route_guard(self) -> "RouteGuard":
        from modules.routing.guard import RouteGuard
        return RouteGuard(self.session_store, self.reconciler, self.user_cache)

    def callback_flow(self, navigator: "INavigator") -> "AuthCallbackFlow":
        """Create a fresh callback flow for one callback page."""
        from modules.callback.flow import AuthCallbackFlow
        return AuthCallbackFlow(
            session_store=self.session_store,
            reconciler=self.reconciler,
            pending_cache=self.pending_cache,
            user_cache=self.user_cache,
            navigator=navigator,
            failure_delay_ms=get_settings().auth_failure_redirect_ms,
        )


BROWSER_ID_KEY = "browser_id"

_browser_store: Optional[BrowserStore] = None


def get_browser_store() -> BrowserStore:
    """Get the process-wide browser store, creating it on first use."""
    global _browser_store
    if _browser_store is None:
        _browser_store = BrowserStore(max_age=get_api_settings().session_max_age)
    return _browser_store


def reset_browser_store() -> None:
    """Drop the browser store (for testing)."""
    global _browser_store
    _browser_store = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_browser_context(request: Request) -> BrowserContext:
    """
    FastAPI dependency for the requesting browser's services.

    A browser without a browser id in its session cookie is issued a new one.
    """
    store = get_browser_store()
    browser_id = request.session.get(BROWSER_ID_KEY)
    if not isinstance(browser_id, str) or not browser_id:
        store.purge_expired()
        browser_id = store.new_browser_id()
        request.session[BROWSER_ID_KEY] = browser_id
    return BrowserContext(store.storage_for(browser_id))
