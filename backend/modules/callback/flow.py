"""
Auth callback flow.

One-shot state machine run when the browser comes back from an OAuth
provider or a magic link. It composes the session store, the pending
signup cache, the profile reconciler and the role router, in that order:

    consume pending data -> reconcile profile -> remember user -> navigate

Navigation happens last, and only while the flow is still live.
"""

import logging
from typing import Optional

from modules.auth.exceptions import OAuthProviderError, SessionError
from modules.auth.interfaces import ISessionStore
from modules.profiles.cache import PendingSignupCache, UserDataCache
from modules.profiles.interfaces import IProfileReconciler
from modules.routing.policy import PUBLIC_ENTRY_PATH, SIGNUP_PATH, destination_for_profile
from shared.exceptions import BrewhouseError
from shared.models import Session

from .guard import FlowGuard
from .models import (
    AUTH_FAILED_MESSAGE,
    CallbackOutcome,
    CallbackParams,
    CallbackState,
    FailureKind,
    Navigation,
)
from .navigation import INavigator

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_DELAY_MS = 3000


class AuthCallbackFlow:
    """
    Completes a sign-in on the redirect-back page.

    ``run`` is meant to be called once per page; repeated calls return the
    first outcome without side effects. ``complete_sign_in`` is shared with
    the auth-state watcher so both reactions go through one guard.
    """

    def __init__(
        self,
        session_store: ISessionStore,
        reconciler: IProfileReconciler,
        pending_cache: PendingSignupCache,
        user_cache: UserDataCache,
        navigator: INavigator,
        guard: Optional[FlowGuard] = None,
        failure_delay_ms: int = DEFAULT_FAILURE_DELAY_MS,
    ):
        self._session_store = session_store
        self._reconciler = reconciler
        self._pending_cache = pending_cache
        self._user_cache = user_cache
        self._navigator = navigator
        self._guard = guard or FlowGuard()
        self._failure_delay_ms = failure_delay_ms
        self._state = CallbackState.PENDING
        self._outcome: Optional[CallbackOutcome] = None

    @property
    def state(self) -> CallbackState:
        return self._state

    @property
    def guard(self) -> FlowGuard:
        return self._guard

    def cancel(self) -> None:
        """The page went away; no further navigation may happen."""
        self._guard.cancel()

    async def run(self, params: CallbackParams) -> CallbackOutcome:
        if self._outcome is not None:
            return self._outcome

        outcome = await self._handle(params)
        self._outcome = outcome
        self._state = outcome.state
        return outcome

    async def _handle(self, params: CallbackParams) -> CallbackOutcome:
        provider_error = params.provider_error()
        if provider_error is not None:
            error = OAuthProviderError(*provider_error)
            logger.warning("OAuth provider returned %s: %s", error.error, error.description)
            if error.is_cancellation:
                return self._silent_failure(FailureKind.CANCELLED)
            return self._failure(FailureKind.PROVIDER)

        try:
            if params.code:
                self._session_store.exchange_code_for_session(params.code)
            session = self._session_store.get_session()
        except SessionError as e:
            logger.warning("Auth callback session error: %s", e.details.get("reason"))
            return self._failure(FailureKind.SESSION)

        if session is None:
            return self._silent_failure(FailureKind.NO_SESSION)

        return await self.complete_sign_in(session)

    async def complete_sign_in(self, session: Session) -> CallbackOutcome:
        """Reconcile the session's profile and navigate to its landing page."""
        ticket = self._guard.begin(session.user_id)

        # Consumed before anything can fail so it is applied at most once
        pending = self._pending_cache.read()

        try:
            profile = await self._reconciler.ensure_profile(session, pending)
        except BrewhouseError as e:
            logger.error("Auth callback error for user %s: %s", session.user_id, e.message)
            if not self._guard.should_apply(ticket):
                return CallbackOutcome(state=CallbackState.ABORTED, user_id=session.user_id)
            return self._failure(FailureKind.RECONCILIATION)

        if not self._guard.should_apply(ticket):
            return CallbackOutcome(
                state=CallbackState.ABORTED,
                user_id=session.user_id,
                role=profile.role,
            )

        self._user_cache.save_if_remember(profile)

        navigation = Navigation(path=destination_for_profile(profile.role, profile.status))
        self._guard.mark_navigated(ticket)
        self._navigator.navigate(navigation)

        return CallbackOutcome(
            state=CallbackState.SUCCESS,
            navigation=navigation,
            user_id=profile.id,
            role=profile.role,
        )

    def _silent_failure(self, kind: FailureKind) -> CallbackOutcome:
        self._pending_cache.clear()
        navigation = Navigation(path=PUBLIC_ENTRY_PATH)
        if self._guard.alive:
            self._navigator.navigate(navigation)
        return CallbackOutcome(
            state=CallbackState.FAILURE,
            failure=kind,
            navigation=navigation,
        )

    def _failure(self, kind: FailureKind) -> CallbackOutcome:
        self._pending_cache.clear()
        self._user_cache.clear()
        navigation = Navigation(path=SIGNUP_PATH, delay_ms=self._failure_delay_ms)
        if self._guard.alive:
            self._navigator.navigate(navigation)
        return CallbackOutcome(
            state=CallbackState.FAILURE,
            failure=kind,
            navigation=navigation,
            message=AUTH_FAILED_MESSAGE,
            recovery_path=PUBLIC_ENTRY_PATH,
        )
