"""
Session store implementation backed by Supabase Auth.

Wraps one browser's Supabase client and translates its session objects
and errors into the storefront's own types.
"""

import logging
from typing import Any, Optional

import httpx
from supabase import AuthError, Client

from shared.models import Session

from .exceptions import SessionError, SignInError, SignOutError
from .interfaces import AuthStateCallback, ISessionStore, Unsubscribe

logger = logging.getLogger(__name__)


def to_session(raw: Any) -> Optional[Session]:
    """Convert a Supabase session object into a Session snapshot."""
    if raw is None or getattr(raw, "user", None) is None:
        return None

    user = raw.user
    if not user.id:
        return None

    return Session(
        user_id=str(user.id),
        user_email=user.email or "",
        provider_metadata=dict(user.user_metadata or {}),
        access_token=raw.access_token or "",
        expires_at=raw.expires_at,
    )


class SupabaseSessionStore(ISessionStore):
    """
    Implementation of the session store.

    The wrapped client persists its auth state in the browser's storage,
    so one instance per request is enough.
    """

    def __init__(self, client: Client):
        self._client = client

    def get_session(self) -> Optional[Session]:
        try:
            raw = self._client.auth.get_session()
        except (AuthError, httpx.HTTPError) as e:
            raise SessionError(str(e)) from e
        return to_session(raw)

    def sign_in_with_email_link(
        self,
        email: str,
        redirect_to: str,
        data: Optional[dict[str, Any]] = None,
    ) -> None:
        options: dict[str, Any] = {"email_redirect_to": redirect_to}
        if data:
            options["data"] = data

        try:
            self._client.auth.sign_in_with_otp({"email": email, "options": options})
        except (AuthError, httpx.HTTPError) as e:
            raise SignInError(str(e)) from e

    def sign_in_with_oauth(
        self,
        provider: str,
        redirect_to: str,
        extra_params: Optional[dict[str, str]] = None,
    ) -> str:
        options: dict[str, Any] = {"redirect_to": redirect_to}
        if extra_params:
            options["query_params"] = extra_params

        try:
            response = self._client.auth.sign_in_with_oauth(
                {"provider": provider, "options": options}
            )
        except (AuthError, httpx.HTTPError) as e:
            raise SignInError(str(e)) from e

        if not response.url:
            raise SignInError(f"No authorize URL returned for {provider}")
        return response.url

    def exchange_code_for_session(self, code: str) -> Session:
        try:
            response = self._client.auth.exchange_code_for_session({"auth_code": code})
        except (AuthError, httpx.HTTPError) as e:
            raise SessionError(str(e)) from e

        session = to_session(response.session)
        if session is None:
            raise SessionError("Invalid session data returned")
        return session

    def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        def listener(event: str, raw_session: Any) -> None:
            callback(str(event), to_session(raw_session))

        subscription = self._client.auth.on_auth_state_change(listener)
        return subscription.unsubscribe

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except (AuthError, httpx.HTTPError) as e:
            logger.error("Error signing out: %s", e)
            raise SignOutError(str(e)) from e

    def update_user_metadata(self, data: dict[str, Any]) -> None:
        try:
            self._client.auth.update_user({"data": data})
        except (AuthError, httpx.HTTPError) as e:
            raise SessionError(str(e)) from e
