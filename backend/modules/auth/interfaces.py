"""
Authentication module interface.

Other modules should depend on ISessionStore, not the concrete Supabase
implementation. This enables testing with in-memory fakes.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from shared.models import Session

AuthStateCallback = Callable[[str, Optional[Session]], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class ISessionStore(Protocol):
    """
    Interface for the hosted auth provider.

    Sessions are issued and validated by the provider; the storefront
    only reads them and reacts to changes.
    """

    def get_session(self) -> Optional[Session]:
        """
        Get the browser's current session.

        Returns:
            Session if signed in, None otherwise

        Raises:
            SessionError: If the provider could not be reached or rejected the session
        """
        ...

    def sign_in_with_email_link(
        self,
        email: str,
        redirect_to: str,
        data: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Send a magic link to ``email`` returning to ``redirect_to``.

        Raises:
            SignInError: If the provider refused to send the link
        """
        ...

    def sign_in_with_oauth(
        self,
        provider: str,
        redirect_to: str,
        extra_params: Optional[dict[str, str]] = None,
    ) -> str:
        """
        Start an OAuth sign-in.

        Returns:
            Provider authorize URL the browser must be sent to

        Raises:
            SignInError: If the provider URL could not be produced
        """
        ...

    def exchange_code_for_session(self, code: str) -> Session:
        """
        Exchange a PKCE auth code from the callback URL for a session.

        Raises:
            SessionError: If the code is invalid or expired
        """
        ...

    def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        """
        Subscribe to auth state changes.

        Returns:
            Function that removes the subscription
        """
        ...

    def sign_out(self) -> None:
        """
        Sign the browser out.

        Raises:
            SignOutError: If the provider rejected the sign-out
        """
        ...

    def update_user_metadata(self, data: dict[str, Any]) -> None:
        """
        Merge ``data`` into the auth user's metadata.

        Raises:
            SessionError: If the update failed
        """
        ...
