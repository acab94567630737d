"""
Database client factory for Supabase.

The storefront talks to Supabase as the signed-in browser would: with
the anon key, its own auth session and Row Level Security. A client is
therefore created per browser, on top of that browser's storage.
"""

from supabase import Client, ClientOptions, create_client

from .config import get_settings
from .storage import KeyValueStorage


def get_supabase_browser_client(storage: KeyValueStorage) -> Client:
    """
    Get a Supabase client bound to one browser's storage.

    The auth session, refresh token and PKCE code verifier are read from
    and written to ``storage``, so consecutive requests from the same
    browser share one auth session.

    Args:
        storage: Per-browser key/value storage

    Returns:
        Supabase client configured with the anon key and PKCE flow
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=ClientOptions(
            storage=storage,
            flow_type="pkce",
            persist_session=True,
            # No background refresh timers inside a request/response server
            auto_refresh_token=False,
        ),
    )
