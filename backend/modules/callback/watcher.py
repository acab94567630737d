"""
Auth-state watcher.

Subscribes to the session store's auth events while a callback page is
live. ``SIGNED_IN`` is funnelled into the flow's ``complete_sign_in`` so
it shares the flow's generation guard; ``SIGNED_OUT`` forgets the
browser's cached data.
"""

import asyncio
import logging
from typing import Optional

from modules.auth.interfaces import ISessionStore, Unsubscribe
from modules.auth.models import AuthChangeEvent
from modules.profiles.cache import UserDataCache
from shared.models import Session

from .flow import AuthCallbackFlow

logger = logging.getLogger(__name__)


class AuthStateWatcher:
    """Bridges auth-state callbacks onto the running event loop."""

    def __init__(
        self,
        session_store: ISessionStore,
        flow: AuthCallbackFlow,
        user_cache: UserDataCache,
    ):
        self._session_store = session_store
        self._flow = flow
        self._user_cache = user_cache
        self._unsubscribe: Optional[Unsubscribe] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._tasks: set[asyncio.Task] = set()

    def start(self) -> None:
        """Subscribe. Must be called from within the event loop."""
        if self._unsubscribe is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self._session_store.on_auth_state_change(self._on_change)

    def _on_change(self, event: str, session: Optional[Session]) -> None:
        if event == AuthChangeEvent.SIGNED_OUT.value:
            self._user_cache.clear_all()
            return

        if event != AuthChangeEvent.SIGNED_IN.value or session is None:
            return
        if self._loop is None or not self._flow.guard.alive:
            return

        logger.debug("SIGNED_IN observed for user %s", session.user_id)
        task = self._loop.create_task(self._flow.complete_sign_in(session))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for in-flight sign-in handling to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def close(self) -> None:
        """Unsubscribe and cancel anything still in flight."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
