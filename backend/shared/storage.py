"""
Per-browser key/value storage.

The storefront keeps a handful of small string values per browser: the
Supabase auth session and PKCE verifier, pending signup data and the
"remember me" projection. They are exposed through the same
get/set/remove shape the Supabase auth client uses for its own storage,
so one object backs both.

The values themselves stay on the server. The browser only carries an
opaque browser id in its signed session cookie; an OAuth session with
provider metadata is far larger than a cookie may be.
"""

import secrets
import time
from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorage(Protocol):
    """String key/value store scoped to a single browser."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage, used by tests and one-off scripts."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self.storage: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.storage.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.storage[key] = value

    def remove_item(self, key: str) -> None:
        self.storage.pop(key, None)


class BrowserStore:
    """
    Server-side slots for every browser, keyed by browser id.

    Slots expire ``max_age`` seconds after they were last touched, matching
    the lifetime of the cookie that carries the id. The store lives in the
    process, so all requests of a browser must reach the same process.
    """

    def __init__(
        self,
        max_age: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_age = max_age
        self._clock = clock
        self._slots: dict[str, dict[str, str]] = {}
        self._touched: dict[str, float] = {}

    @staticmethod
    def new_browser_id() -> str:
        return secrets.token_urlsafe(32)

    def __len__(self) -> int:
        return len(self._slots)

    def storage_for(self, browser_id: str) -> "BrowserStorage":
        return BrowserStorage(self, browser_id)

    def get(self, browser_id: str, key: str) -> Optional[str]:
        slots = self._live_slots(browser_id)
        if slots is None:
            return None
        self._touched[browser_id] = self._clock()
        return slots.get(key)

    def set(self, browser_id: str, key: str, value: str) -> None:
        slots = self._live_slots(browser_id)
        if slots is None:
            slots = self._slots[browser_id] = {}
        slots[key] = value
        self._touched[browser_id] = self._clock()

    def remove(self, browser_id: str, key: str) -> None:
        slots = self._live_slots(browser_id)
        if slots is None:
            return
        slots.pop(key, None)
        if not slots:
            self.forget(browser_id)

    def forget(self, browser_id: str) -> None:
        self._slots.pop(browser_id, None)
        self._touched.pop(browser_id, None)

    def purge_expired(self) -> int:
        """Drop every browser whose slots have expired. Returns how many."""
        cutoff = self._clock() - self._max_age
        expired = [bid for bid, touched in self._touched.items() if touched < cutoff]
        for browser_id in expired:
            self.forget(browser_id)
        return len(expired)

    def _live_slots(self, browser_id: str) -> Optional[dict[str, str]]:
        touched = self._touched.get(browser_id)
        if touched is None:
            return None
        if touched < self._clock() - self._max_age:
            self.forget(browser_id)
            return None
        return self._slots[browser_id]


class BrowserStorage(KeyValueStorage):
    """One browser's view of the server-side store."""

    def __init__(self, store: BrowserStore, browser_id: str) -> None:
        self._store = store
        self.browser_id = browser_id

    def get_item(self, key: str) -> Optional[str]:
        return self._store.get(self.browser_id, key)

    def set_item(self, key: str, value: str) -> None:
        self._store.set(self.browser_id, key, value)

    def remove_item(self, key: str) -> None:
        self._store.remove(self.browser_id, key)
