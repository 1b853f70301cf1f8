"""
Session store contract and in-memory backend.

TTL key-value storage for session-scoped state. Writes never raise (a failed
write is logged and reported as False); reads raise StorageError when the
backend is unavailable. An expired key is indistinguishable from a key that
was never written.

Dependencies: abc, threading, time
System role: Shared state between requests
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Async TTL key-value store."""

    @abstractmethod
    async def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        """
        Store value under key for ttl_seconds.

        Returns:
            bool: False if the write failed (already logged), True otherwise
        """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """
        Read a live value.

        Returns:
            str | None: Value, or None if missing or expired

        Raises:
            StorageError: If the backend cannot be read
        """

    @abstractmethod
    async def list_keys_with_prefix(self, prefix: str) -> set[str]:
        """
        List live keys starting with prefix.

        Raises:
            StorageError: If the backend cannot be read
        """

    async def ping(self) -> bool:
        """Check backend reachability."""
        return True

    async def close(self) -> None:
        """Release backend connections."""


class InMemorySessionStore(SessionStore):
    """
    Process-local store for development and tests.

    Expiry is evaluated lazily against an injectable clock, so tests can
    simulate the passage of time without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def _live_value(self, key: str, now: float) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if now >= expires_at:
            del self._entries[key]
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)
        return True

    async def get(self, key: str) -> str | None:
        with self._lock:
            return self._live_value(key, self._clock())

    async def list_keys_with_prefix(self, prefix: str) -> set[str]:
        with self._lock:
            now = self._clock()
            return {
                key for key in list(self._entries)
                if key.startswith(prefix) and self._live_value(key, now) is not None
            }

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for key in list(self._entries) if self._live_value(key, now) is not None)
