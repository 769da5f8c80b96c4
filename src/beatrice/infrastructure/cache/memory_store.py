"""In-process cache store with per-entry expiry."""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class InMemoryCacheStore:
    """Dict-backed CacheStore for development and tests.

    Entries expire ``ttl_seconds`` after being written. Expired entries
    are evicted when read and pruned on every write. Not shared between
    processes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the store.

        Args:
            clock: Monotonic time source in seconds.
        """
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    @property
    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> str | None:
        """Get a value, evicting it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            logger.debug("Cache entry expired: %s", key)
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value.

        Raises:
            ValueError: ttl_seconds is not positive.
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive: {ttl_seconds}")
        now = self._clock()
        self._prune(now)
        self._entries[key] = (value, now + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _prune(self, now: float) -> None:
        expired = [
            key for key, (_, expires_at) in self._entries.items() if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Pruned %d expired cache entries", len(expired))
