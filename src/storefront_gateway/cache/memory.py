"""
In-memory cache implementation.

Provides a process-local cache for backend GET responses with TTL-based
expiration. Entries are never evicted actively; an expired entry is
treated as absent and overwritten by the next successful read.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from storefront_gateway.core.models import CacheEntry


class Cache(ABC):
    """Interface the gateway client expects from a response cache."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for ``key``, or None on a miss."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""


class TTLCache(Cache):
    """Expiring key-value cache shared by all requests in the process.

    No locking is done. Concurrent writers for the same key race and the
    last write wins; a reader always sees a complete value.
    """

    DEFAULT_TTL = 300  # 5 minutes

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            ttl: Time-to-live in seconds for every entry.
            clock: Monotonic time source, replaceable in tests.
        """
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Get cached value if not expired.

        Args:
            key: Cache key (the backend request path).

        Returns:
            Cached value or None if not found or expired.
        """
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self.ttl, self._clock()):
            self.misses += 1
            return None
        self.hits += 1
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store value, replacing any previous entry for the key."""
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def clear(self) -> int:
        """Drop all entries.

        Returns:
            Number of entries removed.
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        now = self._clock()
        valid = sum(1 for e in self._entries.values() if e.is_fresh(self.ttl, now))
        return {
            "total_entries": len(self._entries),
            "valid_entries": valid,
            "expired_entries": len(self._entries) - valid,
            "hits": self.hits,
            "misses": self.misses,
            "ttl_seconds": self.ttl,
        }


class NullCache(Cache):
    """Cache that stores nothing; every read is a miss."""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any) -> None:
        pass
