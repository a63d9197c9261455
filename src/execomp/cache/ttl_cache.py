"""In-memory TTL cache keyed by (operation, argument).

Entries carry an absolute expiry and are never mutated: a refresh replaces
the whole entry. A lookup returns the entry itself rather than its value,
so a cached ``None`` (e.g. an industry with no benchmark) is told apart
from a miss.

All methods are synchronous and never yield to the event loop, so a
lookup or store cannot interleave with another coroutine's and readers
never observe a half-written entry.
"""

import logging
import random
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the monotonic time at which it dies."""

    value: Any
    expires_at: float


@dataclass
class CacheStats:
    """Hit/miss counters."""

    hits: int = 0
    misses: int = 0
    stores: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class TTLCache:
    """Absolute-expiry cache with TTL-only eviction.

    Args:
        ttl: Entry lifetime in seconds (default: one hour)
        jitter: Upper bound of a random amount shaved off each entry's
            lifetime, so entries stored together do not expire together
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        ttl: float = 3600.0,
        jitter: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        if not 0 <= jitter < ttl:
            raise ValueError(f"jitter must be in [0, ttl), got {jitter}")
        self.ttl = ttl
        self.jitter = jitter
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry] = {}
        self.stats = CacheStats()

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, key: Hashable) -> CacheEntry | None:
        """Return the live entry for key, or None on a miss."""
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at <= self._clock():
            # Only drop the entry we saw expire
            if self._entries.get(key) is entry:
                del self._entries[key]
            entry = None
        if entry is None:
            self.stats.misses += 1
        else:
            self.stats.hits += 1
        return entry

    def store(self, key: Hashable, value: Any) -> CacheEntry:
        """Insert or replace the entry for key."""
        lifetime = self.ttl - (random.uniform(0, self.jitter) if self.jitter else 0.0)
        entry = CacheEntry(value=value, expires_at=self._clock() + lifetime)
        self._entries[key] = entry
        self.stats.stores += 1
        return entry

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were dropped."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
