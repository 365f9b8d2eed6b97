"""In-process query cache handed explicitly to the components that use it."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)

CacheKey = tuple[Hashable, ...]


class QueryCache:
    """Bounded TTL cache for backend query results keyed by tuples.

    Keys start with a namespace (e.g. ``("salons", lat, lon, radius)``) so that
    :meth:`invalidate` can drop a whole group by prefix. Expired entries are
    purged on every write, and once ``max_entries`` is reached the oldest
    entry is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 1024,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[CacheKey, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def _expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at > self.ttl_seconds

    def _purge_expired(self, now: float) -> int:
        doomed = [key for key, (stored_at, _) in self._entries.items() if self._expired(stored_at, now)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def get(self, key: CacheKey) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._expired(stored_at, self._clock()):
                del self._entries[key]
                logger.debug(f"Cache EXPIRED: {key}")
                return None
            logger.debug(f"Cache HIT: {key}")
            return value

    def set(self, key: CacheKey, value: Any) -> None:
        with self._lock:
            now = self._clock()
            purged = self._purge_expired(now)
            if purged:
                logger.debug(f"Purged {purged} expired cache entr{'y' if purged == 1 else 'ies'}")
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug(f"Cache EVICTED: {oldest}")
            self._entries[key] = (now, value)

    def get_or_fetch(self, key: CacheKey, fetch: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` or store the result of ``fetch()``.

        Exceptions from ``fetch`` propagate and nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached
        logger.debug(f"Cache MISS: {key}")
        value = fetch()
        if self.ttl_seconds > 0:
            self.set(key, value)
        return value

    def invalidate(self, prefix: CacheKey | None = None) -> int:
        """Drop every entry whose key starts with ``prefix`` (all entries when None)."""
        with self._lock:
            if prefix is None:
                removed = len(self._entries)
                self._entries.clear()
            else:
                doomed = [key for key in self._entries if key[: len(prefix)] == prefix]
                for key in doomed:
                    del self._entries[key]
                removed = len(doomed)
        if removed:
            logger.info(f"Invalidated {removed} cached quer{'y' if removed == 1 else 'ies'} (prefix={prefix})")
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
