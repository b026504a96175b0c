"""Simple in-memory TTL cache for read endpoints."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

from marketplace.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached result set and the clock reading it was stored at."""

    data: Any
    timestamp: float


class TTLCache:
    """In-memory key -> entry map whose entries expire after a fixed TTL.

    There is no size bound or eviction policy; stale entries are dropped
    lazily on read. Writers elsewhere call ``clear()`` after mutating the
    underlying tables.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` if it is still fresh, otherwise None."""
        try:
            now = self._clock()
            with self._lock:
                entry = self._entries.get(key)
                if entry is None:
                    return None
                if now - entry.timestamp < self.ttl_seconds:
                    return entry
                del self._entries[key]
                return None
        except Exception:
            logger.warning("Cache read failed for key %s, treating as miss", key, exc_info=True)
            return None

    def set(self, key: str, data: Any, timestamp: float | None = None) -> None:
        """Store ``data`` under ``key``, stamped with ``timestamp`` or the current clock."""
        entry = CacheEntry(data=data, timestamp=self._clock() if timestamp is None else timestamp)
        with self._lock:
            self._entries[key] = entry

    def get_or_load(self, key: str, loader: Callable[[], Any], bypass: bool = False) -> Any:
        """Return cached data for ``key``, or call ``loader`` and cache its result.

        With ``bypass`` the cache is not consulted but the fresh result is
        still stored.
        """
        if not bypass:
            entry = self.get(key)
            if entry is not None:
                return entry.data
        data = loader()
        self.set(key, data)
        return data

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


coupons_cache = TTLCache(settings.COUPONS_CACHE_TTL_SECONDS)
stores_cache = TTLCache(settings.STORES_CACHE_TTL_SECONDS)


def get_coupons_cache() -> TTLCache:
    return coupons_cache


def get_stores_cache() -> TTLCache:
    return stores_cache

