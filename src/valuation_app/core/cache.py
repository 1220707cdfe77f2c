"""In-memory TTL cache."""

from dataclasses import dataclass
from threading import Lock
from typing import Generic, Optional, TypeVar

from cachetools import LRUCache

from valuation_app.core.clock import Clock, MonotonicClock

V = TypeVar("V")

DEFAULT_MAXSIZE = 1024


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value and the clock reading it was fetched at."""

    key: str
    value: V
    fetched_at: float


class TtlCache(Generic[V]):
    """
    Keyed cache whose entries expire a fixed number of seconds after fetch.

    Expired entries are left in place and simply reported as stale; a later
    put() for the same key supersedes them. Storage is a bounded LRU map, so
    the least recently used key is dropped once maxsize keys are held.
    Safe to share across threads.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Optional[Clock] = None,
        maxsize: int = DEFAULT_MAXSIZE,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._clock = clock or MonotonicClock()
        self._entries: LRUCache = LRUCache(maxsize=maxsize)
        self._lock = Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def clock(self) -> Clock:
        return self._clock

    def get(self, key: str) -> Optional[CacheEntry[V]]:
        """Return the entry for key, fresh or not."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, value: V, timestamp: Optional[float] = None) -> CacheEntry[V]:
        """Store value under key, stamped with timestamp (defaults to now)."""
        fetched_at = self._clock.now() if timestamp is None else timestamp
        entry = CacheEntry(key=key, value=value, fetched_at=fetched_at)
        with self._lock:
            self._entries[key] = entry
        return entry

    def is_fresh(self, entry: CacheEntry[V], now: Optional[float] = None) -> bool:
        """Check if entry is still within TTL."""
        current = self._clock.now() if now is None else now
        return current - entry.fetched_at < self._ttl

    def get_fresh(self, key: str) -> Optional[V]:
        """Return the cached value if present and within TTL."""
        entry = self.get(key)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry.value

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
