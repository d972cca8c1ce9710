"""In-memory LRU cache with per-entry TTL."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: float | None = None) -> None:
        """Store a cached value with a TTL in seconds."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime
    last_accessed: datetime
    access_seq: int


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ProductCache(Cache):
    """Bounded cache keyed by barcode.

    Expired entries are dropped lazily on ``get`` and in bulk by ``cleanup``.
    When full, inserting a new key evicts the least recently accessed entry;
    ties on ``last_accessed`` go to the entry touched earliest.
    """

    def __init__(
        self,
        max_entries: int = 500,
        default_ttl_seconds: float = 86400,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.max_entries = max_entries
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._sequence = count()

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired, refreshing its recency."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        now = self._clock()
        if now > entry.expires_at:
            self._entries.pop(key, None)
            return None
        entry.last_accessed = now
        entry.access_seq = next(self._sequence)
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: float | None = None) -> None:
        """Store a value, evicting the LRU entry first when a new key overflows."""
        now = self._clock()
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if key not in self._entries and len(self._entries) >= self.max_entries:
            self._evict_lru()
        self._entries[key] = _CacheEntry(
            value=value,
            expires_at=now + timedelta(seconds=ttl),
            last_accessed=now,
            access_seq=next(self._sequence),
        )

    def has(self, key: str) -> bool:
        """Return True when a live entry exists for the key."""
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        """Remove an entry, returning whether it existed."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        return len(self._entries)

    def cleanup(self) -> int:
        """Remove all expired entries and return how many were dropped."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _evict_lru(self) -> None:
        if not self._entries:
            return
        oldest_key = min(
            self._entries,
            key=lambda key: (
                self._entries[key].last_accessed,
                self._entries[key].access_seq,
            ),
        )
        del self._entries[oldest_key]
