"""TTL cache used for food and nutrient profile lookups."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

# Stored in place of a loader result of None so that "known missing" can be
# told apart from "not cached".
_ABSENT = object()


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get_or_load(
        self, key: str, loader: Callable[[], object | None], ttl_seconds: int
    ) -> object | None:
        """Return the cached value for key, calling loader on a miss."""

    def invalidate(self, *keys: str) -> None:
        """Drop cached values, if present."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


class InMemoryCache(Cache):
    """Process-local cache; entries expire lazily on read."""

    def __init__(self) -> None:
        self._entries: dict[str, _CacheEntry] = {}

    def get_or_load(
        self, key: str, loader: Callable[[], object | None], ttl_seconds: int
    ) -> object | None:
        """Return a fresh cached value or load, store and return a new one."""
        now = datetime.now(tz=UTC)
        entry = self._entries.get(key)
        if entry is not None and now < entry.expires_at:
            return None if entry.value is _ABSENT else entry.value
        value = loader()
        self._entries[key] = _CacheEntry(
            value=_ABSENT if value is None else value,
            expires_at=now + timedelta(seconds=ttl_seconds),
        )
        return value

    def invalidate(self, *keys: str) -> None:
        """Drop cached values for keys."""
        for key in keys:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
