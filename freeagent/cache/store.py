"""Cache store contract and the default in-memory implementation."""

import copy
import fnmatch
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from freeagent.core.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]


class CacheStore(Protocol):
    """Contract for key/value stores used by the cache-aside layer.

    Methods are async so in-memory and networked stores share one
    interface. A store knows nothing about HTTP or domain types.
    """

    async def get(self, key: str) -> Tuple[Any, bool]:
        """Return ``(value, found)`` for an unexpired entry.

        An expired entry is reported as ``(None, False)``.
        """
        ...

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        """Store value under key, expiring ``ttl`` from now."""
        ...

    async def remove(self, key: str) -> None:
        """Delete the entry for key. Absent keys are ignored."""
        ...

    async def remove_matching(self, pattern: str) -> None:
        """Delete every entry whose key matches a glob pattern (``*`` wildcard)."""
        ...

    async def clear(self) -> None:
        """Drop every entry."""
        ...


@dataclass(frozen=True)
class CacheEntry:
    """A cached value paired with its absolute expiry time."""

    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class InMemoryCacheStore:
    """Process-local cache store with per-entry absolute expiry.

    Safe for concurrent use from threads and tasks: the lock is held only
    for the dict operation itself, never across a fetch or mutation.
    Expired entries are purged lazily when a read finds them.

    Values are deep-copied on the way in and on the way out, so a caller
    editing a record it read never edits the cached entry.

    Args:
        clock: Monotonic time source in seconds. Tests pass a fake clock to
            simulate expiry without sleeping.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock: Clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> Tuple[Any, bool]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, False
            if entry.is_expired(now):
                del self._entries[key]
                logger.debug(f"Purged expired cache entry {key}")
                return None, False
            value = entry.value
        return copy.deepcopy(value), True

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        entry = CacheEntry(value=copy.deepcopy(value), expires_at=self._clock() + ttl.total_seconds())
        with self._lock:
            self._entries[key] = entry

    async def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def remove_matching(self, pattern: str) -> None:
        with self._lock:
            matched = [key for key in self._entries if fnmatch.fnmatchcase(key, pattern)]
            for key in matched:
                del self._entries[key]
        if matched:
            logger.debug(f"Removed {len(matched)} cache entries matching {pattern}")

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Number of physically stored entries, including stale ones."""
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
