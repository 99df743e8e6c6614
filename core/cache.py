"""
In-memory result cache with a time-to-live.

The cache is a collaborator passed into ``ProductHuntClient`` rather than a
module global, so tests can hand in their own instance (and clock) and a
shared store can replace it later without touching the search code.

Entries are stored as immutable tuples; concurrent writers simply overwrite
each other (last write wins).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

#: Default freshness window: one hour.
DEFAULT_TTL_SECONDS = 3600.0

V = TypeVar("V")


class Cache(Protocol[V]):
    """Minimal key/value interface the search client depends on."""

    def get(self, key: str) -> Optional[V]: ...

    def put(self, key: str, value: V) -> None: ...


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    fetched_at: float
    value: V


class TTLCache(Generic[V]):
    """Process-wide keyword → value map whose entries expire after ``ttl`` seconds.

    Args:
        ttl: Freshness window in seconds. An entry is served while
            ``now - fetched_at < ttl``.
        clock: Monotonic time source; injectable so tests can advance time.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry[V]] = {}

    def get(self, key: str) -> Optional[V]:
        """Return the cached value for *key*, or ``None`` if absent or stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self.ttl:
            logger.debug("Cache entry for %r is stale", key)
            return None
        return entry.value

    def put(self, key: str, value: V) -> None:
        """Store *value* under *key*, replacing any previous entry."""
        self._entries[key] = CacheEntry(fetched_at=self._clock(), value=value)

    def __len__(self) -> int:
        return len(self._entries)
