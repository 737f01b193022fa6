"""In-memory TTL cache of effective permission sets, keyed by user id.

Entries are only written once the resolver has returned, so a failed or
cancelled resolution leaves the cache untouched. A resolution that overlaps an
invalidation of the same user (or a full clear) returns its result but does
not store it. Stale entries are not swept; they are treated as absent and
overwritten on the next lookup.
Concurrent misses for the same user may resolve twice; the last write wins.
"""

import logging
import time
from collections import Counter, OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from rolegate.application.ports import PermissionResolver

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    """Resolved permissions and the clock reading when they were computed."""

    permissions: frozenset[str]
    computed_at: float


class PermissionCache:
    """Memoizes PermissionResolver.resolve per user for ttl_seconds.

    max_entries bounds the map with least-recently-used eviction;
    None keeps it unbounded.
    """

    def __init__(
        self,
        resolver: PermissionResolver,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._resolver = resolver
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._in_flight: Counter[str] = Counter()
        self._generations: dict[str, int] = {}
        self._epoch = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, user_id: str) -> frozenset[str] | None:
        """Cached permissions if present and younger than the TTL."""
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._clock() - entry.computed_at >= self._ttl:
            return None
        self._entries.move_to_end(user_id)
        return entry.permissions

    async def get_or_resolve(self, user_id: str) -> frozenset[str]:
        """Return cached permissions, resolving and storing them on a miss."""
        cached = self.get(user_id)
        if cached is not None:
            logger.debug("Permission cache hit for user %s", user_id)
            return cached

        logger.debug("Permission cache miss for user %s", user_id)
        started = self._generation(user_id)
        self._in_flight[user_id] += 1
        try:
            permissions = await self._resolver.resolve(user_id)
        finally:
            stale = self._generation(user_id) != started
            self._in_flight[user_id] -= 1
            if not self._in_flight[user_id]:
                del self._in_flight[user_id]
                self._generations.pop(user_id, None)
        if not stale:
            self._store(user_id, permissions)
        else:
            logger.debug("Discarded stale permissions for user %s", user_id)
        return permissions

    def invalidate(self, user_id: str) -> None:
        """Drop the entry for user_id and fence out resolutions in flight."""
        if user_id in self._in_flight:
            self._generations[user_id] = self._generations.get(user_id, 0) + 1
        if self._entries.pop(user_id, None) is not None:
            logger.debug("Invalidated cached permissions for user %s", user_id)

    def invalidate_all(self) -> None:
        """Drop every entry."""
        count = len(self._entries)
        self._entries.clear()
        self._generations.clear()
        self._epoch += 1
        logger.info("Cleared permission cache (%d entries)", count)

    def _generation(self, user_id: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(user_id, 0)

    def _store(self, user_id: str, permissions: frozenset[str]) -> None:
        self._entries[user_id] = CacheEntry(
            permissions=frozenset(permissions),
            computed_at=self._clock(),
        )
        self._entries.move_to_end(user_id)
        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cached permissions for user %s", evicted)
