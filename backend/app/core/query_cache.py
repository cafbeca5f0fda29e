"""Query Cache — bounded FIFO map from normalized filter key to materialized results.

Invariants:
    - len(cache) never exceeds max_entries
    - When full, the oldest-INSERTED key is evicted first (FIFO, not LRU);
      reading an entry never changes its position
    - Re-putting an existing key replaces the value in place (no eviction)
    - clear() drops every entry but keeps the hit/miss/eviction counters

Design Decisions:
    - dict keeps insertion order, so the first key is always the oldest
    - Counters exist for instrumentation only; results never depend on them
    - No locking here: TodoStore holds its lock around every cache call
"""

import logging
from typing import Generic, Hashable, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class QueryCache(Generic[K, V]):
    """Bounded key→value cache with FIFO eviction."""

    def __init__(self, max_entries: int):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: dict[K, V] = {}
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: K) -> V | None:
        """Return cached value or None. Counts the hit or miss."""
        if key in self._entries:
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        return None

    def put(self, key: K, value: V) -> None:
        """Store value, evicting the oldest entry first if at capacity."""
        if key not in self._entries and len(self._entries) >= self.max_entries:
            self.evict_oldest()
        self._entries[key] = value

    def evict_oldest(self) -> K | None:
        """Drop the oldest-inserted entry. Returns its key, or None if empty."""
        if not self._entries:
            return None
        oldest = next(iter(self._entries))
        del self._entries[oldest]
        self.evictions += 1
        logger.debug(f"Query cache evicted {oldest!r}")
        return oldest

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[K]:
        """Snapshot of keys, oldest first."""
        return list(self._entries)
