"""Probabilistic eviction: drop each entry with a probability set by overprovisioning."""

from __future__ import annotations

import random
import threading
from typing import MutableMapping, Optional

from shardcache.types import Entry, Evictor

PROB_FACTOR = 1.1


class SieveEvictor(Evictor):
    """Evicts entries at random, more aggressively the further over the limits a shard is.

    A limit of zero means no limit.
    """

    def __init__(
        self,
        max_entries: int = 0,
        max_memory: int = 0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.max_entries = max_entries
        self.max_memory = max_memory
        self.prob_factor = PROB_FACTOR
        self._rng = rng if rng is not None else random.Random()
        self._evicted = 0
        self._lock = threading.Lock()

    @property
    def evicted(self) -> int:
        """Total number of entries removed by this evictor."""
        with self._lock:
            return self._evicted

    def should_evict(self, count: int, size: int) -> bool:
        if self.max_entries > 0 and count > self.max_entries:
            return True
        if self.max_memory > 0 and size > self.max_memory:
            return True
        return False

    def evict_with_metrics(
        self,
        items: MutableMapping[str, Entry],
        current_count: int,
        current_size: int,
    ) -> None:
        """Evict from ``items`` using the given count and size instead of recomputing them."""
        over = 0.0
        if self.max_entries > 0:
            over = max(over, current_count / self.max_entries)
        if self.max_memory > 0:
            over = max(over, current_size / self.max_memory)
        probability = over * self.prob_factor - 1.0
        if probability <= 0:
            return

        doomed = [key for key in list(items) if self._rng.random() < probability]
        for key in doomed:
            del items[key]
        with self._lock:
            self._evicted += len(doomed)

    def evict(self, items: MutableMapping[str, Entry]) -> None:
        count = len(items)
        size = sum(len(entry.value) for entry in items.values())
        self.evict_with_metrics(items, count, size)