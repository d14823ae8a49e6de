"""Thread-safe counters for cache operations."""

from __future__ import annotations

import threading
from typing import Dict, Union


class CacheMetrics:
    """Counts sets, hits, misses, deletes and corrupted values."""

    def __init__(
        self,
        sets: int = 0,
        hits: int = 0,
        misses: int = 0,
        deletes: int = 0,
        corruptions: int = 0,
    ) -> None:
        self._lock = threading.Lock()
        self._sets = sets
        self._hits = hits
        self._misses = misses
        self._deletes = deletes
        self._corruptions = corruptions

    def inc_set(self) -> None:
        with self._lock:
            self._sets += 1

    def inc_hit(self) -> None:
        with self._lock:
            self._hits += 1

    def inc_miss(self) -> None:
        with self._lock:
            self._misses += 1

    def inc_del(self) -> None:
        with self._lock:
            self._deletes += 1

    def inc_corruption(self) -> None:
        with self._lock:
            self._corruptions += 1

    @property
    def sets(self) -> int:
        return self._sets

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def deletes(self) -> int:
        return self._deletes

    @property
    def corruptions(self) -> int:
        return self._corruptions

    def snapshot(self) -> "CacheMetrics":
        """Return an independent copy of the current counters."""
        with self._lock:
            return CacheMetrics(
                self._sets, self._hits, self._misses, self._deletes, self._corruptions
            )

    def hit_rate(self) -> float:
        """Hit rate as a percentage from 0 to 100; 0 when nothing was looked up."""
        with self._lock:
            hits, misses = self._hits, self._misses
        total = hits + misses
        if total == 0:
            return 0.0
        return hits / total * 100

    def to_dict(self) -> Dict[str, Union[int, float]]:
        """Return the counters and hit rate as a JSON-ready mapping."""
        snap = self.snapshot()
        return {
            "sets": snap.sets,
            "hits": snap.hits,
            "misses": snap.misses,
            "deletes": snap.deletes,
            "corruptions": snap.corruptions,
            "hit_rate": snap.hit_rate(),
        }