"""The cache service: default TTL, optional compression and metrics over the store."""

from __future__ import annotations

import threading
from typing import Optional

from shardcache.clock import Clock
from shardcache.metrics import CacheMetrics
from shardcache.sharded import Store
from shardcache.snappy import SnappyError, decode, encode
from shardcache.types import Config

COMPRESSION_THRESHOLD = 256


class Service:
    """Stores values in a sharded store and counts what happens to them."""

    def __init__(self, config: Config, clock: Optional[Clock] = None) -> None:
        self.config = config
        self.clock = clock if clock is not None else Clock()
        self.store = Store(self.clock, config.max_entries, config.max_memory)
        self._metrics = CacheMetrics()

    def set(self, key: str, value: bytes, ttl: int = 0) -> None:
        """Store ``value`` for ``ttl`` minutes; 0 means the configured default."""
        ttl = ttl or self.config.default_ttl
        if self.config.compression == "snappy" and len(value) >= COMPRESSION_THRESHOLD:
            value = encode(value)
        self.store.set(key, value, ttl)
        self._metrics.inc_set()

    def get(self, key: str) -> Optional[bytes]:
        """Return the value, or None if absent, expired or corrupt."""
        value = self.store.get(key)
        if value is None:
            self._metrics.inc_miss()
            return None
        self._metrics.inc_hit()
        if self.config.compression == "snappy" and value:
            try:
                return decode(value)
            except SnappyError:
                self._metrics.inc_corruption()
                return None
        return value

    def delete(self, key: str) -> None:
        self.store.delete(key)
        self._metrics.inc_del()

    def run_janitor(self, stop_event: threading.Event, interval: float = 60.0) -> None:
        """Purge expired entries every ``interval`` seconds until ``stop_event`` is set."""
        while not stop_event.wait(interval):
            self.store.janitor()

    def metrics(self) -> CacheMetrics:
        return self._metrics.snapshot()

    def stop(self) -> None:
        self.clock.stop()