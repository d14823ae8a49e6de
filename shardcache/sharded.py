"""A sharded in-memory store with one lock and one evictor per shard."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from shardcache.clock import Clock
from shardcache.hashing import xxhash64
from shardcache.sieve import SieveEvictor
from shardcache.types import Entry, Evictor

NUM_SHARDS = 256

_log = logging.getLogger(__name__)


class Shard:
    """One lock-protected partition of the store."""

    def __init__(self, policy: Evictor) -> None:
        self._lock = threading.Lock()
        self._items: Dict[str, Entry] = {}
        self.size = 0
        self.count = 0
        self.policy = policy

    def _remove(self, key: str) -> None:
        entry = self._items.pop(key)
        self.size -= len(entry.value)
        self.count -= 1

    def set(self, key: str, value: bytes, expire_tick: int) -> None:
        with self._lock:
            if key in self._items:
                self._remove(key)
            self._items[key] = Entry(value, expire_tick)
            self.size += len(value)
            self.count += 1
            if self.policy.should_evict(self.count, self.size):
                if isinstance(self.policy, SieveEvictor):
                    self.policy.evict_with_metrics(self._items, self.count, self.size)
                else:
                    self.policy.evict(self._items)
                self.size = sum(len(e.value) for e in self._items.values())
                self.count = len(self._items)

    def get(self, key: str, now_tick: int) -> Optional[bytes]:
        """Return the value, or None if absent or expired; expired entries are dropped."""
        with self._lock:
            entry = self._items.get(key)
            if entry is None:
                return None
            if entry.expire_tick < now_tick:
                self._remove(key)
                return None
            return entry.value

    def delete(self, key: str) -> None:
        with self._lock:
            if key in self._items:
                self._remove(key)

    def janitor(self, now_tick: int) -> None:
        with self._lock:
            for key in [k for k, e in self._items.items() if e.expire_tick < now_tick]:
                self._remove(key)


class Store:
    """Spreads keys over NUM_SHARDS shards, dividing the limits evenly."""

    def __init__(self, clock: Clock, max_entries: int = 0, max_memory: int = 0) -> None:
        self.clock = clock
        self.shards = tuple(
            Shard(SieveEvictor(max_entries // NUM_SHARDS, max_memory // NUM_SHARDS))
            for _ in range(NUM_SHARDS)
        )

    def shard_index(self, key: str) -> int:
        return xxhash64(key) & (NUM_SHARDS - 1)

    def set(self, key: str, value: bytes, ttl_minutes: int) -> None:
        self.shards[self.shard_index(key)].set(key, value, self.clock.now() + ttl_minutes)

    def get(self, key: str) -> Optional[bytes]:
        return self.shards[self.shard_index(key)].get(key, self.clock.now())

    def delete(self, key: str) -> None:
        self.shards[self.shard_index(key)].delete(key)

    def janitor(self) -> None:
        now = self.clock.now()
        for shard in self.shards:
            try:
                shard.janitor(now)
            except Exception:
                _log.exception("janitor failed in shard")