"""Cache entries, server configuration and the eviction policy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import MutableMapping

DEFAULT_TTL_MINUTES = 60


@dataclass(frozen=True, slots=True)
class Entry:
    """A stored value and the clock tick after which it expires."""

    value: bytes
    expire_tick: int


@dataclass(frozen=True, slots=True)
class Config:
    """Limits (entries, bytes), default TTL in minutes and compression name."""

    max_entries: int = 0
    max_memory: int = 0
    default_ttl: int = DEFAULT_TTL_MINUTES
    compression: str = ""


class Evictor(ABC):
    """Decides when a shard is over its limits and removes entries."""

    @abstractmethod
    def should_evict(self, count: int, size: int) -> bool: ...

    @abstractmethod
    def evict(self, items: MutableMapping[str, Entry]) -> None: ...