"""Load and validate server configuration from environment variables."""

from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from shardcache.types import DEFAULT_TTL_MINUTES, Config

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1

_COMPRESSIONS = ("", "snappy", "none")


class ConfigError(ValueError):
    """Raised when the configuration is missing or malformed."""


def _parse_int64(name: str, text: str) -> int:
    if not _SIGNED.fullmatch(text):
        raise ConfigError(f"invalid {name}: parsing {text!r}: invalid syntax")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ConfigError(f"invalid {name}: parsing {text!r}: value out of range")
    return value


def _parse_uint64(name: str, text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ConfigError(f"invalid {name}: parsing {text!r}: invalid syntax")
    value = int(text)
    if value > _UINT64_MAX:
        raise ConfigError(f"invalid {name}: parsing {text!r}: value out of range")
    return value


def load(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from ``environ`` (default: the process environment)."""
    env = os.environ if environ is None else environ

    max_entries_text = env.get("CACHE_MAX_ENTRIES", "")
    max_memory_text = env.get("CACHE_MAX_MEMORY", "")
    ttl_text = env.get("CACHE_DEFAULT_TTL_MIN", "")
    compression = env.get("CACHE_COMPRESSION", "")
    print(
        "maxEntries :", max_entries_text,
        "maxMemory :", max_memory_text,
        "ttl :", ttl_text,
        "compression :", compression,
    )

    max_entries = 0
    if max_entries_text:
        max_entries = _parse_int64("CACHE_MAX_ENTRIES", max_entries_text)
        if max_entries < 0:
            raise ConfigError("CACHE_MAX_ENTRIES must be non-negative")

    max_memory = 0
    if max_memory_text:
        max_memory = _parse_int64("CACHE_MAX_MEMORY", max_memory_text)
        if max_memory < 0:
            raise ConfigError("CACHE_MAX_MEMORY must be non-negative")

    if max_entries == 0 and max_memory == 0:
        raise ConfigError("must set at least one of CACHE_MAX_ENTRIES or CACHE_MAX_MEMORY")

    if ttl_text:
        default_ttl = _parse_uint64("CACHE_DEFAULT_TTL_MIN", ttl_text)
    else:
        default_ttl = DEFAULT_TTL_MINUTES

    if compression not in _COMPRESSIONS:
        raise ConfigError(
            f"invalid CACHE_COMPRESSION: must be 'snappy' or 'none', got '{compression}'"
        )

    return Config(
        max_entries=max_entries,
        max_memory=max_memory,
        default_ttl=default_ttl,
        compression=compression,
    )