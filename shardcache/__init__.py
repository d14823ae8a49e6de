"""Sharded in-memory key/value cache with TTLs, random eviction and a Flask HTTP API."""

__version__ = "0.1.0"