# shardcache

An in-memory key/value cache served over HTTP. Keys are spread over 256
shards by their 64-bit xxHash, each shard with its own lock and its own
eviction policy. Entries expire after a time-to-live counted in minutes.
When a shard grows past its share of the configured limits, entries are
evicted at random, with a probability that rises with how far over the limit
the shard is. Large values can optionally be stored snappy-compressed.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
CACHE_MAX_ENTRIES=100000 shardcache-server
```

Options:

| Option   | Meaning                 | Default   |
|----------|-------------------------|-----------|
| `--host` | Address to listen on    | `0.0.0.0` |
| `--port` | Port to listen on       | `1100`    |

The server reads its settings from environment variables; a `.env` file in
the working directory is loaded first if one exists. On start-up it prints
the values it read. An invalid configuration is logged and the command exits
with status 1. Otherwise it serves requests (each with a `Server:
CacheServer` header, request bodies limited to 10 MiB) until it receives
SIGINT or SIGTERM, then stops its background expiry sweep and its clock and
shuts down.

| Variable                | Meaning                                         | Default |
|-------------------------|-------------------------------------------------|---------|
| `CACHE_MAX_ENTRIES`     | Maximum number of entries (0 means no limit)    | 0       |
| `CACHE_MAX_MEMORY`      | Maximum total size of stored values, in bytes   | 0       |
| `CACHE_DEFAULT_TTL_MIN` | TTL in minutes used when a request gives none   | 60      |
| `CACHE_COMPRESSION`     | `snappy` or `none`; unset means none            | unset   |

At least one of `CACHE_MAX_ENTRIES` and `CACHE_MAX_MEMORY` must be set to a
positive number; negative or non-numeric values are rejected with a
`shardcache.config.ConfigError`. The limits are divided evenly (rounding
down) across the 256 shards.

With `snappy` compression, values of 256 bytes or more are compressed before
being stored and decompressed on read. A stored value that fails to
decompress is counted as a corruption and reported as missing.

## HTTP API

| Method   | Path                  | Description                         |
|----------|-----------------------|-------------------------------------|
| `POST`   | `/api/v1/set`         | Store a value                       |
| `GET`    | `/api/v1/get/<key>`   | Fetch a value                       |
| `DELETE` | `/api/v1/del/<key>`   | Remove a value                      |
| `GET`    | `/api/v1/metrics`     | Operation counters                  |
| `GET`    | `/health`             | Liveness check                      |

### Storing a value

The body is a JSON object with a `key`, a `value` that may be any JSON
document, and an optional `ttl` in minutes (0 or absent means the default).
Field names are matched case-insensitively.

```
POST /api/v1/set
{"key": "greeting", "value": {"hello": "world"}, "ttl": 5}
```

Answers `{"status": "ok"}`. A body that is not valid JSON (or has a key that
is not a string or a ttl that is not a non-negative integer) gives status 400
with `{"error": "Invalid JSON"}`; a missing key gives `"Key required"` and a
missing value `"Value required"`.

### Fetching a value

```
GET /api/v1/get/greeting
```

Answers `{"value": {"hello": "world"}}`, the value being the stored JSON in
compact form, or status 404 with `{"error": "Key not found"}` if the key is
absent or expired.

### Deleting a value

```
DELETE /api/v1/del/greeting
```

Answers `{"status": "ok"}` whether or not the key existed.

### Metrics

`GET /api/v1/metrics` answers with the counters `sets`, `hits`, `misses`,
`deletes`, `corruptions` and `hit_rate` (a percentage from 0 to 100).

## Using it as a library

```python
from shardcache.config import load
from shardcache.service import Service

config = load({"CACHE_MAX_ENTRIES": "10000"})
service = Service(config)
service.set("user:1", b'{"name": "example"}', 10)
value = service.get("user:1")   # bytes, or None if absent or expired
print(service.metrics().to_dict())
service.stop()
```

Other pieces:

- `shardcache.handlers.create_app(service)` builds the Flask application
  around a `Service`; `shardcache.server.build_app(config)` builds the
  service and the application straight from a `Config`.
- `shardcache.sharded.Store` and `Shard` are the sharded store itself.
- `shardcache.sieve.SieveEvictor` is the random eviction policy; any
  `shardcache.types.Evictor` subclass can be given to a `Shard`.
- `shardcache.snappy.encode` / `decode` implement the Snappy block format,
  and `shardcache.hashing.xxhash64` the XXH64 hash.
- `shardcache.clock.Clock` is the logical clock; its tick interval in
  seconds can be given to the constructor.

## Expiry

Time is kept by a logical clock that advances one tick per minute. An entry
set with a TTL of *n* minutes stays readable until the clock has moved more
than *n* ticks past the moment it was stored. Expired entries are removed
lazily when read, and by a sweep over all shards once a minute
(`Service.run_janitor`).

## What it does not do

Everything is held in memory only: nothing is written to disk, and the
cache is empty again after every restart. There is no replication and no
authentication.