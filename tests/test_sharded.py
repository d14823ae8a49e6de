from typing import MutableMapping

from shardcache.hashing import xxhash64
from shardcache.sharded import NUM_SHARDS, Shard, Store
from shardcache.sieve import SieveEvictor
from shardcache.types import Entry, Evictor


class FakeClock:
    def __init__(self, tick=0):
        self.tick = tick

    def now(self):
        return self.tick


class DropAll(Evictor):
    def __init__(self, limit):
        self.limit = limit
        self.calls = 0

    def should_evict(self, count, size):
        return count > self.limit

    def evict(self, items: MutableMapping[str, Entry]) -> None:
        self.calls += 1
        items.clear()


def _shard():
    return Shard(SieveEvictor(0, 0))


def test_shard_set_and_get():
    shard = _shard()
    shard.set("a", b"hello", 5)
    assert shard.get("a", 0) == b"hello"
    assert shard.count == 1
    assert shard.size == 5


def test_shard_overwrite_adjusts_size():
    shard = _shard()
    shard.set("a", b"hello", 5)
    shard.set("a", b"hi", 5)
    assert shard.get("a", 0) == b"hi"
    assert shard.count == 1
    assert shard.size == 2


def test_shard_missing_key():
    assert _shard().get("nope", 0) is None


def test_shard_expiry_boundary():
    shard = _shard()
    shard.set("a", b"v", 3)
    assert shard.get("a", 3) == b"v"
    assert shard.get("a", 4) is None
    assert "a" not in shard
    assert shard.count == 0
    assert shard.size == 0


def test_shard_delete():
    shard = _shard()
    shard.set("a", b"abc", 1)
    shard.delete("a")
    shard.delete("a")
    assert shard.get("a", 0) is None
    assert shard.count == 0
    assert shard.size == 0


def test_shard_janitor_removes_only_expired():
    shard = _shard()
    shard.set("old", b"1", 1)
    shard.set("edge", b"22", 2)
    shard.set("new", b"333", 10)
    shard.janitor(2)
    assert "old" not in shard
    assert "edge" in shard
    assert "new" in shard
    assert shard.count == 2
    assert shard.size == 5


def test_shard_sieve_eviction_updates_counters():
    shard = Shard(SieveEvictor(1, 0))
    shard.set("a", b"x", 10)
    assert shard.count == 1
    shard.set("b", b"y", 10)
    # 2/1 * 1.1 - 1 > 1, so everything goes
    assert shard.count == 0
    assert shard.size == 0
    assert shard.policy.evicted == 2


def test_shard_generic_policy_path():
    policy = DropAll(2)
    shard = Shard(policy)
    for key in ("a", "b"):
        shard.set(key, b"v", 1)
    assert policy.calls == 0
    shard.set("c", b"v", 1)
    assert policy.calls == 1
    assert shard.count == 0
    assert shard.size == 0


def test_store_shard_index_uses_hash():
    store = Store(FakeClock(), 1000, 0)
    for key in ("alpha", "beta", "gamma", ""):
        index = store.shard_index(key)
        assert 0 <= index < NUM_SHARDS
        assert index == xxhash64(key) % NUM_SHARDS


def test_store_has_num_shards():
    store = Store(FakeClock(), 1000, 0)
    assert len(store.shards) == NUM_SHARDS


def test_store_divides_limits_across_shards():
    store = Store(FakeClock(), NUM_SHARDS * 4, NUM_SHARDS * 100)
    policy = store.shards[0].policy
    assert policy.max_entries == 4
    assert policy.max_memory == 100


def test_store_set_get_delete():
    store = Store(FakeClock(), 10000, 0)
    store.set("k", b"value", 60)
    assert store.get("k") == b"value"
    assert len(store) == 1
    store.delete("k")
    assert store.get("k") is None
    assert len(store) == 0


def test_store_ttl_expiry_with_clock():
    clock = FakeClock(5)
    store = Store(clock, 10000, 0)
    store.set("k", b"v", 2)
    clock.tick = 7
    assert store.get("k") == b"v"
    clock.tick = 8
    assert store.get("k") is None


def test_store_janitor_sweeps_all_shards():
    clock = FakeClock()
    store = Store(clock, 100000, 0)
    for i in range(200):
        store.set(f"short{i}", b"x", 1)
        store.set(f"long{i}", b"y", 100)
    assert len(store) == 400
    clock.tick = 2
    store.janitor()
    assert len(store) == 200
    assert store.get("long0") == b"y"
    assert all(store.shards[store.shard_index(f"short{i}")].get(f"short{i}", 0) is None
               for i in range(200))