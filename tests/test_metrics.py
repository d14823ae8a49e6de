import threading

from shardcache.metrics import CacheMetrics


def test_counters_start_at_zero():
    m = CacheMetrics()
    assert (m.sets, m.hits, m.misses, m.deletes, m.corruptions) == (0, 0, 0, 0, 0)


def test_each_counter_increments_independently():
    m = CacheMetrics()
    m.inc_set()
    m.inc_set()
    m.inc_hit()
    m.inc_miss()
    m.inc_miss()
    m.inc_miss()
    m.inc_del()
    m.inc_corruption()
    assert m.sets == 2
    assert m.hits == 1
    assert m.misses == 3
    assert m.deletes == 1
    assert m.corruptions == 1


def test_hit_rate_zero_without_lookups():
    m = CacheMetrics()
    m.inc_set()
    assert m.hit_rate() == 0.0


def test_hit_rate_all_hits():
    m = CacheMetrics()
    for _ in range(4):
        m.inc_hit()
    assert m.hit_rate() == 100.0


def test_hit_rate_all_misses():
    m = CacheMetrics()
    m.inc_miss()
    assert m.hit_rate() == 0.0


def test_hit_rate_even_split():
    m = CacheMetrics()
    m.inc_hit()
    m.inc_miss()
    assert m.hit_rate() == 50.0


def test_hit_rate_stays_in_range():
    m = CacheMetrics()
    for i in range(10):
        m.inc_hit() if i % 3 else m.inc_miss()
        assert 0.0 <= m.hit_rate() <= 100.0


def test_snapshot_is_independent():
    m = CacheMetrics()
    m.inc_hit()
    snap = m.snapshot()
    m.inc_hit()
    m.inc_set()
    assert snap.hits == 1
    assert snap.sets == 0
    assert m.hits == 2


def test_to_dict_matches_counters():
    m = CacheMetrics()
    m.inc_set()
    m.inc_hit()
    m.inc_miss()
    m.inc_del()
    data = m.to_dict()
    assert data == {
        "sets": m.sets,
        "hits": m.hits,
        "misses": m.misses,
        "deletes": m.deletes,
        "corruptions": m.corruptions,
        "hit_rate": m.hit_rate(),
    }


def test_concurrent_increments_are_not_lost():
    m = CacheMetrics()
    threads_count, per_thread = 8, 1000

    def work():
        for _ in range(per_thread):
            m.inc_set()
            m.inc_hit()

    threads = [threading.Thread(target=work) for _ in range(threads_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert m.sets == threads_count * per_thread
    assert m.hits == threads_count * per_thread