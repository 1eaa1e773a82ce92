# tawc/tests/test_cache.py
import pytest

from tawc.cache import ClassificationCache

def test_miss_hit_and_cached_no_match():
    cache = ClassificationCache(10)
    assert cache.get("happy") is None
    cache.record("happy", ("1",))
    cache.record("the", ())
    assert cache.get("happy") == ("1",)
    # Present-but-empty is a hit, distinct from a miss
    assert cache.get("the") == ()
    assert cache.get("the") is not None

def test_touch_counts_hits_and_record_resets():
    cache = ClassificationCache(10)
    cache.record("a", ("1",))
    cache.touch("a"); cache.touch("a")
    assert cache.hit_count("a") == 2
    cache.record("a", ("2",))
    assert cache.hit_count("a") == 0
    assert cache.get("a") == ("2",)
    cache.touch("missing")             # no-op
    assert "missing" not in cache

def test_eviction_on_empty_cache_is_noop():
    cache = ClassificationCache(5)
    assert cache.evict() == 0
    assert cache.evictions == 0
    assert cache.threshold == 1

def test_capacity_one_evicts_before_each_new_word():
    cache = ClassificationCache(1)
    for w in ["alpha", "beta", "gamma"]:
        cache.record(w, ())
        assert len(cache) <= 1
    assert cache.evictions == 2
    assert cache.get("gamma") == ()
    assert cache.get("alpha") is None

def test_overwriting_a_present_word_does_not_evict():
    cache = ClassificationCache(1)
    cache.record("a", ())
    cache.record("a", ("1",))
    assert cache.evictions == 0

def test_frequent_words_survive_a_pass():
    cache = ClassificationCache(4)
    for w in "abcd":
        cache.record(w, ())
    cache.touch("a"); cache.touch("b")
    removed = cache.evict()
    assert removed == 2                 # 50% removed -> threshold unchanged
    assert cache.threshold == 1
    assert "a" in cache and "b" in cache
    assert "c" not in cache and "d" not in cache

def test_threshold_ratchets_on_low_removal_rate():
    cache = ClassificationCache(10)
    for i in range(10):
        cache.record(f"w{i}", ())
    for i in range(9):
        cache.touch(f"w{i}")
    assert cache.evict() == 1           # 10% < 30%
    assert cache.threshold == 2
    # Threshold never goes back down
    cache.evict()
    assert cache.threshold >= 2

def test_size_bound_holds_when_all_entries_are_hot():
    cache = ClassificationCache(3)
    for w in "abc":
        cache.record(w, ())
        for _ in range(5):
            cache.touch(w)
    cache.record("d", ("1",))
    assert len(cache) <= 3
    assert cache.get("d") == ("1",)
    assert cache.threshold > 1

def test_zero_capacity_disables_cache():
    cache = ClassificationCache(0)
    cache.record("a", ("1",))
    assert len(cache) == 0
    assert cache.get("a") is None

def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        ClassificationCache(-1)
