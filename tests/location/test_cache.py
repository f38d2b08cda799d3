"""Tests for cache.py coordinate keys and FIFO eviction."""
import pytest

from parkreport.location.cache import GeocodeCache, cache_key


class TestCacheKey:
    def test_rounds_to_four_decimals(self):
        assert cache_key(25.033012, 121.565399) == "25.0330,121.5654"

    def test_nearby_points_share_a_key(self):
        assert cache_key(25.03301, 121.56541) == cache_key(25.03304, 121.56539)

    def test_distinct_points_differ(self):
        assert cache_key(25.0330, 121.5654) != cache_key(25.0331, 121.5654)

    def test_negative_zero_folds_to_zero(self):
        assert cache_key(-0.00001, 0.00001) == "0.0000,0.0000"


class TestGeocodeCache:
    def test_get_missing_returns_none(self):
        assert GeocodeCache().get("1.0000,2.0000") is None

    def test_put_and_get(self):
        cache = GeocodeCache()
        cache.put("a", "臺北市")
        assert cache.get("a") == "臺北市"
        assert "a" in cache
        assert len(cache) == 1

    def test_size_never_exceeds_capacity(self):
        cache = GeocodeCache(capacity=3)
        for i in range(10):
            cache.put(str(i), f"addr {i}")
            assert len(cache) <= 3
        assert len(cache) == 3

    def test_evicts_oldest_inserted(self):
        cache = GeocodeCache(capacity=2)
        cache.put("a", "A")
        cache.put("b", "B")
        cache.put("c", "C")
        assert "a" not in cache
        assert cache.get("b") == "B"
        assert cache.get("c") == "C"

    def test_lookup_does_not_refresh_position(self):
        """FIFO, not LRU: reading 'a' does not save it from eviction."""
        cache = GeocodeCache(capacity=2)
        cache.put("a", "A")
        cache.put("b", "B")
        assert cache.get("a") == "A"
        cache.put("c", "C")
        assert "a" not in cache
        assert "b" in cache

    def test_reput_existing_key_keeps_queue_position(self):
        cache = GeocodeCache(capacity=2)
        cache.put("a", "A")
        cache.put("b", "B")
        cache.put("a", "A2")
        assert len(cache) == 2
        cache.put("c", "C")
        assert "a" not in cache
        assert cache.get("b") == "B"

    def test_clear(self):
        cache = GeocodeCache()
        cache.put("a", "A")
        cache.clear()
        assert len(cache) == 0

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            GeocodeCache(capacity=0)
