"""Tests for the in-memory TTL cache."""

import pytest

from marketplace.core.cache import CacheEntry, TTLCache, get_coupons_cache, get_stores_cache


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl_seconds=30, clock=clock)


class TestGetAndSet:
    def test_miss_on_empty_cache(self, cache):
        assert cache.get("coupons:a") is None

    def test_hit_within_ttl(self, cache, clock):
        cache.set("coupons:a", [1, 2])
        clock.advance(29.9)
        entry = cache.get("coupons:a")
        assert entry == CacheEntry(data=[1, 2], timestamp=1000.0)

    def test_miss_at_ttl_boundary(self, cache, clock):
        cache.set("coupons:a", [1, 2])
        clock.advance(30)
        assert cache.get("coupons:a") is None

    def test_stale_entry_is_removed(self, cache, clock):
        cache.set("coupons:a", [1])
        clock.advance(31)
        cache.get("coupons:a")
        assert len(cache) == 0

    def test_explicit_timestamp(self, cache):
        cache.set("coupons:a", "old", timestamp=900.0)
        assert cache.get("coupons:a") is None

    def test_keys_are_independent(self, cache):
        cache.set("coupons:a", "a")
        cache.set("coupons:b", "b")
        assert cache.get("coupons:a").data == "a"
        assert cache.get("coupons:b").data == "b"

    def test_set_overwrites(self, cache, clock):
        cache.set("coupons:a", "first")
        clock.advance(20)
        cache.set("coupons:a", "second")
        clock.advance(20)
        entry = cache.get("coupons:a")
        assert entry.data == "second"
        assert entry.timestamp == 1020.0

    def test_clock_failure_is_a_miss(self):
        def broken_clock() -> float:
            raise RuntimeError("clock unavailable")

        cache = TTLCache(ttl_seconds=30, clock=broken_clock)
        assert cache.get("coupons:a") is None

    def test_clear(self, cache):
        cache.set("coupons:a", "a")
        cache.set("coupons:b", "b")
        cache.clear()
        assert len(cache) == 0
        assert cache.get("coupons:a") is None


class TestGetOrLoad:
    def test_loads_once_within_ttl(self, cache, clock):
        calls = []

        def loader():
            calls.append(1)
            return ["coupon"]

        assert cache.get_or_load("k", loader) == ["coupon"]
        clock.advance(10)
        assert cache.get_or_load("k", loader) == ["coupon"]
        assert len(calls) == 1

    def test_reloads_after_ttl(self, cache, clock):
        results = iter([["old"], ["new"]])
        cache.get_or_load("k", lambda: next(results))
        clock.advance(31)
        assert cache.get_or_load("k", lambda: next(results)) == ["new"]

    def test_bypass_skips_read_but_stores_result(self, cache, clock):
        cache.set("k", ["cached"])
        assert cache.get_or_load("k", lambda: ["fresh"], bypass=True) == ["fresh"]
        assert cache.get("k").data == ["fresh"]
        assert cache.get("k").timestamp == clock()

    def test_loader_errors_propagate_and_nothing_is_stored(self, cache):
        def loader():
            raise RuntimeError("database down")

        with pytest.raises(RuntimeError):
            cache.get_or_load("k", loader)
        assert cache.get("k") is None

    def test_none_results_are_cached(self, cache):
        calls = []

        def loader():
            calls.append(1)

        cache.get_or_load("k", loader)
        cache.get_or_load("k", loader)
        assert len(calls) == 1


class TestDependencies:
    def test_coupons_and_stores_caches_are_separate(self):
        assert get_coupons_cache() is not get_stores_cache()

    def test_default_ttls(self):
        assert get_coupons_cache().ttl_seconds == 30
        assert get_stores_cache().ttl_seconds == 60
