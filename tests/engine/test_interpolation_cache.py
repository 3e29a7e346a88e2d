"""
Tests for InterpolationCache (sample reuse, LRU eviction, expiry).
"""

import pytest

from animations.easing import EasingFunction
from engine.interpolation_cache import InterpolationCache
from models.animated import OpacityValue, PositionValue
from models.reports import CacheStats

LINEAR = EasingFunction.linear()
FROM = OpacityValue(0.0)
TO = OpacityValue(1.0)


class TestCacheLookup:
    """Hit/miss accounting."""

    def test_miss_then_hit(self, clock):
        cache = InterpolationCache(clock=clock)

        first = cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.5)
        second = cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.5)

        assert first == second == OpacityValue(0.5)
        assert (cache.misses, cache.hits) == (1, 1)
        assert cache.get_stats().hit_rate == 0.5

    def test_hit_within_tolerance_returns_stored_sample(self, clock):
        cache = InterpolationCache(clock=clock)
        cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.5)

        value = cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.505)

        assert value == OpacityValue(0.5)
        assert cache.hits == 1

    def test_tolerance_is_exclusive(self, clock):
        cache = InterpolationCache(clock=clock, tolerance=0.25)
        cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.5)

        cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.75)

        assert cache.hits == 0
        assert len(cache.get_entry("fade").samples) == 2

    def test_easing_is_applied_on_miss(self, clock):
        cache = InterpolationCache(clock=clock)

        value = cache.get_interpolated_value("fade", FROM, TO, EasingFunction.ease_in(), 0.5)

        assert value == OpacityValue(0.25)

    def test_different_easing_replaces_entry(self, clock):
        cache = InterpolationCache(clock=clock)
        cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.5)

        cache.get_interpolated_value("fade", FROM, TO, EasingFunction.ease_in(), 0.5)

        entry = cache.get_entry("fade")
        assert cache.misses == 2
        assert entry.easing == EasingFunction.ease_in()
        assert len(entry.samples) == 1

    def test_different_value_kind_is_a_miss(self, clock):
        cache = InterpolationCache(clock=clock)
        cache.get_interpolated_value("k", FROM, TO, LINEAR, 0.5)

        value = cache.get_interpolated_value("k", PositionValue(0, 0), PositionValue(10, 0), LINEAR, 0.5)

        assert value == PositionValue(5, 0)
        assert cache.misses == 2

    def test_stats_snapshot(self, clock):
        cache = InterpolationCache(max_size=7, clock=clock)

        stats = cache.get_stats()

        assert isinstance(stats, CacheStats)
        assert stats.hit_rate == 0.0
        assert stats.max_size == 7
        assert stats.cache_size == 0


class TestCacheEviction:
    """Capacity, validity and TTL."""

    def test_least_recently_used_is_evicted(self, clock):
        cache = InterpolationCache(max_size=2, clock=clock)

        cache.get_interpolated_value("a", FROM, TO, LINEAR, 0.5)
        clock.advance(1)
        cache.get_interpolated_value("b", FROM, TO, LINEAR, 0.5)
        clock.advance(1)
        cache.get_interpolated_value("a", FROM, TO, LINEAR, 0.5)  # hit refreshes "a"
        clock.advance(1)
        cache.get_interpolated_value("c", FROM, TO, LINEAR, 0.5)

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert len(cache) == 2

    def test_existing_key_does_not_evict(self, clock):
        cache = InterpolationCache(max_size=1, clock=clock)
        cache.get_interpolated_value("a", FROM, TO, LINEAR, 0.1)

        cache.get_interpolated_value("a", FROM, TO, LINEAR, 0.9)

        assert len(cache.get_entry("a").samples) == 2

    def test_stale_entry_stops_answering(self, clock):
        cache = InterpolationCache(validity_s=60, clock=clock)
        cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.5)
        clock.advance(61)

        cache.get_interpolated_value("fade", FROM, TO, LINEAR, 0.5)

        assert cache.hits == 0
        assert cache.misses == 2
        assert cache.get_entry("fade").created == 61

    def test_clear_expired(self, clock):
        cache = InterpolationCache(ttl_s=300, clock=clock)
        cache.get_interpolated_value("old", FROM, TO, LINEAR, 0.5)
        clock.advance(200)
        cache.get_interpolated_value("new", FROM, TO, LINEAR, 0.5)
        clock.advance(100)

        assert cache.clear_expired() == 1
        assert "old" not in cache
        assert "new" in cache

    def test_clear(self, clock):
        cache = InterpolationCache(clock=clock)
        cache.get_interpolated_value("a", FROM, TO, LINEAR, 0.5)

        cache.clear()

        assert len(cache) == 0


class TestCacheSamples:
    """Per-entry sample cap."""

    def test_samples_are_thinned_past_the_cap(self, clock):
        cache = InterpolationCache(max_samples=4, clock=clock)

        for progress in (0.4, 0.0, 0.2, 0.1, 0.3):
            cache.get_interpolated_value("fade", FROM, TO, LINEAR, progress)

        samples = cache.get_entry("fade").samples
        assert [p for p, _ in samples] == pytest.approx([0.0, 0.2, 0.4])

    def test_sample_count_stays_bounded(self, clock):
        cache = InterpolationCache(max_samples=10, clock=clock)

        for i in range(200):
            cache.get_interpolated_value("fade", FROM, TO, LINEAR, i / 200)

        assert len(cache.get_entry("fade").samples) <= 10
