"""
Interpolation Cache - memoized progress → value samples with LRU eviction

Each cache key owns a CachedInterpolation: the from/to values and easing it
was built for plus a list of (progress, value) samples. A lookup within
`tolerance` of a stored sample is a hit; anything else is computed,
stored and counted as a miss.

Expiry:
    validity_s  - entry older than this no longer answers lookups (replaced on next miss)
    ttl_s       - clear_expired() drops entries older than this regardless of use
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from animations.easing import EasingFunction
from models.animated import AnimatedValue, interpolate_animated_values
from models.enums import LogCategory
from models.reports import CacheStats
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CACHE)

Clock = Callable[[], float]

DEFAULT_MAX_SIZE = 1000
DEFAULT_VALIDITY_S = 60.0
DEFAULT_TTL_S = 300.0
DEFAULT_TOLERANCE = 0.01
DEFAULT_MAX_SAMPLES = 100


@dataclass
class CachedInterpolation:
    """Samples recorded for one cache key"""

    from_value: AnimatedValue
    to_value: AnimatedValue
    easing: EasingFunction
    created: float
    last_access: float
    samples: List[Tuple[float, AnimatedValue]] = field(default_factory=list)

    def matches(self, from_value: AnimatedValue, to_value: AnimatedValue, easing: EasingFunction) -> bool:
        """Same value kinds and identical easing"""
        return (
            type(self.from_value) is type(from_value)
            and type(self.to_value) is type(to_value)
            and self.easing == easing
        )

    def nearest(self, progress: float, tolerance: float) -> Optional[AnimatedValue]:
        """Closest stored sample strictly within tolerance, or None"""
        closest = None
        closest_distance = float('inf')

        for sample_progress, sample_value in self.samples:
            distance = abs(sample_progress - progress)
            if distance < closest_distance:
                closest_distance = distance
                closest = sample_value

        return closest if closest_distance < tolerance else None

    def add_sample(self, progress: float, value: AnimatedValue, max_samples: int) -> None:
        self.samples.append((progress, value))
        if len(self.samples) > max_samples:
            # Thin to every other sample along the progress axis
            self.samples.sort(key=lambda sample: sample[0])
            self.samples = self.samples[::2]


class InterpolationCache:
    """
    LRU cache of interpolation samples

    Args:
        max_size: Number of keys kept before the least recently used is evicted
        validity_s: Age after which an entry stops answering lookups
        ttl_s: Age after which clear_expired() drops an entry
        tolerance: Progress distance (exclusive) for a sample to count as a hit
        max_samples: Per-entry sample cap before thinning
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        validity_s: float = DEFAULT_VALIDITY_S,
        ttl_s: float = DEFAULT_TTL_S,
        tolerance: float = DEFAULT_TOLERANCE,
        max_samples: int = DEFAULT_MAX_SAMPLES,
        clock: Clock = time.monotonic,
    ):
        self.max_size = max(1, max_size)
        self.validity_s = validity_s
        self.ttl_s = ttl_s
        self.tolerance = tolerance
        self.max_samples = max(2, max_samples)
        self._clock = clock

        self._entries: Dict[str, CachedInterpolation] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    # ------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------

    def get_interpolated_value(
        self,
        key: str,
        from_value: AnimatedValue,
        to_value: AnimatedValue,
        easing: EasingFunction,
        progress: float,
    ) -> AnimatedValue:
        """
        Value at `progress` between from_value and to_value

        Returns a stored sample when a valid entry holds one within
        tolerance, otherwise computes, stores and returns a fresh value.
        """
        now = self._clock()
        entry = self._entries.get(key)

        if entry is not None and self._is_valid(entry, from_value, to_value, easing, now):
            cached = entry.nearest(progress, self.tolerance)
            if cached is not None:
                entry.last_access = now
                self.hits += 1
                return cached

        self.misses += 1
        value = interpolate_animated_values(from_value, to_value, easing.apply(progress))
        self._store(key, entry, from_value, to_value, easing, progress, value, now)
        return value

    def _is_valid(
        self,
        entry: CachedInterpolation,
        from_value: AnimatedValue,
        to_value: AnimatedValue,
        easing: EasingFunction,
        now: float,
    ) -> bool:
        return entry.matches(from_value, to_value, easing) and (now - entry.created) < self.validity_s

    def _store(
        self,
        key: str,
        entry: Optional[CachedInterpolation],
        from_value: AnimatedValue,
        to_value: AnimatedValue,
        easing: EasingFunction,
        progress: float,
        value: AnimatedValue,
        now: float,
    ) -> None:
        if entry is None:
            if len(self._entries) >= self.max_size:
                self._evict_lru()
            entry = self._new_entry(key, from_value, to_value, easing, now)
        elif not self._is_valid(entry, from_value, to_value, easing, now):
            log.debug("Replacing stale cache entry", key=key)
            entry = self._new_entry(key, from_value, to_value, easing, now)

        entry.add_sample(progress, value, self.max_samples)
        entry.last_access = now

    def _new_entry(
        self,
        key: str,
        from_value: AnimatedValue,
        to_value: AnimatedValue,
        easing: EasingFunction,
        now: float,
    ) -> CachedInterpolation:
        entry = CachedInterpolation(from_value, to_value, easing, created=now, last_access=now)
        self._entries[key] = entry
        return entry

    def _evict_lru(self) -> None:
        if not self._entries:
            return
        oldest_key = min(self._entries, key=lambda k: self._entries[k].last_access)
        del self._entries[oldest_key]
        log.debug("Evicted least recently used entry", key=oldest_key)

    # ------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------

    def clear_expired(self) -> int:
        """Drop entries older than the TTL; returns how many were dropped"""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if (now - entry.created) >= self.ttl_s]
        for key in expired:
            del self._entries[key]

        if expired:
            log.debug("Expired cache entries removed", count=len(expired), remaining=len(self._entries))
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def get_entry(self, key: str) -> Optional[CachedInterpolation]:
        return self._entries.get(key)

    def get_stats(self) -> CacheStats:
        lookups = self.hits + self.misses
        return CacheStats(
            hits=self.hits,
            misses=self.misses,
            hit_rate=self.hits / lookups if lookups else 0.0,
            cache_size=len(self._entries),
            max_size=self.max_size,
        )
