"""
Engine settings - tunables read from the `engine:` config section
"""

from dataclasses import dataclass, fields
from typing import Any, Dict

from models.enums import LogLevel, OptimizationLevel


@dataclass(frozen=True)
class EngineSettings:
    """
    Immutable engine configuration

    Attributes:
        cache_max_size: Interpolation cache keys before LRU eviction
        cache_validity_s: Age after which a cache entry stops answering lookups
        cache_ttl_s: Age after which clear_expired() drops a cache entry
        progress_tolerance: Progress distance for a cache hit (exclusive)
        max_samples_per_entry: Samples kept per cache key before thinning
        metrics_history: Rolling history length of PerformanceMetrics
        recent_window: History entries used by recent_avg_performance
        default_level: Optimization level used when none is given
        basic_threshold: Below this many animations, NONE is suggested
        aggressive_threshold: At or above this many animations, AGGRESSIVE is suggested
        log_level: Minimum level for the console logger
    """

    cache_max_size: int = 1000
    cache_validity_s: float = 60.0
    cache_ttl_s: float = 300.0
    progress_tolerance: float = 0.01
    max_samples_per_entry: int = 100
    metrics_history: int = 100
    recent_window: int = 10
    default_level: OptimizationLevel = OptimizationLevel.BASIC
    basic_threshold: int = 8
    aggressive_threshold: int = 64
    log_level: LogLevel = LogLevel.INFO

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, (OptimizationLevel, LogLevel)) else value
        return result
