"""
Optimized Animation Manager - single entry point for "advance one tick"

Owns one AnimationBatch per pre-created optimization level (NONE, BASIC,
AGGRESSIVE) plus a map of unbatched animations. GPU has no batch of its
own; animations added at GPU are ticked individually.

    manager = OptimizedAnimationManager()
    manager.add_animation(fade_in("title", 300), OptimizationLevel.BASIC)

    # once per frame, from the host render loop
    for update in manager.update_all():
        renderer.apply(update)
"""

import time
from typing import Callable, Dict, List, Optional

from animations.animation import Animation
from engine.animation_batch import AnimationBatch
from engine.interpolation_cache import InterpolationCache
from engine.performance_metrics import PerformanceMetrics
from models.batched_update import BatchedUpdate, SingleUpdate
from models.engine_settings import EngineSettings
from models.enums import LogCategory, LogLevel, OptimizationLevel
from models.reports import CacheStats
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.ENGINE)

Clock = Callable[[], float]

BATCHED_LEVELS = (
    OptimizationLevel.NONE,
    OptimizationLevel.BASIC,
    OptimizationLevel.AGGRESSIVE,
)


class OptimizedAnimationManager:
    """
    Top-level orchestrator for batched animations

    Args:
        settings: Engine settings (cache limits, metrics history, thresholds)
        clock: Monotonic time source for frame deltas (seconds)
        timer: High resolution timer for measuring update cost (seconds)
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        clock: Clock = time.monotonic,
        timer: Clock = time.perf_counter,
    ):
        self.settings = settings or EngineSettings()
        self._clock = clock
        self._timer = timer

        self.batches: Dict[OptimizationLevel, AnimationBatch] = {
            level: self._create_batch(level) for level in BATCHED_LEVELS
        }
        self.unbatched: Dict[str, Animation] = {}
        self.global_metrics = self._create_metrics()
        self.last_update = clock()

        log.info(
            "Animation manager ready",
            levels=", ".join(level.name for level in self.batches),
            default_level=self.settings.default_level.name,
        )

    def _create_metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            max_history=self.settings.metrics_history,
            recent_window=self.settings.recent_window,
        )

    def _create_batch(self, level: OptimizationLevel) -> AnimationBatch:
        cache = InterpolationCache(
            max_size=self.settings.cache_max_size,
            validity_s=self.settings.cache_validity_s,
            ttl_s=self.settings.cache_ttl_s,
            tolerance=self.settings.progress_tolerance,
            max_samples=self.settings.max_samples_per_entry,
            clock=self._clock,
        )
        return AnimationBatch(level, cache=cache, metrics=self._create_metrics(), clock=self._timer)

    # ------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------

    def add_animation(self, animation: Animation, level: Optional[OptimizationLevel] = None) -> None:
        """Add to the batch for `level` (default from settings), or unbatched if none exists"""
        level = level or self.settings.default_level

        batch = self.batches.get(level)
        if batch is not None:
            batch.add_animation(animation)
        else:
            self.unbatched[animation.id] = animation

        log.debug("Animation added", id=animation.id, optimization=level.name, batched=batch is not None)

    def remove_animation(self, animation_id: str) -> Optional[Animation]:
        for batch in self.batches.values():
            removed = batch.remove_animation(animation_id)
            if removed is not None:
                return removed
        return self.unbatched.pop(animation_id, None)

    def get_animation(self, animation_id: str) -> Optional[Animation]:
        for batch in self.batches.values():
            animation = batch.get_animation(animation_id)
            if animation is not None:
                return animation
        return self.unbatched.get(animation_id)

    def _all_animations(self) -> List[Animation]:
        animations: List[Animation] = []
        for batch in self.batches.values():
            animations.extend(batch.animations)
        animations.extend(self.unbatched.values())
        return animations

    def __len__(self) -> int:
        return sum(len(batch) for batch in self.batches.values()) + len(self.unbatched)

    # ------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------

    def update_all(self) -> List[BatchedUpdate]:
        """
        Advance every animation by the time elapsed since the previous call

        Returns:
            Updates from each batch (NONE, BASIC, AGGRESSIVE order), then
            one SingleUpdate per progressed unbatched animation
        """
        now = self._clock()
        delta = max(0.0, now - self.last_update)
        self.last_update = now

        start = self._timer()
        updates: List[BatchedUpdate] = []

        for level in BATCHED_LEVELS:
            updates.extend(self.batches[level].update_batch(delta))

        for animation in self.unbatched.values():
            if animation.update(delta):
                value = animation.get_current_values()
                if value is not None:
                    updates.append(SingleUpdate(animation.id, value))

        self.global_metrics.record_batch_update(len(self), self._timer() - start)
        return updates

    # ------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------

    def active_count(self) -> int:
        """Animations currently playing"""
        return sum(1 for animation in self._all_animations() if animation.is_playing())

    def cleanup_completed(self) -> List[str]:
        """Remove completed animations everywhere; returns their ids"""
        removed: List[str] = []
        for batch in self.batches.values():
            removed.extend(batch.cleanup_completed())

        completed = [animation_id for animation_id, a in self.unbatched.items() if a.is_completed()]
        for animation_id in completed:
            del self.unbatched[animation_id]
        removed.extend(completed)

        if removed:
            log.debug("Completed animations removed", count=len(removed))
        return removed

    def clear(self) -> None:
        for batch in self.batches.values():
            batch.clear()
        self.unbatched.clear()

    # ------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------

    def get_global_metrics(self) -> PerformanceMetrics:
        return self.global_metrics

    def get_batch_metrics(self, level: OptimizationLevel) -> Optional[PerformanceMetrics]:
        batch = self.batches.get(level)
        return batch.get_metrics() if batch is not None else None

    def get_cache_stats(self, level: OptimizationLevel) -> Optional[CacheStats]:
        batch = self.batches.get(level)
        return batch.get_cache_stats() if batch is not None else None

    def identify_bottleneck(self) -> Optional[OptimizationLevel]:
        """Level whose batch has the highest recent cost per animation (None without data)"""
        worst_level = None
        worst_cost = -1.0

        for level in BATCHED_LEVELS:
            cost = self.batches[level].get_metrics().recent_avg_performance
            if cost is not None and cost > worst_cost:
                worst_level = level
                worst_cost = cost

        return worst_level

    def suggest_optimization_level(self, animation_count: Optional[int] = None) -> OptimizationLevel:
        """
        Recommended level for `animation_count` concurrent animations

        Defaults to the number of animations currently managed.
        """
        count = len(self) if animation_count is None else animation_count

        if count < self.settings.basic_threshold:
            return OptimizationLevel.NONE
        if count < self.settings.aggressive_threshold:
            return OptimizationLevel.BASIC
        return OptimizationLevel.AGGRESSIVE

    def performance_summary(self) -> str:
        """Global and per-batch reports as one block of text"""
        sections = [self.global_metrics.format_report("Global")]

        for level in BATCHED_LEVELS:
            batch = self.batches[level]
            stats = batch.get_cache_stats()
            sections.append(batch.get_metrics().format_report(f"{level.name} ({len(batch)} animations)"))
            sections.append(
                f"  cache: {stats.hits} hits / {stats.misses} misses "
                f"({stats.hit_rate:.0%}), {stats.cache_size}/{stats.max_size} entries"
            )

        bottleneck = self.identify_bottleneck()
        sections.append(f"Bottleneck: {bottleneck.name if bottleneck else 'none'}")

        summary = "\n".join(sections)
        if log.is_enabled_for(LogLevel.DEBUG):
            log.debug("Performance summary", details=summary.splitlines())
        return summary
