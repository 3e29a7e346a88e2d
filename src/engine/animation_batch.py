"""
Animation Batch - ticks a group of animations and classifies their output

Optimization levels:
    NONE        - one SingleUpdate per animation that progressed
    BASIC       - same-kind updates merged into Opacity/Position/Color/TransformBatch
    AGGRESSIVE  - BASIC + visibility filter + cache reuse hook
    GPU         - reserved, processed as BASIC

Output order is fixed: SingleUpdates in animation insertion order, then at
most one batch per kind in the order opacity, position, color, transform.
"""

import time
from typing import Callable, Dict, List, Optional

from animations.animation import Animation
from engine.interpolation_cache import InterpolationCache
from engine.performance_metrics import PerformanceMetrics
from models.animated import OpacityValue, PositionValue, TransformUpdate
from models.batched_update import (
    BatchedUpdate,
    ColorBatch,
    OpacityBatch,
    PositionBatch,
    SingleUpdate,
    TransformBatch,
)
from models.enums import LogCategory, OptimizationLevel, PropertyKind
from models.keyframe_value import ColorValue
from models.reports import CacheStats
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.BATCH)

VisibilityPredicate = Callable[[BatchedUpdate], bool]


def _always_visible(update: BatchedUpdate) -> bool:
    return True


class AnimationBatch:
    """
    Group of animations updated together at one optimization level

    Args:
        optimization_level: How updates are classified and filtered
        cache: Interpolation cache (default: fresh cache with default limits)
        metrics: Metrics collector (default: fresh collector)
        visibility: Predicate applied to updates at AGGRESSIVE level
        clock: High resolution timer used to measure update cost
    """

    def __init__(
        self,
        optimization_level: OptimizationLevel,
        cache: Optional[InterpolationCache] = None,
        metrics: Optional[PerformanceMetrics] = None,
        visibility: Optional[VisibilityPredicate] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.optimization_level = optimization_level
        self._cache = cache if cache is not None else InterpolationCache()
        self._metrics = metrics if metrics is not None else PerformanceMetrics()
        self._visibility = visibility or _always_visible
        self._clock = clock

        # Insertion-ordered, id-keyed
        self._animations: Dict[str, Animation] = {}

        if optimization_level is OptimizationLevel.GPU:
            log.info("GPU optimization not available, using BASIC batching")

    def __len__(self) -> int:
        return len(self._animations)

    def __repr__(self) -> str:
        return f"AnimationBatch(level={self.optimization_level.name}, animations={len(self._animations)})"

    # ------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------

    def add_animation(self, animation: Animation) -> None:
        if animation.id in self._animations:
            log.warn("Replacing animation with duplicate id", id=animation.id, optimization=self.optimization_level.name)
        self._animations[animation.id] = animation

    def remove_animation(self, animation_id: str) -> Optional[Animation]:
        return self._animations.pop(animation_id, None)

    def get_animation(self, animation_id: str) -> Optional[Animation]:
        return self._animations.get(animation_id)

    @property
    def animation_ids(self) -> List[str]:
        return list(self._animations)

    @property
    def animations(self) -> List[Animation]:
        return list(self._animations.values())

    # ------------------------------------------------------------
    # Update
    # ------------------------------------------------------------

    def update_batch(self, delta: float) -> List[BatchedUpdate]:
        """
        Tick every animation by `delta` seconds

        Returns:
            Classified updates for this tick (empty when nothing progressed)
        """
        start = self._clock()

        level = self.optimization_level
        if level is OptimizationLevel.NONE:
            updates = self._individual_update(delta)
        elif level is OptimizationLevel.AGGRESSIVE:
            updates = self._aggressive_batched_update(delta)
        else:
            # BASIC and GPU
            updates = self._basic_batched_update(delta)

        elapsed = self._clock() - start
        self._metrics.record_batch_update(len(self._animations), elapsed)
        return updates

    def _individual_update(self, delta: float) -> List[BatchedUpdate]:
        updates: List[BatchedUpdate] = []
        for animation in self._animations.values():
            if animation.update(delta):
                value = animation.get_current_values()
                if value is not None:
                    updates.append(SingleUpdate(animation.id, value))
        return updates

    def _basic_batched_update(self, delta: float) -> List[BatchedUpdate]:
        singles: List[BatchedUpdate] = []
        opacity = OpacityBatch()
        position = PositionBatch()
        color = ColorBatch()
        transform = TransformBatch()

        for animation in self._animations.values():
            if not animation.update(delta):
                continue

            value = animation.get_current_values()
            if value is None:
                continue

            kind = animation.property_kind

            if kind is PropertyKind.OPACITY and isinstance(value, OpacityValue):
                opacity.entries.append((animation.id, value.value))
            elif kind is PropertyKind.POSITION and isinstance(value, PositionValue):
                position.entries.append((animation.id, value.x, value.y))
            elif kind is PropertyKind.COLOR and isinstance(value, ColorValue):
                color.entries.append((animation.id, value.color))
            elif kind is PropertyKind.TRANSFORM and isinstance(value, TransformUpdate) and value.scalar is not None:
                transform.entries.append((animation.id, value.op.value, value.scalar))
            else:
                # Size, custom, css, keyframes, translate/matrix transforms
                singles.append(SingleUpdate(animation.id, value))

        updates = singles
        for batch in (opacity, position, color, transform):
            if batch.entries:
                updates.append(batch)
        return updates

    def _aggressive_batched_update(self, delta: float) -> List[BatchedUpdate]:
        updates = self._basic_batched_update(delta)
        updates = [update for update in updates if self.is_update_visible(update)]
        return self.apply_cached_interpolation(updates)

    def is_update_visible(self, update: BatchedUpdate) -> bool:
        """Whether an update affects something on screen (default: always)"""
        return self._visibility(update)

    def apply_cached_interpolation(self, updates: List[BatchedUpdate]) -> List[BatchedUpdate]:
        """Hook for reusing cached interpolation results; returns updates unchanged"""
        return updates

    # ------------------------------------------------------------
    # Maintenance / diagnostics
    # ------------------------------------------------------------

    def cleanup_completed(self) -> List[str]:
        """Drop completed animations; returns their ids"""
        completed = [animation_id for animation_id, a in self._animations.items() if a.is_completed()]
        for animation_id in completed:
            del self._animations[animation_id]
        return completed

    def clear(self) -> None:
        """Drop all animations and purge expired cache entries"""
        count = len(self._animations)
        self._animations.clear()
        self._cache.clear_expired()
        log.debug("Batch cleared", optimization=self.optimization_level.name, removed=count)

    @property
    def cache(self) -> InterpolationCache:
        return self._cache

    def get_metrics(self) -> PerformanceMetrics:
        return self._metrics

    def get_cache_stats(self) -> CacheStats:
        return self._cache.get_stats()
