"""
Tests for AnimationBatch classification per optimization level.
"""

from animations.animation import (
    AnimationBuilder,
    color_animation,
    fade_in,
    matrix_animation,
    scale_animation,
    slide_in_left,
)
from animations.easing import EasingFunction
from engine.animation_batch import AnimationBatch
from engine.interpolation_cache import InterpolationCache
from models.animated import SizeProperty, SizeValue
from models.batched_update import (
    ColorBatch,
    OpacityBatch,
    PositionBatch,
    SingleUpdate,
    TransformBatch,
)
from models.color import Color
from models.enums import OptimizationLevel
from models.transform import TransformMatrix


def _playing(animation):
    animation.play()
    return animation


def _size(animation_id):
    return _playing(
        AnimationBuilder(animation_id)
        .animate_property(SizeProperty(0, 0, 10, 10))
        .duration_ms(1000)
        .build()
    )


class TestBasicBatching:
    """Same-kind updates merged into one record per kind."""

    def test_three_opacity_animations_make_one_batch(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        for name in ("a", "b", "c"):
            batch.add_animation(_playing(fade_in(name, 1000)))

        updates = batch.update_batch(0.5)

        assert len(updates) == 1
        assert isinstance(updates[0], OpacityBatch)
        assert len(updates[0]) == 3
        assert [entry[0] for entry in updates[0].entries] == ["a", "b", "c"]

    def test_empty_batch_emits_nothing(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)

        assert batch.update_batch(0.016) == []

    def test_idle_animations_emit_nothing(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        batch.add_animation(fade_in("stopped", 1000))

        assert batch.update_batch(0.1) == []

    def test_output_order(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        batch.add_animation(_playing(scale_animation("scale", 1.0, 2.0, 1000)))
        batch.add_animation(_playing(color_animation("color", Color(0, 0, 0), Color(255, 255, 255), 1000)))
        batch.add_animation(_playing(slide_in_left("slide", 0, 10, 0, 1000)))
        batch.add_animation(_playing(fade_in("fade", 1000)))
        batch.add_animation(_size("size"))

        updates = batch.update_batch(0.5)

        assert [type(u) for u in updates] == [SingleUpdate, OpacityBatch, PositionBatch, ColorBatch, TransformBatch]
        assert updates[0].animation_id == "size"
        assert isinstance(updates[0].value, SizeValue)

    def test_transform_batch_entries(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        batch.add_animation(_playing(scale_animation("scale", 1.0, 2.0, 1000)))

        (update,) = batch.update_batch(1.0)

        assert update.entries == [("scale", "scale", 2.0)]

    def test_matrix_transform_is_single(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        batch.add_animation(_playing(matrix_animation("m", TransformMatrix(), TransformMatrix.scale(2), 1000)))

        (update,) = batch.update_batch(0.5)

        assert isinstance(update, SingleUpdate)

    def test_gpu_falls_back_to_basic(self, timer):
        batch = AnimationBatch(OptimizationLevel.GPU, clock=timer)
        batch.add_animation(_playing(fade_in("a", 1000)))
        batch.add_animation(_playing(fade_in("b", 1000)))

        (update,) = batch.update_batch(0.5)

        assert isinstance(update, OpacityBatch)
        assert len(update) == 2


class TestOtherLevels:
    """NONE and AGGRESSIVE."""

    def test_none_emits_one_update_per_animation(self, timer):
        batch = AnimationBatch(OptimizationLevel.NONE, clock=timer)
        batch.add_animation(_playing(fade_in("a", 1000)))
        batch.add_animation(_playing(fade_in("b", 1000)))

        updates = batch.update_batch(0.5)

        assert [u.animation_id for u in updates] == ["a", "b"]
        assert all(isinstance(u, SingleUpdate) for u in updates)

    def test_aggressive_applies_visibility_filter(self, timer):
        batch = AnimationBatch(
            OptimizationLevel.AGGRESSIVE,
            visibility=lambda update: not isinstance(update, OpacityBatch),
            clock=timer,
        )
        batch.add_animation(_playing(fade_in("fade", 1000)))
        batch.add_animation(_playing(slide_in_left("slide", 0, 10, 0, 1000)))

        updates = batch.update_batch(0.5)

        assert [type(u) for u in updates] == [PositionBatch]

    def test_aggressive_without_filter_matches_basic(self, timer):
        batch = AnimationBatch(OptimizationLevel.AGGRESSIVE, clock=timer)
        batch.add_animation(_playing(fade_in("a", 1000)))

        (update,) = batch.update_batch(0.5)

        assert isinstance(update, OpacityBatch)


class TestBatchMembership:
    """Add, remove, cleanup, metrics."""

    def test_duplicate_id_replaces(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        first = fade_in("a", 100)
        second = fade_in("a", 200)
        batch.add_animation(first)
        batch.add_animation(second)

        assert len(batch) == 1
        assert batch.get_animation("a") is second

    def test_remove_animation(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        animation = fade_in("a", 100)
        batch.add_animation(animation)

        assert batch.remove_animation("a") is animation
        assert batch.remove_animation("a") is None
        assert batch.animation_ids == []

    def test_cleanup_completed(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        batch.add_animation(_playing(fade_in("short", 100)))
        batch.add_animation(_playing(fade_in("long", 1000)))
        batch.update_batch(0.2)

        assert batch.cleanup_completed() == ["short"]
        assert batch.animation_ids == ["long"]

    def test_metrics_record_every_update(self, timer):
        batch = AnimationBatch(OptimizationLevel.BASIC, clock=timer)
        batch.add_animation(_playing(fade_in("a", 1000)))
        batch.add_animation(fade_in("idle", 1000))

        batch.update_batch(0.1)
        batch.update_batch(0.1)

        metrics = batch.get_metrics()
        assert metrics.total_animations == 4
        assert metrics.peak_batch_size == 2
        assert len(metrics.update_history) == 2

    def test_clear_purges_expired_cache_entries(self, clock, timer):
        cache = InterpolationCache(ttl_s=10, clock=clock)
        batch = AnimationBatch(OptimizationLevel.BASIC, cache=cache, clock=timer)
        batch.add_animation(fade_in("a", 100))
        cache.get_interpolated_value("a", SizeValue(0, 0), SizeValue(2, 2), EasingFunction.linear(), 0.5)
        clock.advance(10)

        batch.clear()

        assert len(batch) == 0
        assert len(cache) == 0
        assert batch.get_cache_stats().misses == 1
