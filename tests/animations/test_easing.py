"""
Tests for the easing library.
"""

import math

import pytest

from animations.easing import MIN_ELASTIC_PERIOD, EasingFunction
from animations.spring import SpringConfig
from models.enums import EasingKind


class TestEasingBoundaries:
    """Standard curves map 0 → 0 and 1 → 1."""

    @pytest.mark.parametrize("kind", [
        EasingKind.LINEAR,
        EasingKind.EASE_IN,
        EasingKind.EASE_OUT,
        EasingKind.EASE_IN_OUT,
        EasingKind.BOUNCE,
        EasingKind.ELASTIC,
        EasingKind.BACK,
        EasingKind.EXPO,
        EasingKind.CIRC,
        EasingKind.SINE,
        EasingKind.QUAD,
        EasingKind.CUBIC,
        EasingKind.QUART,
        EasingKind.QUINT,
    ])
    def test_endpoints(self, kind):
        easing = EasingFunction.of(kind)

        assert easing.apply(0.0) == pytest.approx(0.0, abs=1e-3)
        assert easing.apply(1.0) == pytest.approx(1.0, abs=1e-3)

    def test_progress_is_clamped(self):
        easing = EasingFunction.linear()

        assert easing.apply(-0.5) == 0.0
        assert easing.apply(1.5) == 1.0

    def test_parametric_kind_needs_params(self):
        with pytest.raises(ValueError):
            EasingFunction.of(EasingKind.STEPS)


class TestEasingCurves:
    """Individual curve shapes."""

    def test_quad_family(self):
        assert EasingFunction.ease_in().apply(0.5) == 0.25
        assert EasingFunction.ease_out().apply(0.5) == 0.75
        assert EasingFunction.ease_in_out().apply(0.25) == 0.125

    def test_cubic_bezier_uses_y_controls(self):
        assert EasingFunction.cubic_bezier(0.0, 0.0, 1.0, 1.0).apply(0.5) == pytest.approx(0.5)

    def test_steps(self):
        assert EasingFunction.steps(4).apply(0.3) == 0.25
        assert EasingFunction.steps(4, jump_at_start=True).apply(0.3) == 0.5
        assert EasingFunction.steps(4).apply(1.0) == 1.0

    def test_zero_steps(self):
        assert EasingFunction.steps(0).apply(0.7) == 0.0
        assert EasingFunction.steps(0, jump_at_start=True).apply(0.7) == 1.0

    def test_linear_points(self):
        easing = EasingFunction.linear_points([0.0, 0.5, 1.0])

        assert easing.apply(0.25) == pytest.approx(0.25)
        assert easing.apply(1.0) == pytest.approx(1.0)

    def test_linear_points_degenerate(self):
        assert EasingFunction.linear_points([]).apply(0.4) == 0.4
        assert EasingFunction.linear_points([2.0]).apply(0.5) == 1.0

    def test_irregular_is_deterministic_and_bounded(self):
        easing = EasingFunction.irregular(5, 0.8)
        samples = [easing.apply(i / 20) for i in range(21)]

        assert samples == [easing.apply(i / 20) for i in range(21)]
        assert all(0.0 <= s <= 1.0 for s in samples)

    def test_power_curves(self):
        assert EasingFunction.power_in(3).apply(0.5) == 0.125
        assert EasingFunction.power_out(3).apply(0.5) == 0.875
        assert EasingFunction.power_in_out(2).apply(0.5) == pytest.approx(0.5)

    @pytest.mark.parametrize("constructor", [
        EasingFunction.power_in,
        EasingFunction.power_out,
        EasingFunction.power_in_out,
    ])
    def test_negative_power_is_clamped(self, constructor):
        """A negative power would divide by zero at the curve ends"""
        easing = constructor(-2)

        assert easing.params == (0.0,)
        for t in (0.0, 0.5, 1.0):
            assert math.isfinite(easing.apply(t))

    @pytest.mark.parametrize("constructor", [
        EasingFunction.elastic_in,
        EasingFunction.elastic_out,
        EasingFunction.elastic_in_out,
    ])
    def test_zero_elastic_period_is_clamped(self, constructor):
        easing = constructor(1.0, 0.0)

        assert easing.params == (1.0, MIN_ELASTIC_PERIOD)
        for t in (0.0, 0.25, 0.5, 0.75, 1.0):
            assert math.isfinite(easing.apply(t))

    def test_back_out_overshoots(self):
        """Back curves leave 0-1 before settling."""
        easing = EasingFunction.back_out()

        assert easing.apply(0.5) > 1.0
        assert easing.apply(1.0) == pytest.approx(1.0)

    def test_back_in_undershoots(self):
        assert EasingFunction.back_in().apply(0.2) < 0.0

    def test_elastic_endpoints(self):
        for easing in (EasingFunction.elastic_in(), EasingFunction.elastic_out(), EasingFunction.elastic_in_out()):
            assert easing.apply(0.0) == 0.0
            assert easing.apply(1.0) == 1.0


class TestEasingValue:
    """EasingFunction as a comparable value."""

    def test_equality(self):
        assert EasingFunction.cubic_bezier(0.1, 0.2, 0.3, 0.4) == EasingFunction.cubic_bezier(0.1, 0.2, 0.3, 0.4)
        assert EasingFunction.ease_in() != EasingFunction.ease_out()
        assert EasingFunction.power_in(2) != EasingFunction.power_in(3)

    def test_hashable(self):
        assert len({EasingFunction.linear(), EasingFunction.linear(), EasingFunction.spring_gentle()}) == 2

    def test_name(self):
        assert EasingFunction.ease_in_out().name == "ease_in_out"

    def test_apply_with_values(self):
        assert EasingFunction.linear().apply_with_values(0.25, 10.0, 20.0) == 12.5


class TestSpringEasing:
    """Spring-backed easing curves."""

    def test_spring_starts_at_zero(self):
        assert EasingFunction.spring_gentle().apply(0.0) == 0.0

    def test_spring_ends_near_target(self):
        assert EasingFunction.spring_stiff().apply(1.0) == pytest.approx(1.0, abs=0.05)

    def test_spring_apply_with_values_uses_real_range(self):
        easing = EasingFunction.spring_config(SpringConfig.no_overshoot())

        assert easing.apply_with_values(0.0, 10.0, 110.0) == 10.0
        result = easing.apply_with_values(1.0, 10.0, 110.0)
        assert 100.0 < result <= 110.0

    def test_undamped_spring_stays_finite(self):
        easing = EasingFunction.spring_physics(1.0, 100.0, 0.0)

        assert math.isfinite(easing.apply(0.5))

    def test_spring_config_to_easing(self):
        config = SpringConfig.wobbly()

        assert config.to_easing_function() == EasingFunction.spring_wobbly()
