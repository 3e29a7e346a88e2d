"""
Tests for keyframe sequences: building, sampling and validation.
"""

import math

import pytest

from animations.easing import EasingFunction
from animations.keyframes import (
    Keyframe,
    KeyframeSequence,
    KeyframeValidationError,
    bounce_in,
    fade_in,
    keyframes,
    pulse,
    slide_in_from_left,
)
from models.color import Color
from models.css import CssValue
from models.enums import ValidationFailure
from models.keyframe_value import ColorValue, NumberValue, StringValue, TransformValue
from models.transform import TransformMatrix


def _linear_fade():
    return (
        keyframes(1000)
        .with_default_easing(EasingFunction.linear())
        .at(0.0).opacity(0.0).finish()
        .at(1.0).opacity(1.0).finish()
    )


class TestKeyframe:
    """Single keyframe construction."""

    def test_offset_is_clamped(self):
        assert Keyframe(1.5).offset == 1.0
        assert Keyframe(-0.2).offset == 0.0

    def test_nan_offset_is_kept(self):
        assert math.isnan(Keyframe(float("nan")).offset)

    def test_opacity_is_clamped(self):
        keyframe = Keyframe(0.0).opacity(1.7)

        assert keyframe.properties["opacity"] == NumberValue(1.0)

    def test_setters_chain(self):
        keyframe = Keyframe(0.5).color(1, 2, 3).number("glow", 2).string("mode", "on").boolean("visible", True)

        assert keyframe.properties["color"] == ColorValue(Color(1, 2, 3))
        assert keyframe.properties["glow"] == NumberValue(2.0)
        assert set(keyframe.properties) == {"color", "glow", "mode", "visible"}


class TestKeyframeSequenceBuilding:
    """Builder chain and ordering."""

    def test_builder_commits_on_finish(self):
        sequence = _linear_fade()

        assert len(sequence) == 2
        assert sequence.duration == 1.0

    def test_out_of_order_insertion_is_sorted(self):
        sequence = keyframes(100).at(0.8).opacity(0.8).finish().at(0.2).opacity(0.2).finish()

        assert [kf.offset for kf in sequence.keyframes] == [0.2, 0.8]

    def test_nan_offset_sorts_last(self):
        sequence = KeyframeSequence()
        sequence.add_keyframe(Keyframe(float("nan")))
        sequence.add_keyframe(Keyframe(0.5))
        sequence.add_keyframe(Keyframe(0.1))

        assert [kf.offset for kf in sequence.keyframes[:2]] == [0.1, 0.5]
        assert math.isnan(sequence.keyframes[2].offset)

    def test_property_names_in_first_appearance_order(self):
        sequence = (
            keyframes(100)
            .at(0.0).opacity(0.0).number("glow", 0).finish()
            .at(1.0).color(0, 0, 0).opacity(1.0).finish()
        )

        assert sequence.get_property_names() == ["opacity", "glow", "color"]


class TestKeyframeSampling:
    """sample(t) semantics."""

    def test_linear_exactness(self):
        assert _linear_fade().sample(0.3)["opacity"].value == pytest.approx(0.3)

    def test_boundary_holding(self):
        sequence = (
            keyframes(100)
            .with_default_easing(EasingFunction.linear())
            .at(0.2).opacity(0.2).finish()
            .at(0.8).opacity(0.8).finish()
        )

        assert sequence.sample(0.0)["opacity"] == NumberValue(0.2)
        assert sequence.sample(0.1)["opacity"] == NumberValue(0.2)
        assert sequence.sample(1.0)["opacity"] == NumberValue(0.8)

    def test_time_is_clamped(self):
        sequence = _linear_fade()

        assert sequence.sample(-1.0)["opacity"] == NumberValue(0.0)
        assert sequence.sample(2.0)["opacity"] == NumberValue(1.0)

    def test_empty_sequence_samples_nothing(self):
        assert KeyframeSequence().sample(0.5) == {}

    def test_one_sided_property_is_held(self):
        sequence = (
            keyframes(100)
            .with_default_easing(EasingFunction.linear())
            .at(0.0).opacity(0.0).color(255, 0, 0).finish()
            .at(1.0).opacity(1.0).finish()
        )

        values = sequence.sample(0.5)

        assert values["color"] == ColorValue(Color(255, 0, 0))
        assert values["opacity"] == NumberValue(0.5)

    def test_uninterpolatable_pair_is_omitted(self):
        sequence = (
            keyframes(100)
            .at(0.0).string("label", "a").opacity(0.0).finish()
            .at(1.0).string("label", "b").opacity(1.0).finish()
        )

        assert "label" not in sequence.sample(0.5)
        assert sequence.sample(1.0)["label"] == StringValue("b")

    def test_segment_easing_comes_from_ending_keyframe(self):
        sequence = (
            keyframes(100)
            .with_default_easing(EasingFunction.linear())
            .at(0.0).opacity(0.0).finish()
            .at(0.5).opacity(0.5).finish()
            .at(1.0).opacity(1.0).easing(EasingFunction.ease_in()).finish()
        )

        assert sequence.sample(0.25)["opacity"].value == pytest.approx(0.25)
        # local t 0.5 through ease_in → 0.25 of the second segment
        assert sequence.sample(0.75)["opacity"].value == pytest.approx(0.625)

    def test_colors_interpolate(self):
        sequence = (
            keyframes(100)
            .with_default_easing(EasingFunction.linear())
            .at(0.0).color(255, 0, 0).finish()
            .at(1.0).color(0, 0, 255).finish()
        )

        assert sequence.sample(0.5)["color"] == ColorValue(Color(127, 0, 127))

    def test_sampling_does_not_mutate(self):
        sequence = _linear_fade()
        before = [(kf.offset, dict(kf.properties)) for kf in sequence.keyframes]

        sequence.sample(0.4)
        sequence.sample(0.9)

        assert [(kf.offset, dict(kf.properties)) for kf in sequence.keyframes] == before


class TestKeyframeValidation:
    """Structural invariants."""

    def test_empty_sequence_is_invalid(self):
        with pytest.raises(KeyframeValidationError) as info:
            KeyframeSequence().validate()

        assert info.value.reason is ValidationFailure.EMPTY

    def test_clamped_offsets_are_valid(self):
        sequence = KeyframeSequence()
        sequence.add_keyframe(Keyframe(1.5).opacity(1.0))

        sequence.validate()
        assert sequence.is_valid()

    def test_nan_offset_is_out_of_range(self):
        sequence = KeyframeSequence()
        sequence.add_keyframe(Keyframe(0.0))
        sequence.add_keyframe(Keyframe(float("nan")))

        with pytest.raises(KeyframeValidationError) as info:
            sequence.validate()

        assert info.value.reason is ValidationFailure.OFFSET_OUT_OF_RANGE
        assert not sequence.is_valid()

    def test_unsorted_keyframes(self):
        sequence = KeyframeSequence(keyframes=[Keyframe(0.8), Keyframe(0.2)])

        with pytest.raises(KeyframeValidationError) as info:
            sequence.validate()

        assert info.value.reason is ValidationFailure.UNSORTED

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            KeyframeSequence().validate()


class TestConvenienceSequences:
    """Prebuilt sequences."""

    def test_fade_in(self):
        sequence = fade_in(300)

        assert sequence.duration_ms == 300
        assert sequence.sample(0.0)["opacity"] == NumberValue(0.0)
        assert sequence.sample(1.0)["opacity"] == NumberValue(1.0)

    def test_slide_in_from_left(self):
        sequence = slide_in_from_left(200, 40)

        assert sequence.sample(0.0)["transform"] == TransformValue(TransformMatrix.translate(x=-40))
        assert sequence.sample(1.0)["transform"] == TransformValue(TransformMatrix.identity())

    def test_bounce_in_and_pulse_are_valid(self):
        assert bounce_in(500).is_valid()
        assert pulse(500).is_valid()
        assert pulse(500).sample(0.5)["scale"] == CssValue.number(1.1)
