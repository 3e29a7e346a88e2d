"""
Tests for animated properties, values and their interpolation.
"""

import pytest

from models.animated import (
    ColorProperty,
    CssProperty,
    CssUpdate,
    CustomProperty,
    CustomValue,
    KeyframesProperty,
    OpacityProperty,
    OpacityValue,
    PositionProperty,
    PositionValue,
    SizeProperty,
    SizeValue,
    TransformProperty,
    TransformUpdate,
    interpolate_animated_values,
    interpolate_property,
    property_kind,
)
from models.color import Color
from models.css import CssValue
from models.enums import PropertyKind, TransformOp
from models.keyframe_value import ColorValue
from models.transform import TransformMatrix
from animations.keyframes import KeyframeSequence


class TestPropertyKind:
    """Classification tags used for batching."""

    def test_kinds(self):
        assert property_kind(OpacityProperty(0, 1)) is PropertyKind.OPACITY
        assert property_kind(PositionProperty(0, 0, 1, 1)) is PropertyKind.POSITION
        assert property_kind(SizeProperty(0, 0, 1, 1)) is PropertyKind.SIZE
        assert property_kind(ColorProperty(Color(), Color())) is PropertyKind.COLOR
        assert property_kind(TransformProperty(TransformOp.SCALE, 1.0, 2.0)) is PropertyKind.TRANSFORM

    def test_custom_css_and_keyframes_are_custom(self):
        assert property_kind(CustomProperty("x", 0, 1)) is PropertyKind.CUSTOM
        assert property_kind(CssProperty("left", CssValue.pixels(0), CssValue.pixels(1))) is PropertyKind.CUSTOM
        assert property_kind(KeyframesProperty(KeyframeSequence())) is PropertyKind.CUSTOM

    def test_unknown_property_raises(self):
        with pytest.raises(TypeError):
            property_kind("opacity")


class TestInterpolateProperty:
    """Driver-side interpolation of a property at eased progress."""

    def test_opacity(self):
        assert interpolate_property(OpacityProperty(0.0, 1.0), 0.25) == OpacityValue(0.25)

    def test_position_truncates(self):
        value = interpolate_property(PositionProperty(0, 3, 10, 3), 0.55)

        assert value == PositionValue(5, 3)

    def test_size_never_negative(self):
        value = interpolate_property(SizeProperty(10, 10, 0, 0), 1.5)

        assert value == SizeValue(0, 0)

    def test_color(self):
        value = interpolate_property(ColorProperty(Color(255, 0, 0), Color(0, 255, 0)), 0.5)

        assert value == ColorValue(Color(127, 127, 0))

    def test_scalar_transform_keeps_scalar(self):
        value = interpolate_property(TransformProperty(TransformOp.TRANSLATE_X, 0.0, 10.0), 0.5)

        assert isinstance(value, TransformUpdate)
        assert value.scalar == 5.0
        assert value.matrix == TransformMatrix.translate(x=5.0)

    def test_translate_pair(self):
        value = interpolate_property(TransformProperty(TransformOp.TRANSLATE, (0.0, 0.0), (10.0, 20.0)), 0.5)

        assert value.scalar is None
        assert (value.matrix.e, value.matrix.f) == (5.0, 10.0)

    def test_matrix(self):
        value = interpolate_property(
            TransformProperty(TransformOp.MATRIX, TransformMatrix.identity(), TransformMatrix.scale(3)),
            0.5,
        )

        assert value.scalar is None
        assert value.matrix.a == 2.0

    def test_custom(self):
        assert interpolate_property(CustomProperty("glow", 0.0, 4.0), 0.5) == CustomValue("glow", 2.0)

    def test_css_mismatched_units_hold_start(self):
        prop = CssProperty("left", CssValue.pixels(4), CssValue.percentage(50))

        assert interpolate_property(prop, 0.7) == CssUpdate("left", CssValue.pixels(4))


class TestInterpolateAnimatedValues:
    """Generic value-to-value interpolation used by the cache."""

    def test_opacity(self):
        result = interpolate_animated_values(OpacityValue(0.0), OpacityValue(0.5), 0.5)

        assert result == OpacityValue(0.25)

    def test_position_adds_truncated_delta(self):
        result = interpolate_animated_values(PositionValue(1, 1), PositionValue(11, 4), 0.55)

        assert result == PositionValue(6, 2)

    def test_mismatched_variants_return_start(self):
        start = OpacityValue(0.3)

        assert interpolate_animated_values(start, PositionValue(1, 1), 0.5) is start

    def test_custom_name_mismatch_returns_start(self):
        start = CustomValue("a", 0.0)

        assert interpolate_animated_values(start, CustomValue("b", 1.0), 0.5) is start

    def test_css_incompatible_returns_start(self):
        start = CssUpdate("left", CssValue.pixels(0))

        assert interpolate_animated_values(start, CssUpdate("left", CssValue.em(1)), 0.5) is start
