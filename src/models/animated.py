"""
Animated properties and values for the single-property driver.

An AnimatedProperty describes WHAT an Animation interpolates (from → to),
an AnimatedValue is the interpolated result at one moment:

✔ OpacityProperty    → OpacityValue
✔ PositionProperty   → PositionValue   (integer cells, truncated)
✔ SizeProperty       → SizeValue       (non-negative integer cells, truncated)
✔ ColorProperty      → ColorValue      (shared with keyframe values)
✔ TransformProperty  → TransformUpdate (named CSS transform + resulting matrix)
✔ CustomProperty     → CustomValue     (any named float)
✔ CssProperty        → CssUpdate       (unit-tagged value)
✔ KeyframesProperty  → KeyframesUpdate (sampled property map)
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Tuple, Union

from models.color import Color
from models.css import CssValue
from models.enums import PropertyKind, TransformOp
from models.keyframe_value import ColorValue, KeyframeValue
from models.transform import TransformMatrix

if TYPE_CHECKING:
    from animations.keyframes import KeyframeSequence


def _lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


# =====================================================================
# Properties (driver input)
# =====================================================================

@dataclass(frozen=True)
class OpacityProperty:
    from_value: float
    to_value: float


@dataclass(frozen=True)
class PositionProperty:
    from_x: int
    from_y: int
    to_x: int
    to_y: int


@dataclass(frozen=True)
class SizeProperty:
    from_width: int
    from_height: int
    to_width: int
    to_height: int


@dataclass(frozen=True)
class ColorProperty:
    from_color: Color
    to_color: Color


# TRANSLATE carries (x, y) pairs, MATRIX carries matrices, the rest plain floats
TransformOperand = Union[float, Tuple[float, float], TransformMatrix]


@dataclass(frozen=True)
class TransformProperty:
    op: TransformOp
    from_value: TransformOperand
    to_value: TransformOperand


@dataclass(frozen=True)
class CustomProperty:
    name: str
    from_value: float
    to_value: float


@dataclass(frozen=True)
class CssProperty:
    name: str
    from_value: CssValue
    to_value: CssValue


@dataclass(frozen=True)
class KeyframesProperty:
    sequence: 'KeyframeSequence'


AnimatedProperty = Union[
    OpacityProperty,
    PositionProperty,
    SizeProperty,
    ColorProperty,
    TransformProperty,
    CustomProperty,
    CssProperty,
    KeyframesProperty,
]


# =====================================================================
# Values (driver output)
# =====================================================================

@dataclass(frozen=True)
class OpacityValue:
    value: float


@dataclass(frozen=True)
class PositionValue:
    x: int
    y: int


@dataclass(frozen=True)
class SizeValue:
    width: int
    height: int


@dataclass(frozen=True)
class TransformUpdate:
    """
    Named transform result

    scalar is the interpolated operand for single-value ops
    (translateX, scale, rotate, ...) and None for translate/matrix.
    """

    op: TransformOp
    matrix: TransformMatrix
    scalar: Optional[float] = None


@dataclass(frozen=True)
class CustomValue:
    name: str
    value: float


@dataclass(frozen=True)
class CssUpdate:
    name: str
    css: CssValue


@dataclass(frozen=True)
class KeyframesUpdate:
    values: Dict[str, KeyframeValue] = field(default_factory=dict)


AnimatedValue = Union[
    OpacityValue,
    PositionValue,
    SizeValue,
    ColorValue,
    TransformUpdate,
    CustomValue,
    CssUpdate,
    KeyframesUpdate,
]


# =====================================================================
# Classification
# =====================================================================

def property_kind(prop: AnimatedProperty) -> PropertyKind:
    """Classification tag used for batching"""
    if isinstance(prop, OpacityProperty):
        return PropertyKind.OPACITY
    if isinstance(prop, PositionProperty):
        return PropertyKind.POSITION
    if isinstance(prop, SizeProperty):
        return PropertyKind.SIZE
    if isinstance(prop, ColorProperty):
        return PropertyKind.COLOR
    if isinstance(prop, TransformProperty):
        return PropertyKind.TRANSFORM
    if isinstance(prop, (CustomProperty, CssProperty, KeyframesProperty)):
        return PropertyKind.CUSTOM
    raise TypeError(f"Unsupported animated property: {type(prop).__name__}")


# =====================================================================
# Interpolation
# =====================================================================

def _transform_matrix(op: TransformOp, value: TransformOperand) -> TransformMatrix:
    """Matrix for one transform op at an already-interpolated operand"""
    if op is TransformOp.TRANSLATE_X:
        return TransformMatrix.translate(x=value)
    if op is TransformOp.TRANSLATE_Y:
        return TransformMatrix.translate(y=value)
    if op is TransformOp.TRANSLATE:
        return TransformMatrix.translate(*value)
    if op is TransformOp.SCALE_X:
        return TransformMatrix(a=value)
    if op is TransformOp.SCALE_Y:
        return TransformMatrix(d=value)
    if op is TransformOp.SCALE:
        return TransformMatrix.scale(value)
    if op is TransformOp.ROTATE:
        return TransformMatrix.rotate(value)
    if op is TransformOp.SKEW_X:
        return TransformMatrix.skew(x_degrees=value)
    if op is TransformOp.SKEW_Y:
        return TransformMatrix.skew(y_degrees=value)
    if op is TransformOp.MATRIX:
        return value
    raise ValueError(f"Unknown transform op: {op}")


def _interpolate_transform(prop: TransformProperty, t: float) -> TransformUpdate:
    if prop.op is TransformOp.MATRIX:
        return TransformUpdate(prop.op, prop.from_value.lerp(prop.to_value, t))

    if prop.op is TransformOp.TRANSLATE:
        (fx, fy), (tx, ty) = prop.from_value, prop.to_value
        point = (_lerp(fx, tx, t), _lerp(fy, ty, t))
        return TransformUpdate(prop.op, _transform_matrix(prop.op, point))

    scalar = _lerp(prop.from_value, prop.to_value, t)
    return TransformUpdate(prop.op, _transform_matrix(prop.op, scalar), scalar)


def interpolate_property(prop: AnimatedProperty, t: float) -> AnimatedValue:
    """
    Value of `prop` at eased progress t

    Args:
        prop: Property being animated
        t: Eased progress (may leave 0-1 for overshooting curves)
    """
    if isinstance(prop, OpacityProperty):
        return OpacityValue(_lerp(prop.from_value, prop.to_value, t))

    if isinstance(prop, PositionProperty):
        return PositionValue(
            int(_lerp(prop.from_x, prop.to_x, t)),
            int(_lerp(prop.from_y, prop.to_y, t)),
        )

    if isinstance(prop, SizeProperty):
        return SizeValue(
            max(0, int(_lerp(prop.from_width, prop.to_width, t))),
            max(0, int(_lerp(prop.from_height, prop.to_height, t))),
        )

    if isinstance(prop, ColorProperty):
        return ColorValue(prop.from_color.lerp(prop.to_color, t))

    if isinstance(prop, TransformProperty):
        return _interpolate_transform(prop, t)

    if isinstance(prop, CustomProperty):
        return CustomValue(prop.name, _lerp(prop.from_value, prop.to_value, t))

    if isinstance(prop, CssProperty):
        css = prop.from_value.interpolate(prop.to_value, t)
        # Incompatible units hold the starting value
        return CssUpdate(prop.name, css if css is not None else prop.from_value)

    if isinstance(prop, KeyframesProperty):
        return KeyframesUpdate(prop.sequence.sample(t))

    raise TypeError(f"Unsupported animated property: {type(prop).__name__}")


def interpolate_animated_values(start: AnimatedValue, end: AnimatedValue, t: float) -> AnimatedValue:
    """
    Generic interpolation between two driver values

    Same-variant pairs interpolate field by field; positions and sizes
    add the truncated delta to the start cell. Any other pair yields
    `start` unchanged.
    """
    if isinstance(start, OpacityValue) and isinstance(end, OpacityValue):
        return OpacityValue(_lerp(start.value, end.value, t))

    if isinstance(start, PositionValue) and isinstance(end, PositionValue):
        return PositionValue(
            start.x + int((end.x - start.x) * t),
            start.y + int((end.y - start.y) * t),
        )

    if isinstance(start, SizeValue) and isinstance(end, SizeValue):
        return SizeValue(
            max(0, start.width + int((end.width - start.width) * t)),
            max(0, start.height + int((end.height - start.height) * t)),
        )

    if isinstance(start, ColorValue) and isinstance(end, ColorValue):
        return ColorValue(start.color.lerp(end.color, t))

    if isinstance(start, TransformUpdate) and isinstance(end, TransformUpdate) and start.op is end.op:
        scalar = None
        if start.scalar is not None and end.scalar is not None:
            scalar = _lerp(start.scalar, end.scalar, t)
        return TransformUpdate(start.op, start.matrix.lerp(end.matrix, t), scalar)

    if isinstance(start, CustomValue) and isinstance(end, CustomValue) and start.name == end.name:
        return CustomValue(start.name, _lerp(start.value, end.value, t))

    if isinstance(start, CssUpdate) and isinstance(end, CssUpdate) and start.name == end.name:
        css = start.css.interpolate(end.css, t)
        if css is not None:
            return CssUpdate(start.name, css)

    return start
