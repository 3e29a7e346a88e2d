"""
Keyframe values - typed property values stored in keyframes

Closed set of variants, each a frozen dataclass:

✔ NumberValue    - plain float
✔ ColorValue     - RGBA color (0-255 channels)
✔ TransformValue - 6-component affine matrix
✔ CssValue       - unit-tagged value (see models.css)
✔ StringValue    - never interpolates
✔ BooleanValue   - never interpolates
✔ MultipleValue  - ordered list of keyframe values

Interpolation is defined only between two values of the same variant
(and for CssValue, the same unit). Anything else yields None.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from models.color import Color
from models.css import CssValue
from models.transform import TransformMatrix


@dataclass(frozen=True)
class NumberValue:
    value: float


@dataclass(frozen=True)
class ColorValue:
    color: Color

    @classmethod
    def rgba(cls, r: int, g: int, b: int, a: int = 255) -> 'ColorValue':
        return cls(Color.from_rgb(r, g, b, a))


@dataclass(frozen=True)
class TransformValue:
    matrix: TransformMatrix


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class MultipleValue:
    values: Tuple['KeyframeValue', ...]


KeyframeValue = Union[
    NumberValue,
    ColorValue,
    TransformValue,
    CssValue,
    StringValue,
    BooleanValue,
    MultipleValue,
]


def interpolate_keyframe_values(
    start: KeyframeValue,
    end: KeyframeValue,
    t: float,
) -> Optional[KeyframeValue]:
    """
    Interpolate between two keyframe values

    Args:
        start: Value at the segment start
        end: Value at the segment end
        t: Eased local progress (may overshoot [0, 1] for back/elastic curves)

    Returns:
        Interpolated value, or None when the pair cannot be interpolated
        (different variants, different CSS units, strings, booleans,
        lists of different length)
    """
    if isinstance(start, NumberValue):
        if isinstance(end, NumberValue):
            return NumberValue(start.value + (end.value - start.value) * t)
        return None

    if isinstance(start, ColorValue):
        if isinstance(end, ColorValue):
            return ColorValue(start.color.lerp(end.color, t))
        return None

    if isinstance(start, TransformValue):
        if isinstance(end, TransformValue):
            return TransformValue(start.matrix.lerp(end.matrix, t))
        return None

    if isinstance(start, CssValue):
        if isinstance(end, CssValue):
            return start.interpolate(end, t)
        return None

    if isinstance(start, MultipleValue):
        if isinstance(end, MultipleValue) and len(start.values) == len(end.values):
            items = []
            for item_from, item_to in zip(start.values, end.values):
                item = interpolate_keyframe_values(item_from, item_to, t)
                if item is None:
                    return None
                items.append(item)
            return MultipleValue(tuple(items))
        return None

    if isinstance(start, (StringValue, BooleanValue)):
        return None

    raise TypeError(f"Unsupported keyframe value type: {type(start).__name__}")
