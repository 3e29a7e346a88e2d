"""
Keyframe Sequences

Multi-property animations described as keyframes on a normalized 0.0-1.0
timeline. A sequence is built once (builder chain) and sampled any number
of times; sampling never mutates the sequence.

Example:
    sequence = (
        keyframes(1000)
        .with_default_easing(EasingFunction.linear())
        .at(0.0).opacity(0.0).color(255, 0, 0).finish()
        .at(0.5).opacity(1.0).easing(EasingFunction.ease_out()).finish()
        .at(1.0).color(0, 0, 255).finish()
    )
    sequence.validate()
    values = sequence.sample(0.25)   # {"opacity": NumberValue(...), "color": ColorValue(...)}
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from animations.easing import EasingFunction
from models.color import Color
from models.css import CssValue
from models.enums import EasingKind, LogCategory, ValidationFailure
from models.keyframe_value import (
    BooleanValue,
    ColorValue,
    KeyframeValue,
    MultipleValue,
    NumberValue,
    StringValue,
    TransformValue,
    interpolate_keyframe_values,
)
from models.transform import TransformMatrix
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.KEYFRAME)


class KeyframeValidationError(ValueError):
    """Raised by KeyframeSequence.validate() when a structural invariant is broken"""

    def __init__(self, reason: ValidationFailure, message: str):
        super().__init__(message)
        self.reason = reason


def _clamp_offset(offset: float) -> float:
    # NaN is kept as-is so validate() can report it
    if math.isnan(offset):
        return offset
    return min(1.0, max(0.0, offset))


def _offset_order(keyframe: 'Keyframe') -> Tuple[bool, float]:
    """Total-order sort key: NaN offsets sort after every real offset"""
    return (math.isnan(keyframe.offset), keyframe.offset)


@dataclass
class Keyframe:
    """
    Property values at one point of the timeline

    Attributes:
        offset: Position on the timeline (clamped to 0.0-1.0)
        properties: Property name → value
        easing: Curve for the segment ENDING at this keyframe (None = sequence default)
    """

    offset: float
    properties: Dict[str, KeyframeValue] = field(default_factory=dict)
    easing: Optional[EasingFunction] = None

    def __post_init__(self):
        self.offset = _clamp_offset(float(self.offset))

    def set_property(self, name: str, value: KeyframeValue) -> 'Keyframe':
        self.properties[name] = value
        return self

    def with_easing(self, easing: EasingFunction) -> 'Keyframe':
        self.easing = easing
        return self

    def opacity(self, value: float) -> 'Keyframe':
        return self.set_property("opacity", NumberValue(min(1.0, max(0.0, value))))

    def transform(self, matrix: TransformMatrix) -> 'Keyframe':
        return self.set_property("transform", TransformValue(matrix))

    def color(self, r: int, g: int, b: int, a: int = 255) -> 'Keyframe':
        return self.set_property("color", ColorValue(Color.from_rgb(r, g, b, a)))

    def css_value(self, name: str, value: CssValue) -> 'Keyframe':
        return self.set_property(name, value)

    def number(self, name: str, value: float) -> 'Keyframe':
        return self.set_property(name, NumberValue(float(value)))

    def string(self, name: str, value: str) -> 'Keyframe':
        return self.set_property(name, StringValue(value))

    def boolean(self, name: str, value: bool) -> 'Keyframe':
        return self.set_property(name, BooleanValue(bool(value)))

    def multiple(self, name: str, values: Sequence[KeyframeValue]) -> 'Keyframe':
        return self.set_property(name, MultipleValue(tuple(values)))


@dataclass
class KeyframeSequence:
    """
    Ordered keyframes + total duration + default easing

    Invariants (checked by validate()):
    - at least one keyframe
    - every offset within 0.0-1.0
    - keyframes ascending by offset (maintained on every insertion)
    """

    keyframes: List[Keyframe] = field(default_factory=list)
    duration_ms: int = 0
    default_easing: EasingFunction = field(default_factory=EasingFunction.ease_in_out)

    @property
    def duration(self) -> float:
        """Duration in seconds"""
        return self.duration_ms / 1000.0

    def __len__(self) -> int:
        return len(self.keyframes)

    # ------------------------------------------------------------
    # Building
    # ------------------------------------------------------------

    def add_keyframe(self, keyframe: Keyframe) -> 'KeyframeSequence':
        self.keyframes.append(keyframe)
        self.keyframes.sort(key=_offset_order)
        return self

    def with_default_easing(self, easing: EasingFunction) -> 'KeyframeSequence':
        self.default_easing = easing
        return self

    def at(self, offset: float) -> 'KeyframeBuilder':
        """Start a keyframe at `offset`; commit it with .finish()"""
        return KeyframeBuilder(self, offset)

    # ------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------

    def sample(self, t: float) -> Dict[str, KeyframeValue]:
        """
        Property values at normalized time t

        Args:
            t: Timeline position, clamped to 0.0-1.0

        Returns:
            Property name → value. Properties that cannot be interpolated
            between the bracketing keyframes are omitted.
        """
        t = min(1.0, max(0.0, t))
        result: Dict[str, KeyframeValue] = {}

        from_kf, to_kf = self._find_keyframe_pair(t)
        if from_kf is None or to_kf is None:
            return result

        for name in self.get_property_names():
            value = self._interpolate_property(name, from_kf, to_kf, t)
            if value is not None:
                result[name] = value

        return result

    def _find_keyframe_pair(self, t: float) -> Tuple[Optional[Keyframe], Optional[Keyframe]]:
        """
        Bracketing keyframes for t

        from = last keyframe with offset <= t, to = first keyframe with offset > t.
        Outside the keyframe range both collapse onto the boundary keyframe.
        """
        if not self.keyframes:
            return None, None

        from_kf: Optional[Keyframe] = None
        to_kf: Optional[Keyframe] = None

        for keyframe in self.keyframes:
            if keyframe.offset <= t:
                from_kf = keyframe
            if keyframe.offset > t:
                to_kf = keyframe
                break

        if from_kf is None:
            # before the first keyframe
            first = self.keyframes[0]
            return first, first

        if to_kf is None:
            to_kf = from_kf

        return from_kf, to_kf

    def _interpolate_property(
        self,
        name: str,
        from_kf: Keyframe,
        to_kf: Keyframe,
        t: float,
    ) -> Optional[KeyframeValue]:
        if from_kf is to_kf or from_kf.offset == to_kf.offset:
            return from_kf.properties.get(name)

        from_value = from_kf.properties.get(name)
        to_value = to_kf.properties.get(name)

        if from_value is not None and to_value is not None:
            local_t = (t - from_kf.offset) / (to_kf.offset - from_kf.offset)
            local_t = min(1.0, max(0.0, local_t))

            easing = to_kf.easing or self.default_easing
            return interpolate_keyframe_values(from_value, to_value, easing.apply(local_t))

        # Held constant when only one side defines it
        return from_value if from_value is not None else to_value

    # ------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------

    def get_property_names(self) -> List[str]:
        """Unique property names in order of first appearance"""
        names: Dict[str, None] = {}
        for keyframe in self.keyframes:
            for name in keyframe.properties:
                names.setdefault(name, None)
        return list(names)

    def validate(self) -> None:
        """
        Check structural invariants

        Raises:
            KeyframeValidationError: empty sequence, offset out of range, or unsorted keyframes
        """
        if not self.keyframes:
            raise KeyframeValidationError(
                ValidationFailure.EMPTY,
                "Keyframe sequence must have at least one keyframe",
            )

        for keyframe in self.keyframes:
            if not (0.0 <= keyframe.offset <= 1.0):
                raise KeyframeValidationError(
                    ValidationFailure.OFFSET_OUT_OF_RANGE,
                    f"Keyframe offset {keyframe.offset} is out of range [0.0, 1.0]",
                )

        for previous, current in zip(self.keyframes, self.keyframes[1:]):
            if previous.offset > current.offset:
                raise KeyframeValidationError(
                    ValidationFailure.UNSORTED,
                    "Keyframes are not sorted by offset",
                )

    def is_valid(self) -> bool:
        try:
            self.validate()
        except KeyframeValidationError as e:
            log.debug("Keyframe sequence invalid", reason=e.reason.name, error=str(e))
            return False
        return True


class KeyframeBuilder:
    """
    In-progress keyframe bound to its sequence

    Setters return the builder; finish() commits the keyframe (re-sorting
    the sequence) and hands the sequence back for further chaining.
    """

    def __init__(self, sequence: KeyframeSequence, offset: float):
        self._sequence = sequence
        self._keyframe = Keyframe(offset)

    def opacity(self, value: float) -> 'KeyframeBuilder':
        self._keyframe.opacity(value)
        return self

    def transform(self, matrix: TransformMatrix) -> 'KeyframeBuilder':
        self._keyframe.transform(matrix)
        return self

    def color(self, r: int, g: int, b: int, a: int = 255) -> 'KeyframeBuilder':
        self._keyframe.color(r, g, b, a)
        return self

    def css_value(self, name: str, value: CssValue) -> 'KeyframeBuilder':
        self._keyframe.css_value(name, value)
        return self

    def number(self, name: str, value: float) -> 'KeyframeBuilder':
        self._keyframe.number(name, value)
        return self

    def string(self, name: str, value: str) -> 'KeyframeBuilder':
        self._keyframe.string(name, value)
        return self

    def boolean(self, name: str, value: bool) -> 'KeyframeBuilder':
        self._keyframe.boolean(name, value)
        return self

    def multiple(self, name: str, values: Sequence[KeyframeValue]) -> 'KeyframeBuilder':
        self._keyframe.multiple(name, values)
        return self

    def easing(self, easing: EasingFunction) -> 'KeyframeBuilder':
        self._keyframe.with_easing(easing)
        return self

    def finish(self) -> KeyframeSequence:
        return self._sequence.add_keyframe(self._keyframe)


# ============================================================
# Convenience sequences
# ============================================================

def keyframes(duration_ms: int) -> KeyframeSequence:
    """Empty sequence with the given duration"""
    return KeyframeSequence(duration_ms=duration_ms)


def fade_in(duration_ms: int) -> KeyframeSequence:
    return (
        keyframes(duration_ms)
        .at(0.0).opacity(0.0).finish()
        .at(1.0).opacity(1.0).finish()
    )


def fade_out(duration_ms: int) -> KeyframeSequence:
    return (
        keyframes(duration_ms)
        .at(0.0).opacity(1.0).finish()
        .at(1.0).opacity(0.0).finish()
    )


def slide_in_from_left(duration_ms: int, distance: float) -> KeyframeSequence:
    return (
        keyframes(duration_ms)
        .at(0.0).transform(TransformMatrix.translate(x=-distance)).finish()
        .at(1.0).transform(TransformMatrix.identity()).finish()
    )


def bounce_in(duration_ms: int) -> KeyframeSequence:
    return (
        keyframes(duration_ms)
        .at(0.0).opacity(0.0).css_value("scale", CssValue.number(0.3)).easing(EasingFunction.ease_out()).finish()
        .at(0.5).opacity(1.0).css_value("scale", CssValue.number(1.05)).finish()
        .at(0.7).css_value("scale", CssValue.number(0.9)).finish()
        .at(1.0).opacity(1.0).css_value("scale", CssValue.number(1.0)).easing(EasingFunction.of(EasingKind.BOUNCE)).finish()
    )


def pulse(duration_ms: int) -> KeyframeSequence:
    return (
        keyframes(duration_ms)
        .at(0.0).css_value("scale", CssValue.number(1.0)).finish()
        .at(0.5).css_value("scale", CssValue.number(1.1)).finish()
        .at(1.0).css_value("scale", CssValue.number(1.0)).finish()
    )
