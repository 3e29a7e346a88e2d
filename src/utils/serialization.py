"""
Serialization utilities - enum and model conversion for YAML/JSON data

Provides bidirectional conversion between:
- Enums ↔ Strings (EasingKind, OptimizationLevel, CssUnit, LogLevel, etc.)
- Engine models ↔ Dicts (EasingFunction, KeyframeValue, KeyframeSequence, Color)

Used by ConfigManager to read named keyframe sequences from config files,
and by anything that needs to dump a sequence back to plain data.

Keyframe value formats:
    0.5                                        → NumberValue (bare number)
    true                                       → BooleanValue (bare bool)
    "hidden"                                   → StringValue (bare string)
    {type: number, value: 0.5}
    {type: color, value: "#ff000080"}          (or [r, g, b] / [r, g, b, a])
    {type: transform, value: [a, b, c, d, e, f]}
    {type: css, unit: PIXELS, value: 12}
    {type: string, value: "hidden"}
    {type: boolean, value: true}
    {type: multiple, values: [...]}
"""

from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from animations.easing import EasingFunction
from animations.keyframes import Keyframe, KeyframeSequence
from animations.spring import SPRING_PRESETS, SpringConfig
from models.color import Color
from models.css import CssValue
from models.enums import CssUnit, EasingKind, LogCategory
from models.keyframe_value import (
    BooleanValue,
    ColorValue,
    KeyframeValue,
    MultipleValue,
    NumberValue,
    StringValue,
    TransformValue,
)
from models.transform import TransformMatrix
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.GENERAL)

T = TypeVar('T', bound=Enum)

# Parametric kinds go through their named constructors, which check arity and coerce types
_PARAMETRIC_EASINGS = {
    EasingKind.CUBIC_BEZIER: EasingFunction.cubic_bezier,
    EasingKind.STEPS: EasingFunction.steps,
    EasingKind.IRREGULAR: EasingFunction.irregular,
    EasingKind.IN_POWER: EasingFunction.power_in,
    EasingKind.OUT_POWER: EasingFunction.power_out,
    EasingKind.IN_OUT_POWER: EasingFunction.power_in_out,
    EasingKind.IN_BACK: EasingFunction.back_in,
    EasingKind.OUT_BACK: EasingFunction.back_out,
    EasingKind.IN_OUT_BACK: EasingFunction.back_in_out,
    EasingKind.IN_ELASTIC: EasingFunction.elastic_in,
    EasingKind.OUT_ELASTIC: EasingFunction.elastic_out,
    EasingKind.IN_OUT_ELASTIC: EasingFunction.elastic_in_out,
}


class Serializer:
    """Central enum and model serialization for config data"""

    # --- enums ---

    @staticmethod
    def enum_to_str(member: Optional[Enum]) -> Optional[str]:
        return None if member is None else member.name

    @staticmethod
    def str_to_enum(name: str, enum_type: Type[T]) -> T:
        """Look up an enum member by name (ValueError lists the accepted names)"""
        if name in enum_type.__members__:
            return enum_type.__members__[name]
        accepted = ", ".join(enum_type.__members__)
        raise ValueError(f"{name!r} is not a {enum_type.__name__} (expected one of: {accepted})")

    # --- colors ---

    @staticmethod
    def color_to_hex(color: Color) -> str:
        return color.to_hex()

    @staticmethod
    def color_from_value(value: Any) -> Color:
        """
        Parse a color from config data

        Accepts "#rrggbb" / "#rrggbbaa" / "#rgb" strings, [r, g, b] / [r, g, b, a]
        lists, or {r, g, b, a} dicts.
        """
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return Color.from_hex(value)
        if isinstance(value, (list, tuple)) and len(value) in (3, 4):
            return Color.from_rgb(*value)
        if isinstance(value, dict):
            try:
                return Color.from_rgb(value["r"], value["g"], value["b"], value.get("a", 255))
            except KeyError as e:
                raise ValueError(f"Color dict missing channel: {e}")
        raise ValueError(f"Unsupported color value: {value!r}")

    # --- easings ---

    @staticmethod
    def easing_to_dict(easing: EasingFunction) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": easing.kind.name}
        if easing.params:
            result["params"] = list(easing.params)
        if easing.spring is not None:
            spring = easing.spring
            result["spring"] = {
                "mass": spring.mass,
                "stiffness": spring.stiffness,
                "damping": spring.damping,
                "velocity": spring.velocity,
                "precision": spring.precision,
            }
        return result

    @staticmethod
    def easing_from_dict(data: Any) -> EasingFunction:
        """
        Parse an easing from config data

        Accepts a bare kind name ("EASE_OUT") or a dict:
            {kind: CUBIC_BEZIER, params: [0.25, 0.1, 0.25, 1.0]}
            {kind: SPRING, preset: wobbly}
            {kind: SPRING, spring: {mass: 1, stiffness: 180, damping: 12}}
        """
        if isinstance(data, str):
            return EasingFunction.of(Serializer.str_to_enum(data, EasingKind))

        if not isinstance(data, dict) or "kind" not in data:
            raise ValueError(f"Unsupported easing value: {data!r}")

        kind = Serializer.str_to_enum(data["kind"], EasingKind)

        if kind is EasingKind.SPRING:
            if "preset" in data:
                preset = SPRING_PRESETS.get(data["preset"])
                if preset is None:
                    raise ValueError(f"Unknown spring preset: {data['preset']}")
                return EasingFunction.spring_config(preset())
            spring = data.get("spring") or {}
            if not isinstance(spring, dict):
                raise ValueError(f"Spring parameters must be a mapping, got {spring!r}")
            return EasingFunction.spring_config(SpringConfig(**{name: float(value) for name, value in spring.items()}))

        params = data.get("params", [])
        if not isinstance(params, (list, tuple)):
            raise ValueError(f"Easing params must be a list, got {params!r}")

        if kind is EasingKind.LINEAR_POINTS:
            return EasingFunction.linear_points(params)

        constructor = _PARAMETRIC_EASINGS.get(kind)
        if constructor is None:
            if params:
                raise ValueError(f"Easing {kind.name} takes no params")
            return EasingFunction.of(kind)
        return constructor(*params)

    # --- keyframe values ---

    @staticmethod
    def keyframe_value_to_dict(value: KeyframeValue) -> Dict[str, Any]:
        if isinstance(value, NumberValue):
            return {"type": "number", "value": value.value}
        if isinstance(value, ColorValue):
            return {"type": "color", "value": value.color.to_hex()}
        if isinstance(value, TransformValue):
            return {"type": "transform", "value": list(value.matrix.components())}
        if isinstance(value, CssValue):
            payload = value.value.to_hex() if isinstance(value.value, Color) else value.value
            return {"type": "css", "unit": value.unit.name, "value": payload}
        if isinstance(value, StringValue):
            return {"type": "string", "value": value.value}
        if isinstance(value, BooleanValue):
            return {"type": "boolean", "value": value.value}
        if isinstance(value, MultipleValue):
            return {"type": "multiple", "values": [Serializer.keyframe_value_to_dict(v) for v in value.values]}
        raise ValueError(f"Unsupported keyframe value: {type(value).__name__}")

    @staticmethod
    def keyframe_value_from_dict(data: Any) -> KeyframeValue:
        # bool is checked first: it is also an int
        if isinstance(data, bool):
            return BooleanValue(data)
        if isinstance(data, (int, float)):
            return NumberValue(float(data))
        if isinstance(data, str):
            return StringValue(data)
        if not isinstance(data, dict) or "type" not in data:
            raise ValueError(f"Unsupported keyframe value: {data!r}")

        value_type = data["type"]
        try:
            if value_type == "number":
                return NumberValue(float(data["value"]))
            if value_type == "color":
                return ColorValue(Serializer.color_from_value(data["value"]))
            if value_type == "transform":
                return TransformValue(TransformMatrix(*(float(v) for v in data["value"])))
            if value_type == "css":
                return Serializer._css_from_dict(data)
            if value_type == "string":
                return StringValue(str(data["value"]))
            if value_type == "boolean":
                return BooleanValue(bool(data["value"]))
            if value_type == "multiple":
                return MultipleValue(tuple(Serializer.keyframe_value_from_dict(v) for v in data["values"]))
        except (KeyError, TypeError) as e:
            log.error(f"Failed to deserialize keyframe value: {e}", value_type=value_type)
            raise ValueError(f"Keyframe value of type '{value_type}' is malformed: {e}")

        raise ValueError(f"Unknown keyframe value type: {value_type}")

    @staticmethod
    def _css_from_dict(data: Dict[str, Any]) -> CssValue:
        unit = Serializer.str_to_enum(data["unit"], CssUnit)
        if unit is CssUnit.COLOR:
            return CssValue(unit, Serializer.color_from_value(data["value"]))
        if unit is CssUnit.STRING:
            return CssValue(unit, str(data["value"]))
        return CssValue(unit, float(data["value"]))

    # --- sequences ---

    @staticmethod
    def sequence_to_dict(sequence: KeyframeSequence) -> Dict[str, Any]:
        keyframes = []
        for keyframe in sequence.keyframes:
            entry: Dict[str, Any] = {
                "offset": keyframe.offset,
                "properties": {
                    name: Serializer.keyframe_value_to_dict(value)
                    for name, value in keyframe.properties.items()
                },
            }
            if keyframe.easing is not None:
                entry["easing"] = Serializer.easing_to_dict(keyframe.easing)
            keyframes.append(entry)

        return {
            "duration_ms": sequence.duration_ms,
            "easing": Serializer.easing_to_dict(sequence.default_easing),
            "keyframes": keyframes,
        }

    @staticmethod
    def sequence_from_dict(data: Dict[str, Any]) -> KeyframeSequence:
        """
        Build a keyframe sequence from config data

        Raises:
            ValueError: Missing fields or unsupported values
        """
        if not isinstance(data, dict):
            raise ValueError(f"Sequence must be a mapping, got {type(data).__name__}")

        sequence = KeyframeSequence(duration_ms=int(data.get("duration_ms", 0)))
        if "easing" in data:
            sequence.with_default_easing(Serializer.easing_from_dict(data["easing"]))

        for entry in data.get("keyframes", []):
            if "offset" not in entry:
                raise ValueError("Keyframe entry missing 'offset'")

            keyframe = Keyframe(float(entry["offset"]))
            for name, raw in (entry.get("properties") or {}).items():
                value = Serializer.keyframe_value_from_dict(raw)
                if name == "opacity" and isinstance(value, NumberValue):
                    keyframe.opacity(value.value)
                else:
                    keyframe.set_property(name, value)
            if "easing" in entry:
                keyframe.with_easing(Serializer.easing_from_dict(entry["easing"]))

            sequence.add_keyframe(keyframe)

        return sequence
