"""
Easing Library

Maps normalized progress t (0.0-1.0) to eased progress.

Two layers:
- plain curve functions (ease_linear, ease_in_quad, ...) usable directly
- EasingFunction: immutable, hashable tagged value naming a curve and its
  parameters. Comparable with ==, so caches can check "same easing".

Spring easing is backed by animations.spring.SpringConfig.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from animations.spring import SpringConfig
from models.enums import EasingKind

# Horizon used when a spring never settles (undamped)
UNSETTLED_SPRING_HORIZON_S = 10.0

# Smallest elastic period; 0 would divide by zero
MIN_ELASTIC_PERIOD = 0.001


# --- curves (t in [0, 1]) ---

def ease_linear(t: float) -> float:
    """Linear easing (constant speed)"""
    return t


def ease_in_quad(t: float) -> float:
    """t²"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Mirror of ease_in_quad"""
    return t * (2.0 - t)


def ease_in_out_quad(t: float) -> float:
    """ease_in_quad for the first half, ease_out_quad for the second"""
    return 2.0 * t * t if t < 0.5 else -1.0 + (4.0 - 2.0 * t) * t


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_in_quart(t: float) -> float:
    return t ** 4


def ease_in_quint(t: float) -> float:
    return t ** 5


def ease_bounce(t: float) -> float:
    """Bounce at the end (ball dropping on the target)"""
    if t < 1.0 / 2.75:
        return 7.5625 * t * t
    if t < 2.0 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


def ease_elastic(t: float) -> float:
    if t == 0.0 or t == 1.0:
        return t
    p = 0.3
    s = p / 4.0
    return -(2.0 ** (10.0 * (t - 1.0))) * math.sin((t - 1.0 - s) * (2.0 * math.pi) / p)


def ease_back(t: float) -> float:
    c1 = 1.70158
    c3 = c1 + 1.0
    return c3 * t * t * t - c1 * t * t


def ease_expo(t: float) -> float:
    return 0.0 if t == 0.0 else 2.0 ** (10.0 * (t - 1.0))


def ease_circ(t: float) -> float:
    return 1.0 - math.sqrt(1.0 - t * t)


def ease_sine(t: float) -> float:
    return 1.0 - math.cos(t * math.pi / 2.0)


def cubic_bezier(t: float, x1: float, y1: float, x2: float, y2: float) -> float:
    """Simplified cubic bezier (y polynomial only, x control points ignored)"""
    t2 = t * t
    t3 = t2 * t
    return 3.0 * (1.0 - t) * (1.0 - t) * t * y1 + 3.0 * (1.0 - t) * t2 * y2 + t3


def steps(t: float, count: int, jump_at_start: bool) -> float:
    if count == 0:
        return 1.0 if jump_at_start else 0.0
    step_size = 1.0 / count
    if jump_at_start:
        return min(1.0, math.ceil(t * count) * step_size)
    return min(1.0, math.floor(t * count) * step_size)


def linear_points(t: float, points: Sequence[float]) -> float:
    """Piecewise-linear curve through evenly spaced control points"""
    if not points:
        return t
    if len(points) == 1:
        return points[0] * t

    segment_count = len(points) - 1
    segment_progress = t * segment_count
    index = min(int(math.floor(segment_progress)), segment_count - 1)
    local_t = segment_progress - index
    start = points[index]
    end = points[min(index + 1, len(points) - 1)]
    return start + (end - start) * local_t


def irregular(t: float, count: int, randomness: float) -> float:
    """Deterministic jittered steps"""
    if count == 0:
        return t
    step_size = 1.0 / count
    base_step = math.floor(t * count)
    step_progress = t * count - base_step

    step_hash = (int(base_step) * 2654435761) & 0xFFFFFFFF
    random_factor = ((step_hash % 1000) / 1000.0 - 0.5) * randomness

    value = base_step * step_size + step_progress * step_size + random_factor * step_size
    return min(1.0, max(0.0, value))


def power_in(t: float, power: float) -> float:
    return t ** power


def power_out(t: float, power: float) -> float:
    return 1.0 - (1.0 - t) ** power


def power_in_out(t: float, power: float) -> float:
    if t < 0.5:
        return 0.5 * (2.0 * t) ** power
    return 1.0 - 0.5 * (2.0 * (1.0 - t)) ** power


def back_in(t: float, overshoot: float) -> float:
    c3 = overshoot + 1.0
    return c3 * t * t * t - overshoot * t * t


def back_out(t: float, overshoot: float) -> float:
    c3 = overshoot + 1.0
    return 1.0 + c3 * (t - 1.0) ** 3 + overshoot * (t - 1.0) ** 2


def back_in_out(t: float, overshoot: float) -> float:
    c2 = overshoot * 1.525
    if t < 0.5:
        return 0.5 * ((2.0 * t) ** 2 * ((c2 + 1.0) * 2.0 * t - c2))
    return 0.5 * ((2.0 * t - 2.0) ** 2 * ((c2 + 1.0) * (2.0 * t - 2.0) + c2) + 2.0)


def elastic_in(t: float, amplitude: float, period: float) -> float:
    if t == 0.0 or t == 1.0:
        return t
    c = (2.0 * math.pi) / period
    return -amplitude * 2.0 ** (10.0 * (t - 1.0)) * math.sin((t - 1.0) * c)


def elastic_out(t: float, amplitude: float, period: float) -> float:
    if t == 0.0 or t == 1.0:
        return t
    c = (2.0 * math.pi) / period
    return amplitude * 2.0 ** (-10.0 * t) * math.sin(t * c) + 1.0


def elastic_in_out(t: float, amplitude: float, period: float) -> float:
    if t == 0.0 or t == 1.0:
        return t
    c = (2.0 * math.pi) / period
    if t < 0.5:
        return -0.5 * amplitude * 2.0 ** (20.0 * t - 10.0) * math.sin((20.0 * t - 11.125) * c)
    return 0.5 * amplitude * 2.0 ** (-20.0 * t + 10.0) * math.sin((20.0 * t - 11.125) * c) + 1.0


def _power(power: float) -> float:
    """Negative powers are clamped to 0 (a negative power is infinite at t = 0)"""
    return max(0.0, float(power))


def _elastic(amplitude: float, period: float) -> Tuple[float, float]:
    return (float(amplitude), max(MIN_ELASTIC_PERIOD, float(period)))


def _spring_duration(config: SpringConfig, start: float, end: float) -> float:
    duration = config.estimate_duration(start, end)
    if math.isinf(duration):
        return UNSETTLED_SPRING_HORIZON_S
    return duration


# Fixed curves: kind → f(t)
_SIMPLE_CURVES: Dict[EasingKind, Callable[[float], float]] = {
    EasingKind.LINEAR: ease_linear,
    EasingKind.EASE_IN: ease_in_quad,
    EasingKind.EASE_OUT: ease_out_quad,
    EasingKind.EASE_IN_OUT: ease_in_out_quad,
    EasingKind.BOUNCE: ease_bounce,
    EasingKind.ELASTIC: ease_elastic,
    EasingKind.BACK: ease_back,
    EasingKind.EXPO: ease_expo,
    EasingKind.CIRC: ease_circ,
    EasingKind.SINE: ease_sine,
    EasingKind.QUAD: ease_in_quad,
    EasingKind.CUBIC: ease_in_cubic,
    EasingKind.QUART: ease_in_quart,
    EasingKind.QUINT: ease_in_quint,
}

# Parametric curves: kind → f(t, *params)
_PARAMETRIC_CURVES: Dict[EasingKind, Callable[..., float]] = {
    EasingKind.CUBIC_BEZIER: cubic_bezier,
    EasingKind.STEPS: steps,
    EasingKind.IRREGULAR: irregular,
    EasingKind.IN_POWER: power_in,
    EasingKind.OUT_POWER: power_out,
    EasingKind.IN_OUT_POWER: power_in_out,
    EasingKind.IN_BACK: back_in,
    EasingKind.OUT_BACK: back_out,
    EasingKind.IN_OUT_BACK: back_in_out,
    EasingKind.IN_ELASTIC: elastic_in,
    EasingKind.OUT_ELASTIC: elastic_out,
    EasingKind.IN_OUT_ELASTIC: elastic_in_out,
}


@dataclass(frozen=True)
class EasingFunction:
    """
    Easing curve as an immutable tagged value

    Attributes:
        kind: Curve variant
        params: Variant parameters (e.g. (power,) or (count, jump_at_start))
        spring: Spring parameters, only for EasingKind.SPRING

    Examples:
        EasingFunction.linear().apply(0.3)          # 0.3
        EasingFunction.power_out(3).apply(0.5)      # 0.875
        EasingFunction.spring_wobbly().apply_with_values(0.5, 0.0, 100.0)
    """

    kind: EasingKind = EasingKind.EASE_IN_OUT
    params: Tuple[Any, ...] = ()
    spring: Optional[SpringConfig] = None

    def apply(self, t: float) -> float:
        """
        Apply the curve to normalized progress

        Args:
            t: Progress, clamped to 0.0-1.0

        Returns:
            Eased progress (back/elastic/spring curves may leave 0.0-1.0)
        """
        t = min(1.0, max(0.0, t))

        curve = _SIMPLE_CURVES.get(self.kind)
        if curve is not None:
            return curve(t)

        if self.kind is EasingKind.SPRING:
            config = self.spring or SpringConfig()
            return config.calculate_position(t * _spring_duration(config, 0.0, 1.0), 0.0, 1.0)

        if self.kind is EasingKind.LINEAR_POINTS:
            return linear_points(t, self.params)

        return _PARAMETRIC_CURVES[self.kind](t, *self.params)

    def apply_with_values(self, t: float, start: float, end: float) -> float:
        """
        Eased value between start and end

        For springs, t is mapped onto real time using the spring's own
        settling estimate for this start/end pair, then solved directly.
        """
        if self.kind is EasingKind.SPRING:
            config = self.spring or SpringConfig()
            return config.calculate_position(t * _spring_duration(config, start, end), start, end)
        return start + (end - start) * self.apply(t)

    @property
    def name(self) -> str:
        return self.kind.name.lower()

    # --- constructors ---

    @classmethod
    def linear(cls) -> 'EasingFunction':
        return cls(EasingKind.LINEAR)

    @classmethod
    def ease_in(cls) -> 'EasingFunction':
        return cls(EasingKind.EASE_IN)

    @classmethod
    def ease_out(cls) -> 'EasingFunction':
        return cls(EasingKind.EASE_OUT)

    @classmethod
    def ease_in_out(cls) -> 'EasingFunction':
        return cls(EasingKind.EASE_IN_OUT)

    @classmethod
    def of(cls, kind: EasingKind) -> 'EasingFunction':
        """Parameterless curve by kind"""
        if kind not in _SIMPLE_CURVES:
            raise ValueError(f"Easing {kind.name} requires parameters")
        return cls(kind)

    @classmethod
    def cubic_bezier(cls, x1: float, y1: float, x2: float, y2: float) -> 'EasingFunction':
        return cls(EasingKind.CUBIC_BEZIER, (float(x1), float(y1), float(x2), float(y2)))

    @classmethod
    def spring_config(cls, config: SpringConfig) -> 'EasingFunction':
        return cls(EasingKind.SPRING, spring=config)

    @classmethod
    def spring_physics(cls, mass: float, stiffness: float, damping: float) -> 'EasingFunction':
        return cls.spring_config(SpringConfig(mass, stiffness, damping))

    @classmethod
    def spring_gentle(cls) -> 'EasingFunction':
        return cls.spring_config(SpringConfig.gentle())

    @classmethod
    def spring_wobbly(cls) -> 'EasingFunction':
        return cls.spring_config(SpringConfig.wobbly())

    @classmethod
    def spring_stiff(cls) -> 'EasingFunction':
        return cls.spring_config(SpringConfig.stiff())

    @classmethod
    def steps(cls, count: int, jump_at_start: bool = False) -> 'EasingFunction':
        return cls(EasingKind.STEPS, (max(0, int(count)), bool(jump_at_start)))

    @classmethod
    def linear_points(cls, points: Sequence[float]) -> 'EasingFunction':
        return cls(EasingKind.LINEAR_POINTS, tuple(float(p) for p in points))

    @classmethod
    def irregular(cls, count: int, randomness: float) -> 'EasingFunction':
        return cls(EasingKind.IRREGULAR, (max(0, int(count)), min(1.0, max(0.0, randomness))))

    @classmethod
    def power_in(cls, power: float) -> 'EasingFunction':
        return cls(EasingKind.IN_POWER, (_power(power),))

    @classmethod
    def power_out(cls, power: float) -> 'EasingFunction':
        return cls(EasingKind.OUT_POWER, (_power(power),))

    @classmethod
    def power_in_out(cls, power: float) -> 'EasingFunction':
        return cls(EasingKind.IN_OUT_POWER, (_power(power),))

    @classmethod
    def back_in(cls, overshoot: float = 1.70158) -> 'EasingFunction':
        return cls(EasingKind.IN_BACK, (float(overshoot),))

    @classmethod
    def back_out(cls, overshoot: float = 1.70158) -> 'EasingFunction':
        return cls(EasingKind.OUT_BACK, (float(overshoot),))

    @classmethod
    def back_in_out(cls, overshoot: float = 1.70158) -> 'EasingFunction':
        return cls(EasingKind.IN_OUT_BACK, (float(overshoot),))

    @classmethod
    def elastic_in(cls, amplitude: float = 1.0, period: float = 0.3) -> 'EasingFunction':
        return cls(EasingKind.IN_ELASTIC, _elastic(amplitude, period))

    @classmethod
    def elastic_out(cls, amplitude: float = 1.0, period: float = 0.3) -> 'EasingFunction':
        return cls(EasingKind.OUT_ELASTIC, _elastic(amplitude, period))

    @classmethod
    def elastic_in_out(cls, amplitude: float = 1.0, period: float = 0.3) -> 'EasingFunction':
        return cls(EasingKind.IN_OUT_ELASTIC, _elastic(amplitude, period))


LINEAR = EasingFunction.linear()
EASE_IN_OUT = EasingFunction.ease_in_out()
