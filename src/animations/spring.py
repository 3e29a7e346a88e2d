"""
Spring Physics

Closed-form damped harmonic oscillator used for physics-based easing.

    omega = sqrt(k / m)               angular frequency
    zeta  = c / (2 * sqrt(k * m))     damping ratio

    zeta < 1   underdamped        decaying sinusoid, overshoots
    zeta == 1  critically damped  fastest approach without oscillation
    zeta > 1   overdamped         slower monotonic approach

All functions are pure: a SpringConfig holds only immutable physical
parameters and time is always passed in explicitly (seconds).
"""

import dataclasses
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from models.enums import DampingRegime, LogCategory
from utils.logger import get_category_logger

if TYPE_CHECKING:
    from animations.easing import EasingFunction

log = get_category_logger(LogCategory.SPRING)

MIN_MASS = 0.1
MIN_STIFFNESS = 0.1
MIN_PRECISION = 0.001


@dataclass(frozen=True)
class SpringConfig:
    """
    Spring parameters

    Attributes:
        mass: Mass of the system (inertia), floored at 0.1
        stiffness: Spring constant (oscillation frequency), floored at 0.1
        damping: Damping coefficient (energy loss), floored at 0
        velocity: Initial velocity
        precision: Distance/velocity threshold for "settled"

    Example:
        spring = SpringConfig(mass=1.0, stiffness=180.0, damping=12.0)
        x = spring.calculate_position(0.25, 0.0, 100.0)
        done = spring.estimate_duration(0.0, 100.0)
    """

    mass: float = 1.0
    stiffness: float = 100.0
    damping: float = 10.0
    velocity: float = 0.0
    precision: float = 0.01

    def __post_init__(self):
        # Out-of-range parameters degrade silently to the nearest valid value
        mass = max(MIN_MASS, self.mass)
        stiffness = max(MIN_STIFFNESS, self.stiffness)
        damping = max(0.0, self.damping)
        precision = max(MIN_PRECISION, self.precision)

        if (mass, stiffness, damping, precision) != (self.mass, self.stiffness, self.damping, self.precision):
            log.debug(
                "Spring parameters clamped",
                mass=f"{self.mass} → {mass}",
                stiffness=f"{self.stiffness} → {stiffness}",
                damping=f"{self.damping} → {damping}",
            )

        object.__setattr__(self, 'mass', mass)
        object.__setattr__(self, 'stiffness', stiffness)
        object.__setattr__(self, 'damping', damping)
        object.__setattr__(self, 'precision', precision)

    # === BUILDERS ===

    def with_velocity(self, velocity: float) -> 'SpringConfig':
        return dataclasses.replace(self, velocity=velocity)

    def with_precision(self, precision: float) -> 'SpringConfig':
        return dataclasses.replace(self, precision=max(MIN_PRECISION, precision))

    # === DERIVED QUANTITIES ===

    @property
    def angular_frequency(self) -> float:
        return math.sqrt(self.stiffness / self.mass)

    @property
    def damping_ratio(self) -> float:
        return self.damping / (2.0 * math.sqrt(self.mass * self.stiffness))

    @property
    def regime(self) -> DampingRegime:
        zeta = self.damping_ratio
        if zeta < 1.0:
            return DampingRegime.UNDERDAMPED
        if zeta == 1.0:
            return DampingRegime.CRITICALLY_DAMPED
        return DampingRegime.OVERDAMPED

    # === SOLVER ===

    def _residual(self, time: float, displacement: float) -> float:
        """Remaining distance to target at `time` (equals displacement at t=0)"""
        omega = self.angular_frequency
        zeta = self.damping_ratio
        regime = self.regime

        if regime is DampingRegime.UNDERDAMPED:
            damped = omega * math.sqrt(1.0 - zeta * zeta)
            a = displacement
            b = (self.velocity + zeta * omega * displacement) / damped
            envelope = math.exp(-zeta * omega * time)
            return envelope * (a * math.cos(damped * time) + b * math.sin(damped * time))

        if regime is DampingRegime.CRITICALLY_DAMPED:
            a = displacement
            b = self.velocity + omega * displacement
            return (a + b * time) * math.exp(-omega * time)

        root = math.sqrt(zeta * zeta - 1.0)
        r1 = -omega * (zeta + root)
        r2 = -omega * (zeta - root)
        a = (self.velocity - r2 * displacement) / (r1 - r2)
        b = displacement - a
        return a * math.exp(r1 * time) + b * math.exp(r2 * time)

    def _residual_rate(self, time: float, displacement: float) -> float:
        """Time derivative of _residual"""
        omega = self.angular_frequency
        zeta = self.damping_ratio
        regime = self.regime

        if regime is DampingRegime.UNDERDAMPED:
            damped = omega * math.sqrt(1.0 - zeta * zeta)
            a = displacement
            b = (self.velocity + zeta * omega * displacement) / damped
            envelope = math.exp(-zeta * omega * time)
            envelope_rate = -zeta * omega * envelope
            oscillation = a * math.cos(damped * time) + b * math.sin(damped * time)
            oscillation_rate = damped * (-a * math.sin(damped * time) + b * math.cos(damped * time))
            return envelope_rate * oscillation + envelope * oscillation_rate

        if regime is DampingRegime.CRITICALLY_DAMPED:
            a = displacement
            b = self.velocity + omega * displacement
            return (-omega * (a + b * time) + b) * math.exp(-omega * time)

        root = math.sqrt(zeta * zeta - 1.0)
        r1 = -omega * (zeta + root)
        r2 = -omega * (zeta - root)
        a = (self.velocity - r2 * displacement) / (r1 - r2)
        b = displacement - a
        return a * r1 * math.exp(r1 * time) + b * r2 * math.exp(r2 * time)

    def calculate_position(self, time: float, start: float, end: float) -> float:
        """
        Position of the spring at `time` seconds

        Returns `start` for time <= 0 and `end` when the distance is below precision.
        """
        if time <= 0.0:
            return start

        displacement = end - start
        if abs(displacement) < self.precision:
            return end

        return start + displacement - self._residual(time, displacement)

    def calculate_velocity(self, time: float, start: float, end: float) -> float:
        """Velocity (d position / dt) at `time` seconds"""
        if time <= 0.0:
            return self.velocity

        displacement = end - start
        if abs(displacement) < self.precision:
            return 0.0

        return -self._residual_rate(time, displacement)

    def estimate_duration(self, start: float, end: float) -> float:
        """
        Estimated settling time in seconds

        Time for the decay envelope exp(-zeta * omega * t) to fall below
        precision. This is an envelope estimate, not an exact root.
        An undamped spring never settles and yields math.inf.
        """
        if abs(end - start) < self.precision:
            return 0.0

        decay_constant = self.damping_ratio * self.angular_frequency
        if decay_constant <= 0.0:
            return math.inf

        return max(0.0, -math.log(self.precision) / decay_constant)

    def is_settled(self, time: float, start: float, end: float) -> bool:
        position = self.calculate_position(time, start, end)
        velocity = self.calculate_velocity(time, start, end)
        return abs(position - end) < self.precision and abs(velocity) < self.precision

    def to_easing_function(self) -> 'EasingFunction':
        """Wrap this spring as an easing curve"""
        from animations.easing import EasingFunction
        return EasingFunction.spring_config(self)

    # === PRESETS ===

    @classmethod
    def gentle(cls) -> 'SpringConfig':
        """Gentle spring with minimal overshoot"""
        return cls(1.0, 120.0, 14.0)

    @classmethod
    def wobbly(cls) -> 'SpringConfig':
        """Noticeable oscillation"""
        return cls(1.0, 180.0, 12.0)

    @classmethod
    def stiff(cls) -> 'SpringConfig':
        """Quick response"""
        return cls(1.0, 400.0, 26.0)

    @classmethod
    def slow(cls) -> 'SpringConfig':
        return cls(1.0, 60.0, 15.0)

    @classmethod
    def bouncy(cls) -> 'SpringConfig':
        """Multiple visible oscillations"""
        return cls(1.0, 200.0, 8.0)

    @classmethod
    def no_overshoot(cls) -> 'SpringConfig':
        """Critically damped (zeta == 1)"""
        return cls(1.0, 100.0, 20.0)


SPRING_PRESETS = {
    "gentle": SpringConfig.gentle,
    "wobbly": SpringConfig.wobbly,
    "stiff": SpringConfig.stiff,
    "slow": SpringConfig.slow,
    "bouncy": SpringConfig.bouncy,
    "no_overshoot": SpringConfig.no_overshoot,
}


def spring(mass: float, stiffness: float, damping: float) -> SpringConfig:
    return SpringConfig(mass, stiffness, damping)


def spring_with_velocity(mass: float, stiffness: float, damping: float, velocity: float) -> SpringConfig:
    return SpringConfig(mass, stiffness, damping).with_velocity(velocity)
