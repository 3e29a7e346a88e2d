"""
Color model - 8-bit RGBA color used by keyframes, CSS values and animations

Channels are stored as integers 0-255. Interpolation is per-channel linear and
truncates toward zero when converting back to 8-bit.
"""

from dataclasses import dataclass
from typing import Tuple

from utils.colors import clamp_channel, hex_to_rgba, hue_to_rgb, lerp_channel, rgba_to_hex


@dataclass(frozen=True)
class Color:
    """
    Immutable RGBA color

    Examples:
        red = Color.from_rgb(255, 0, 0)
        green = Color.from_hue(120)
        half = red.lerp(green, 0.5)   # Color(127, 127, 0, 255)
    """

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, a: float = 255) -> 'Color':
        """Create from channel values, clamping each into 0-255"""
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b), clamp_channel(a))

    @classmethod
    def from_hue(cls, hue: int) -> 'Color':
        """Create a fully saturated color from a hue angle (0-360)"""
        return cls(*hue_to_rgb(hue))

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Create from "#rrggbb" / "#rrggbbaa" / "#rgb" notation"""
        return cls(*hex_to_rgba(value))

    # === CONVERSIONS ===

    def to_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_rgba(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        return rgba_to_hex(self.r, self.g, self.b, self.a)

    # === INTERPOLATION ===

    def lerp(self, other: 'Color', t: float) -> 'Color':
        """
        Per-channel linear interpolation toward `other`

        Args:
            other: Target color
            t: Interpolation factor (not clamped, eased values may overshoot)

        Returns:
            New Color, each channel truncated toward zero and clamped to 0-255
        """
        return Color(
            lerp_channel(self.r, other.r, t),
            lerp_channel(self.g, other.g, t),
            lerp_channel(self.b, other.b, t),
            lerp_channel(self.a, other.a, t),
        )

    # === PRESETS ===

    @staticmethod
    def black() -> 'Color':
        return Color(0, 0, 0)

    @staticmethod
    def white() -> 'Color':
        return Color(255, 255, 255)

    @staticmethod
    def red() -> 'Color':
        return Color(255, 0, 0)

    @staticmethod
    def green() -> 'Color':
        return Color(0, 255, 0)

    @staticmethod
    def blue() -> 'Color':
        return Color(0, 0, 255)

    def __str__(self) -> str:
        return f"Color{self.to_rgba()}"
