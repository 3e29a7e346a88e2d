"""
Color conversion utilities

Pure functions for channel math and color notation parsing.
Used by models.color and by config decoding (hex strings, hue angles).
"""

from typing import Tuple


def clamp_channel(value: float) -> int:
    """
    Clamp a channel value into 0-255 and truncate toward zero

    Args:
        value: Raw channel value (may be fractional or out of range)

    Returns:
        Integer channel 0-255
    """
    if value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value)


def lerp_channel(start: int, end: int, t: float) -> int:
    """
    Interpolate one 8-bit channel

    Result truncates toward zero (no rounding): 255 -> 0 at t=0.5 gives 127.
    """
    return clamp_channel(start + (end - start) * t)


# (r, g, b) per 60 degree sector: 'max' = 255, 'up' = ramping in, 'down' = ramping out, 0 = off
_HUE_SECTORS = (
    ('max', 'up', 0),
    ('down', 'max', 0),
    (0, 'max', 'up'),
    (0, 'down', 'max'),
    ('up', 0, 'max'),
    ('max', 0, 'down'),
)


def hue_to_rgb(hue: int) -> Tuple[int, int, int]:
    """
    Fully saturated, full brightness color for a hue angle in degrees

    Angles wrap, so 360 and -360 are red like 0. Ramping channels move
    4.25 per degree (60 degrees span 0-255) and truncate.

        hue_to_rgb(0)    # (255, 0, 0)
        hue_to_rgb(120)  # (0, 255, 0)
        hue_to_rgb(240)  # (0, 0, 255)
    """
    angle = hue % 360
    sector = int(angle // 60)
    within = angle - sector * 60
    levels = {'max': 255, 'up': int(within * 4.25), 'down': int((60 - within) * 4.25), 0: 0}
    r, g, b = (levels[part] for part in _HUE_SECTORS[sector])
    return (r, g, b)


def hex_to_rgba(value: str) -> Tuple[int, int, int, int]:
    """
    Parse "#rgb", "#rrggbb" or "#rrggbbaa" notation

    Raises:
        ValueError: on malformed input
    """
    text = value.strip().lstrip('#')
    if len(text) == 3:
        text = ''.join(ch * 2 for ch in text)
    if len(text) == 6:
        text += 'ff'
    if len(text) != 8:
        raise ValueError(f"Invalid hex color: {value!r}")
    try:
        channels = [int(text[i:i + 2], 16) for i in range(0, 8, 2)]
    except ValueError:
        raise ValueError(f"Invalid hex color: {value!r}") from None
    r, g, b, a = channels
    return (r, g, b, a)


def rgba_to_hex(r: int, g: int, b: int, a: int = 255) -> str:
    """Format channels as "#rrggbb" (alpha appended only when not opaque)"""
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"
