"""
Utility functions for the animation engine
"""

from .colors import (
    clamp_channel,
    lerp_channel,
    hue_to_rgb,
    hex_to_rgba,
    rgba_to_hex,
)

__all__ = [
    'clamp_channel',
    'lerp_channel',
    'hue_to_rgb',
    'hex_to_rgba',
    'rgba_to_hex',
]
