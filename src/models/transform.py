"""
2D affine transform matrix

    | a  c  e |
    | b  d  f |
    | 0  0  1 |

Defaults to identity. Interpolation is component-wise linear.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple


def _lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


@dataclass(frozen=True)
class TransformMatrix:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> 'TransformMatrix':
        return cls()

    @classmethod
    def translate(cls, x: float = 0.0, y: float = 0.0) -> 'TransformMatrix':
        return cls(e=x, f=y)

    @classmethod
    def scale(cls, sx: float, sy: Optional[float] = None) -> 'TransformMatrix':
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def rotate(cls, degrees: float) -> 'TransformMatrix':
        angle = math.radians(degrees)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return cls(a=cos_a, b=sin_a, c=-sin_a, d=cos_a)

    @classmethod
    def skew(cls, x_degrees: float = 0.0, y_degrees: float = 0.0) -> 'TransformMatrix':
        return cls(c=math.tan(math.radians(x_degrees)), b=math.tan(math.radians(y_degrees)))

    def components(self) -> Tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def lerp(self, other: 'TransformMatrix', t: float) -> 'TransformMatrix':
        """Interpolate all six components linearly"""
        return TransformMatrix(
            a=_lerp(self.a, other.a, t),
            b=_lerp(self.b, other.b, t),
            c=_lerp(self.c, other.c, t),
            d=_lerp(self.d, other.d, t),
            e=_lerp(self.e, other.e, t),
            f=_lerp(self.f, other.f, t),
        )
