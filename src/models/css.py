"""
CSS-like values with units

A CssValue is a unit tag plus a payload:
- numeric units (NUMBER, PERCENTAGE, PIXELS, EM, REM, VIEWPORT_*) carry a float
- COLOR carries a Color
- STRING carries a str and never interpolates
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from models.color import Color
from models.enums import CssUnit

CssPayload = Union[float, Color, str]

UNIT_SUFFIXES: Dict[CssUnit, str] = {
    CssUnit.NUMBER: "",
    CssUnit.PERCENTAGE: "%",
    CssUnit.PIXELS: "px",
    CssUnit.EM: "em",
    CssUnit.REM: "rem",
    CssUnit.VIEWPORT_WIDTH: "vw",
    CssUnit.VIEWPORT_HEIGHT: "vh",
}

NUMERIC_UNITS = frozenset(UNIT_SUFFIXES)


@dataclass(frozen=True)
class CssValue:
    unit: CssUnit
    value: CssPayload

    # === CONSTRUCTORS ===

    @classmethod
    def number(cls, value: float) -> 'CssValue':
        return cls(CssUnit.NUMBER, float(value))

    @classmethod
    def percentage(cls, value: float) -> 'CssValue':
        return cls(CssUnit.PERCENTAGE, float(value))

    @classmethod
    def pixels(cls, value: float) -> 'CssValue':
        return cls(CssUnit.PIXELS, float(value))

    @classmethod
    def em(cls, value: float) -> 'CssValue':
        return cls(CssUnit.EM, float(value))

    @classmethod
    def rem(cls, value: float) -> 'CssValue':
        return cls(CssUnit.REM, float(value))

    @classmethod
    def vw(cls, value: float) -> 'CssValue':
        return cls(CssUnit.VIEWPORT_WIDTH, float(value))

    @classmethod
    def vh(cls, value: float) -> 'CssValue':
        return cls(CssUnit.VIEWPORT_HEIGHT, float(value))

    @classmethod
    def color(cls, r: int, g: int, b: int, a: int = 255) -> 'CssValue':
        return cls(CssUnit.COLOR, Color.from_rgb(r, g, b, a))

    @classmethod
    def string(cls, value: str) -> 'CssValue':
        return cls(CssUnit.STRING, value)

    # === BEHAVIOUR ===

    @property
    def is_numeric(self) -> bool:
        return self.unit in NUMERIC_UNITS

    def interpolate(self, other: 'CssValue', t: float) -> Optional['CssValue']:
        """
        Interpolate toward `other`

        Returns None when the units differ or the unit is STRING.
        """
        if self.unit is not other.unit:
            return None
        if self.is_numeric:
            start = float(self.value)
            return CssValue(self.unit, start + (float(other.value) - start) * t)
        if self.unit is CssUnit.COLOR:
            return CssValue(CssUnit.COLOR, self.value.lerp(other.value, t))
        return None

    def __str__(self) -> str:
        if self.is_numeric:
            return f"{self.value:g}{UNIT_SUFFIXES[self.unit]}"
        if self.unit is CssUnit.COLOR:
            return self.value.to_hex()
        return str(self.value)
