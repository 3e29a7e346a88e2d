"""
Batched update records handed to the renderer.

Each record represents one tick's worth of changes of a given granularity:

✔ SingleUpdate    - one animation → one AnimatedValue
✔ OpacityBatch    - many animations → opacity each
✔ PositionBatch   - many animations → (x, y) each
✔ ColorBatch      - many animations → Color each
✔ TransformBatch  - many animations → (transform name, scalar) each

Renderers must handle every variant.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from models.animated import AnimatedValue
from models.color import Color


@dataclass(frozen=True)
class SingleUpdate:
    animation_id: str
    value: AnimatedValue


@dataclass(frozen=True)
class OpacityBatch:
    entries: List[Tuple[str, float]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class PositionBatch:
    entries: List[Tuple[str, int, int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ColorBatch:
    entries: List[Tuple[str, Color]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class TransformBatch:
    entries: List[Tuple[str, str, float]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


BatchedUpdate = Union[
    SingleUpdate,
    OpacityBatch,
    PositionBatch,
    ColorBatch,
    TransformBatch,
]
