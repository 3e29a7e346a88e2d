"""
Stagger delays

Computes per-element start delays so a group of animations ripples out
from an origin instead of starting together.

    config = stagger_from_center(50)
    config.calculate_delays(5)        # [125.0, 75.0, 25.0, 25.0, 75.0]
    config.apply_to(animations)       # writes delay_ms on each animation

Delays are milliseconds. Post-processing runs in a fixed order:
direction (reverse / shuffle), then easing over the largest delay, then
the range rescale.
"""

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from animations.easing import EasingFunction
from models.enums import LogCategory, StaggerDirection, StaggerOriginKind
from utils.logger import get_logger

if TYPE_CHECKING:
    from animations.animation import Animation

log = get_logger().for_category(LogCategory.ANIMATION)

Position = Tuple[int, int]


def _index_hash(index: int) -> int:
    """Deterministic 32-bit hash of an element index"""
    return (index * 2654435761) & 0xFFFFFFFF


@dataclass(frozen=True)
class StaggerOrigin:
    """
    Starting point of a stagger

    Attributes:
        kind: Origin variant
        index: Element index for StaggerOriginKind.INDEX
        position: (x, y) cell for StaggerOriginKind.POSITION
    """

    kind: StaggerOriginKind = StaggerOriginKind.FIRST
    index: int = 0
    position: Position = (0, 0)

    @classmethod
    def first(cls) -> 'StaggerOrigin':
        return cls(StaggerOriginKind.FIRST)

    @classmethod
    def last(cls) -> 'StaggerOrigin':
        return cls(StaggerOriginKind.LAST)

    @classmethod
    def center(cls) -> 'StaggerOrigin':
        return cls(StaggerOriginKind.CENTER)

    @classmethod
    def random(cls) -> 'StaggerOrigin':
        return cls(StaggerOriginKind.RANDOM)

    @classmethod
    def at_index(cls, index: int) -> 'StaggerOrigin':
        return cls(StaggerOriginKind.INDEX, index=max(0, int(index)))

    @classmethod
    def at_position(cls, x: int, y: int) -> 'StaggerOrigin':
        return cls(StaggerOriginKind.POSITION, position=(int(x), int(y)))


@dataclass(frozen=True)
class StaggerConfig:
    """
    Stagger parameters

    Attributes:
        delay_ms: Delay per unit of distance from the origin
        origin: Where distance is measured from
        direction: Order delays are assigned in
        ease: Reshapes delays relative to the largest one
        grid: (width, height) used by calculate_grid_delays
        delay_range: (min, max) factors; delays are rescaled into
            delay_ms * min .. delay_ms * max
    """

    delay_ms: float = 100.0
    origin: StaggerOrigin = StaggerOrigin()
    direction: StaggerDirection = StaggerDirection.NORMAL
    ease: Optional[EasingFunction] = None
    grid: Optional[Tuple[int, int]] = None
    delay_range: Optional[Tuple[float, float]] = None

    # --- delays ---

    def calculate_delays(self, count: int, positions: Sequence[Position] = ()) -> List[float]:
        """
        Delay for each of `count` elements in a row

        Args:
            count: Number of elements
            positions: (x, y) per element, used by a POSITION origin
                (without positions it falls back to FIRST)

        Returns:
            One delay (ms) per element; one per position for a POSITION origin
        """
        kind = self.origin.kind

        if kind is StaggerOriginKind.LAST:
            delays = [self.delay_ms * (count - 1 - i) for i in range(count)]
        elif kind is StaggerOriginKind.CENTER:
            center = count / 2.0
            delays = [self.delay_ms * abs(i - center) for i in range(count)]
        elif kind is StaggerOriginKind.RANDOM:
            delays = [self.delay_ms * (_index_hash(i) % 1000) / 1000.0 * count for i in range(count)]
        elif kind is StaggerOriginKind.INDEX:
            start = min(self.origin.index, max(0, count - 1))
            delays = [self.delay_ms * abs(i - start) for i in range(count)]
        elif kind is StaggerOriginKind.POSITION and positions:
            ox, oy = self.origin.position
            delays = [self.delay_ms * math.hypot(x - ox, y - oy) / 100.0 for x, y in positions]
        else:
            delays = self._linear(count)

        return self._finish(delays)

    def calculate_grid_delays(self, width: int, height: int) -> List[float]:
        """
        Delays for a width x height grid in row-major order

        Needs `grid` to be set; the effective grid is clipped to
        width x height. Without `grid` the elements are staggered as a
        plain row of width * height.
        """
        if self.grid is None:
            return self._finish(self._linear(width * height))

        grid_w = min(self.grid[0], width)
        grid_h = min(self.grid[1], height)
        kind = self.origin.kind

        delays = []
        for y in range(grid_h):
            for x in range(grid_w):
                if kind is StaggerOriginKind.CENTER:
                    distance = math.hypot(x - grid_w / 2.0, y - grid_h / 2.0)
                    delays.append(self.delay_ms * distance)
                elif kind is StaggerOriginKind.POSITION:
                    px, py = self.origin.position
                    delays.append(self.delay_ms * math.hypot(x - px, y - py) / 10.0)
                else:
                    delays.append(self.delay_ms * (y * grid_w + x))

        return self._finish(delays)

    def _linear(self, count: int) -> List[float]:
        return [self.delay_ms * i for i in range(count)]

    def _finish(self, delays: List[float]) -> List[float]:
        if self.direction is StaggerDirection.REVERSE:
            delays.reverse()
        elif self.direction is StaggerDirection.RANDOM:
            delays = _shuffle(delays)

        if self.ease is not None and delays:
            largest = max(delays)
            if largest > 0.0:
                # back/elastic curves can dip below zero
                delays = [max(0.0, largest * self.ease.apply(d / largest)) for d in delays]

        if self.delay_range is not None and self.delay_ms > 0.0:
            low, high = self.delay_range
            delays = [
                self.delay_ms * (low + (high - low) * min(1.0, max(0.0, d / self.delay_ms)))
                for d in delays
            ]

        return delays

    # --- application ---

    def apply_to(self, animations: Sequence['Animation'], positions: Sequence[Position] = ()) -> List[float]:
        """
        Write the computed delays into each animation's config

        Uses calculate_grid_delays when `grid` is set, else calculate_delays.
        Elements beyond the computed delays keep their own delay.

        Returns:
            The delays (ms) that were computed
        """
        if self.grid is not None:
            delays = self.calculate_grid_delays(*self.grid)
        else:
            delays = self.calculate_delays(len(animations), positions)

        for animation, delay in zip(animations, delays):
            animation.config.delay_ms = int(round(delay))

        log.debug(
            "Stagger applied",
            animations=len(animations),
            origin=self.origin.kind.name,
            max_delay_ms=round(max(delays), 1) if delays else 0,
        )
        return delays


def _shuffle(delays: List[float]) -> List[float]:
    """Deterministic swap shuffle keyed by index hash"""
    order = list(range(len(delays)))
    for i in range(len(order)):
        j = _index_hash(i) % len(order)
        order[i], order[j] = order[j], order[i]
    return [delays[k] for k in order]


class StaggerBuilder:
    """Fluent construction of a StaggerConfig"""

    def __init__(self, delay_ms: float):
        self._config = StaggerConfig(delay_ms=delay_ms)

    def origin(self, origin: StaggerOrigin) -> 'StaggerBuilder':
        self._config = replace(self._config, origin=origin)
        return self

    def direction(self, direction: StaggerDirection) -> 'StaggerBuilder':
        self._config = replace(self._config, direction=direction)
        return self

    def ease(self, easing: EasingFunction) -> 'StaggerBuilder':
        self._config = replace(self._config, ease=easing)
        return self

    def grid(self, width: int, height: int) -> 'StaggerBuilder':
        self._config = replace(self._config, grid=(width, height))
        return self

    def delay_range(self, low: float, high: float) -> 'StaggerBuilder':
        self._config = replace(self._config, delay_range=(low, high))
        return self

    def build(self) -> StaggerConfig:
        return self._config


# ============================================================
# Convenience constructors
# ============================================================

def stagger(delay_ms: float) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms)


def stagger_from_center(delay_ms: float) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms, origin=StaggerOrigin.center())


def stagger_from_last(delay_ms: float) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms, origin=StaggerOrigin.last())


def stagger_from_index(delay_ms: float, index: int) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms, origin=StaggerOrigin.at_index(index))


def stagger_from_position(delay_ms: float, x: int, y: int) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms, origin=StaggerOrigin.at_position(x, y))


def stagger_random(delay_ms: float) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms, origin=StaggerOrigin.random(), direction=StaggerDirection.RANDOM)


def stagger_grid(delay_ms: float, width: int, height: int) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms, grid=(width, height))


def stagger_grid_center(delay_ms: float, width: int, height: int) -> StaggerConfig:
    return StaggerConfig(delay_ms=delay_ms, origin=StaggerOrigin.center(), grid=(width, height))


def stagger_builder(delay_ms: float) -> StaggerBuilder:
    return StaggerBuilder(delay_ms)
