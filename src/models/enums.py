"""
Enums for the animation engine
"""

from enum import Enum, auto


class OptimizationLevel(Enum):
    """
    How an AnimationBatch processes its animations each tick

    NONE: every animation updated and emitted individually
    BASIC: updates grouped by property kind, one batched record per kind
    AGGRESSIVE: BASIC plus visibility filter and cache-reuse hook
    GPU: reserved, processed as BASIC
    """
    NONE = auto()
    BASIC = auto()
    AGGRESSIVE = auto()
    GPU = auto()


class PropertyKind(Enum):
    """Property classification tag used for batching"""
    OPACITY = auto()
    POSITION = auto()
    COLOR = auto()
    SIZE = auto()
    TRANSFORM = auto()
    CUSTOM = auto()


class CssUnit(Enum):
    """Unit tag of a CssValue"""
    NUMBER = auto()
    PERCENTAGE = auto()
    PIXELS = auto()
    EM = auto()
    REM = auto()
    VIEWPORT_WIDTH = auto()
    VIEWPORT_HEIGHT = auto()
    COLOR = auto()
    STRING = auto()


class TransformOp(Enum):
    """Transform operations an animation can drive (value = CSS name)"""
    TRANSLATE_X = "translateX"
    TRANSLATE_Y = "translateY"
    TRANSLATE = "translate"
    SCALE_X = "scaleX"
    SCALE_Y = "scaleY"
    SCALE = "scale"
    ROTATE = "rotate"
    SKEW_X = "skewX"
    SKEW_Y = "skewY"
    MATRIX = "matrix"


class EasingKind(Enum):
    """Easing curve variants"""
    LINEAR = auto()
    EASE_IN = auto()
    EASE_OUT = auto()
    EASE_IN_OUT = auto()
    CUBIC_BEZIER = auto()
    BOUNCE = auto()
    ELASTIC = auto()
    BACK = auto()
    EXPO = auto()
    CIRC = auto()
    SINE = auto()
    QUAD = auto()
    CUBIC = auto()
    QUART = auto()
    QUINT = auto()

    # Parametric / physics variants
    SPRING = auto()
    STEPS = auto()
    LINEAR_POINTS = auto()
    IRREGULAR = auto()
    IN_POWER = auto()
    OUT_POWER = auto()
    IN_OUT_POWER = auto()
    IN_BACK = auto()
    OUT_BACK = auto()
    IN_OUT_BACK = auto()
    IN_ELASTIC = auto()
    OUT_ELASTIC = auto()
    IN_OUT_ELASTIC = auto()


class DampingRegime(Enum):
    """Spring regime derived from the damping ratio"""
    UNDERDAMPED = auto()         # zeta < 1, oscillates
    CRITICALLY_DAMPED = auto()   # zeta == 1
    OVERDAMPED = auto()          # zeta > 1, monotonic


class AnimationState(Enum):
    """Playback state of a single-property animation"""
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()
    COMPLETED = auto()
    REVERSED = auto()


class LoopMode(Enum):
    """Loop behaviour when an animation reaches the end"""
    NONE = auto()
    INFINITE = auto()
    COUNT = auto()
    PING_PONG = auto()


class StaggerOriginKind(Enum):
    """Where a stagger starts counting delay from"""
    FIRST = auto()
    LAST = auto()
    CENTER = auto()
    RANDOM = auto()
    INDEX = auto()       # payload: element index
    POSITION = auto()    # payload: (x, y) cell


class StaggerDirection(Enum):
    """Order in which computed stagger delays are assigned"""
    NORMAL = auto()
    REVERSE = auto()
    RANDOM = auto()      # deterministic shuffle


class ValidationFailure(Enum):
    """Which structural invariant a KeyframeSequence broke"""
    EMPTY = auto()
    OFFSET_OUT_OF_RANGE = auto()
    UNSORTED = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    KEYFRAME = auto()    # Sequence building, validation
    SPRING = auto()      # Spring solver
    EASING = auto()
    ANIMATION = auto()   # Single-property driver lifecycle
    CACHE = auto()       # Interpolation cache
    BATCH = auto()       # Batch processing
    METRICS = auto()     # Performance reports
    ENGINE = auto()      # Optimized manager

    GENERAL = auto()     # Default general category
