"""
Models package - Data models for the animation engine
"""

from .enums import (
    OptimizationLevel,
    PropertyKind,
    CssUnit,
    TransformOp,
    EasingKind,
    DampingRegime,
    AnimationState,
    LoopMode,
    ValidationFailure,
    LogLevel,
    LogCategory,
)
from .color import Color
from .transform import TransformMatrix
from .css import CssValue

__all__ = [
    'OptimizationLevel',
    'PropertyKind',
    'CssUnit',
    'TransformOp',
    'EasingKind',
    'DampingRegime',
    'AnimationState',
    'LoopMode',
    'ValidationFailure',
    'LogLevel',
    'LogCategory',
    'Color',
    'TransformMatrix',
    'CssValue',
]
