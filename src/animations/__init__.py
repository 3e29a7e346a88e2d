"""
Animation primitives for terminal UI elements

- easing: Easing curves (EasingFunction + plain curve functions)
- spring: Closed-form spring physics (SpringConfig)
- keyframes: Multi-property keyframe sequences
- animation: Single-property driver (Animation, AnimationBuilder) and AnimationTimeline
- stagger: Per-element start delays (StaggerConfig, StaggerBuilder)
"""

__all__ = [
    "easing",
    "spring",
    "keyframes",
    "animation",
    "stagger",
]
