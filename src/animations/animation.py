"""
Single-property animation driver

An Animation advances one AnimatedProperty through time. It is ticked
explicitly with the elapsed time since the previous frame; nothing here
reads a clock.

    anim = fade_in("title", 300)
    anim.play()
    anim.update(0.016)            # True - progressed
    anim.get_current_values()     # OpacityValue(...)

Lifecycle:
    STOPPED → play() → PLAYING ⇄ pause()/play()
    PLAYING → (progress reaches 1.0) → COMPLETED  (LoopMode.NONE / COUNT exhausted)
    PLAYING → reverse() → REVERSED (still advancing, direction flipped)
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional

from animations.easing import EasingFunction
from animations.keyframes import KeyframeSequence
from models.animated import (
    AnimatedProperty,
    AnimatedValue,
    ColorProperty,
    CssProperty,
    CustomProperty,
    KeyframesProperty,
    OpacityProperty,
    PositionProperty,
    TransformProperty,
    interpolate_property,
    property_kind,
)
from models.color import Color
from models.css import CssValue
from models.enums import AnimationState, LogCategory, LoopMode, PropertyKind, TransformOp
from models.transform import TransformMatrix
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.ANIMATION)

AnimationCallback = Callable[['Animation'], None]
UpdateCallback = Callable[['Animation', AnimatedValue], None]
LoopCallback = Callable[['Animation', int], None]


@dataclass
class AnimationConfig:
    """
    Timing configuration

    Attributes:
        duration_ms: Length of one pass
        easing: Curve applied to raw progress
        delay_ms: Time consumed before the first pass starts
        loop_mode: Behaviour when a pass completes
        loop_count: Number of passes for LoopMode.COUNT
        reverse: Play backwards (progress runs 1 → 0)
        speed: Time multiplier (1.0 = real time)
        auto_play: Start playing when built
        auto_reverse: Flip direction on every loop restart
    """

    duration_ms: int = 500
    easing: EasingFunction = field(default_factory=EasingFunction.ease_in_out)
    delay_ms: int = 0
    loop_mode: LoopMode = LoopMode.NONE
    loop_count: int = 1
    reverse: bool = False
    speed: float = 1.0
    auto_play: bool = False
    auto_reverse: bool = False

    @property
    def duration(self) -> float:
        return self.duration_ms / 1000.0

    @property
    def delay(self) -> float:
        return self.delay_ms / 1000.0


class Animation:
    """
    One animated property with playback state

    Args:
        animation_id: Unique identifier (used by batches and the manager)
        prop: Property to animate
        config: Timing configuration (defaults: 500ms, ease-in-out, play once)
    """

    def __init__(
        self,
        animation_id: str,
        prop: AnimatedProperty,
        config: Optional[AnimationConfig] = None,
    ):
        self.id = animation_id
        self.property = prop
        self.config = config or AnimationConfig()

        self.state = AnimationState.STOPPED
        self.current_time = 0.0
        self.delay_elapsed = 0.0
        self.loops_completed = 0
        self.is_reversed = False
        self.progress = 0.0
        self.current_values: Optional[AnimatedValue] = None

        self.on_start: Optional[AnimationCallback] = None
        self.on_update: Optional[UpdateCallback] = None
        self.on_complete: Optional[AnimationCallback] = None
        self.on_loop: Optional[LoopCallback] = None
        self.on_pause: Optional[AnimationCallback] = None
        self.on_stop: Optional[AnimationCallback] = None

    def __repr__(self) -> str:
        return f"Animation(id={self.id!r}, kind={self.property_kind.name}, state={self.state.name})"

    @staticmethod
    def builder(animation_id: str) -> 'AnimationBuilder':
        return AnimationBuilder(animation_id)

    @property
    def property_kind(self) -> PropertyKind:
        return property_kind(self.property)

    # ------------------------------------------------------------
    # Playback control
    # ------------------------------------------------------------

    def play(self) -> None:
        self.state = AnimationState.PLAYING
        self.delay_elapsed = 0.0
        if self.on_start:
            self.on_start(self)

    def pause(self) -> None:
        self.state = AnimationState.PAUSED
        if self.on_pause:
            self.on_pause(self)

    def stop(self) -> None:
        """Stop and rewind to the beginning"""
        self.state = AnimationState.STOPPED
        self.current_time = 0.0
        self.delay_elapsed = 0.0
        self.progress = 0.0
        self.loops_completed = 0
        self.is_reversed = False
        self.current_values = None
        if self.on_stop:
            self.on_stop(self)

    def reverse(self) -> None:
        """Flip playback direction"""
        self.is_reversed = not self.is_reversed
        if self.state is AnimationState.PLAYING:
            self.state = AnimationState.REVERSED

    def set_speed(self, speed: float) -> None:
        self.config.speed = max(0.0, speed)

    def seek(self, progress: float) -> None:
        """Jump to raw progress (0.0-1.0); the value is computed without easing"""
        progress = min(1.0, max(0.0, progress))
        self.current_time = self.config.duration * progress
        self.progress = progress
        self.current_values = interpolate_property(self.property, progress)

    # ------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------

    def update(self, delta: float) -> bool:
        """
        Advance by `delta` seconds

        Returns:
            True if the animation progressed this frame
        """
        if not self.is_playing():
            return False

        if self.delay_elapsed < self.config.delay:
            self.delay_elapsed += delta
            if self.delay_elapsed < self.config.delay:
                return False

        self.current_time += delta * self.config.speed

        duration = self.config.duration
        if duration > 0.0:
            raw_progress = min(1.0, self.current_time / duration)
        else:
            raw_progress = 1.0

        directed = 1.0 - raw_progress if (self.is_reversed or self.config.reverse) else raw_progress

        self.progress = self.config.easing.apply(directed)
        self.current_values = interpolate_property(self.property, self.progress)

        if self.on_update:
            self.on_update(self, self.current_values)

        if raw_progress >= 1.0:
            self._handle_complete()

        return True

    def _handle_complete(self) -> None:
        mode = self.config.loop_mode

        if mode is LoopMode.NONE:
            self._finish()

        elif mode is LoopMode.INFINITE:
            self._restart()

        elif mode is LoopMode.COUNT:
            self.loops_completed += 1
            if self.loops_completed < self.config.loop_count:
                self._restart()
            else:
                self._finish()

        elif mode is LoopMode.PING_PONG:
            self.is_reversed = not self.is_reversed
            self.current_time = 0.0
            self.loops_completed += 1
            if self.on_loop:
                self.on_loop(self, self.loops_completed)

    def _restart(self) -> None:
        self.current_time = 0.0
        if self.config.loop_mode is LoopMode.INFINITE:
            self.loops_completed += 1
        if self.config.auto_reverse:
            self.is_reversed = not self.is_reversed
        if self.on_loop:
            self.on_loop(self, self.loops_completed)

    def _finish(self) -> None:
        self.state = AnimationState.COMPLETED
        log.debug("Animation completed", id=self.id, loops=self.loops_completed)
        if self.on_complete:
            self.on_complete(self)

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def get_state(self) -> AnimationState:
        return self.state

    def get_progress(self) -> float:
        return self.progress

    def get_current_values(self) -> Optional[AnimatedValue]:
        return self.current_values

    def is_playing(self) -> bool:
        return self.state in (AnimationState.PLAYING, AnimationState.REVERSED)

    def is_completed(self) -> bool:
        return self.state is AnimationState.COMPLETED


class AnimationBuilder:
    """Fluent construction of an Animation"""

    def __init__(self, animation_id: str):
        self._id = animation_id
        self._property: Optional[AnimatedProperty] = None
        self._config = AnimationConfig()
        self._callbacks = {}

    def animate_property(self, prop: AnimatedProperty) -> 'AnimationBuilder':
        self._property = prop
        return self

    def duration_ms(self, duration_ms: int) -> 'AnimationBuilder':
        self._config = replace(self._config, duration_ms=duration_ms)
        return self

    def easing(self, easing: EasingFunction) -> 'AnimationBuilder':
        self._config = replace(self._config, easing=easing)
        return self

    def delay_ms(self, delay_ms: int) -> 'AnimationBuilder':
        self._config = replace(self._config, delay_ms=delay_ms)
        return self

    def loop_mode(self, loop_mode: LoopMode, count: int = 1) -> 'AnimationBuilder':
        self._config = replace(self._config, loop_mode=loop_mode, loop_count=count)
        return self

    def speed(self, speed: float) -> 'AnimationBuilder':
        self._config = replace(self._config, speed=speed)
        return self

    def auto_play(self, auto_play: bool = True) -> 'AnimationBuilder':
        self._config = replace(self._config, auto_play=auto_play)
        return self

    def auto_reverse(self, auto_reverse: bool = True) -> 'AnimationBuilder':
        self._config = replace(self._config, auto_reverse=auto_reverse)
        return self

    def on_start(self, callback: AnimationCallback) -> 'AnimationBuilder':
        self._callbacks['on_start'] = callback
        return self

    def on_update(self, callback: UpdateCallback) -> 'AnimationBuilder':
        self._callbacks['on_update'] = callback
        return self

    def on_complete(self, callback: AnimationCallback) -> 'AnimationBuilder':
        self._callbacks['on_complete'] = callback
        return self

    def on_loop(self, callback: LoopCallback) -> 'AnimationBuilder':
        self._callbacks['on_loop'] = callback
        return self

    def on_pause(self, callback: AnimationCallback) -> 'AnimationBuilder':
        self._callbacks['on_pause'] = callback
        return self

    def on_stop(self, callback: AnimationCallback) -> 'AnimationBuilder':
        self._callbacks['on_stop'] = callback
        return self

    def build(self) -> Animation:
        prop = self._property or OpacityProperty(0.0, 1.0)
        animation = Animation(self._id, prop, replace(self._config))

        for name, callback in self._callbacks.items():
            setattr(animation, name, callback)

        if self._config.auto_play:
            animation.play()

        return animation


class AnimationTimeline:
    """
    Group of animations played one after another or all at once

    Sequential timelines play the next animation on the tick its
    predecessor completes. Parallel timelines complete once none of their
    animations is still playing. An empty timeline completes on its first
    update.

        timeline = AnimationTimeline("intro", sequential=True)
        timeline.add_animation(fade_in("title", 300)).add_animation(fade_in("body", 300))
        timeline.play()
        timeline.update(0.016)

    Args:
        timeline_id: Identifier for logging
        sequential: Play in insertion order instead of in parallel
    """

    def __init__(self, timeline_id: str, sequential: bool = False):
        self.id = timeline_id
        self.sequential = sequential
        self.animations: List[Animation] = []
        self.state = AnimationState.STOPPED
        self.current_index = 0

    def __len__(self) -> int:
        return len(self.animations)

    def add_animation(self, animation: Animation) -> 'AnimationTimeline':
        self.animations.append(animation)
        return self

    def play(self) -> None:
        """Start from the beginning, or resume after pause()"""
        if self.state is AnimationState.PAUSED:
            self.state = AnimationState.PLAYING
            for animation in self._active():
                if animation.state is AnimationState.PAUSED:
                    animation.play()
            return

        self.state = AnimationState.PLAYING
        self.current_index = 0
        for animation in self.animations:
            if animation.is_completed():
                animation.stop()
        for animation in self._active():
            animation.play()

    def pause(self) -> None:
        if self.state is not AnimationState.PLAYING:
            return
        self.state = AnimationState.PAUSED
        for animation in self._active():
            if animation.is_playing():
                animation.pause()

    def stop(self) -> None:
        self.state = AnimationState.STOPPED
        self.current_index = 0
        for animation in self.animations:
            animation.stop()

    def update(self, delta: float) -> bool:
        """
        Advance the playing animation(s) by `delta` seconds

        Returns:
            True if any animation progressed this frame
        """
        if self.state is not AnimationState.PLAYING:
            return False

        if self.sequential:
            return self._update_sequential(delta)

        progressed = False
        for animation in self.animations:
            if animation.update(delta):
                progressed = True

        if not any(animation.is_playing() for animation in self.animations):
            self._complete()
        return progressed

    def _update_sequential(self, delta: float) -> bool:
        current = self.current_animation()
        if current is None:
            self._complete()
            return False

        progressed = current.update(delta)
        if current.is_completed():
            self.current_index += 1
            following = self.current_animation()
            if following is None:
                self._complete()
            else:
                following.play()
        return progressed

    def _active(self) -> List[Animation]:
        if not self.sequential:
            return self.animations
        current = self.current_animation()
        return [current] if current is not None else []

    def _complete(self) -> None:
        self.state = AnimationState.COMPLETED
        log.debug("Timeline completed", id=self.id, animations=len(self.animations))

    def current_animation(self) -> Optional[Animation]:
        """Animation currently driven by a sequential timeline"""
        if self.current_index < len(self.animations):
            return self.animations[self.current_index]
        return None

    def get_current_values(self) -> Dict[str, AnimatedValue]:
        """Latest value of every animation that has produced one, by animation id"""
        return {
            animation.id: animation.get_current_values()
            for animation in self.animations
            if animation.get_current_values() is not None
        }

    @property
    def duration_ms(self) -> int:
        """Length of one play-through (delays included; loops and speed ignored)"""
        spans = [a.config.delay_ms + a.config.duration_ms for a in self.animations]
        if not spans:
            return 0
        return sum(spans) if self.sequential else max(spans)

    def get_state(self) -> AnimationState:
        return self.state

    def is_playing(self) -> bool:
        return self.state is AnimationState.PLAYING

    def is_completed(self) -> bool:
        return self.state is AnimationState.COMPLETED


# ============================================================
# Convenience constructors
# ============================================================

def fade_in(animation_id: str, duration_ms: int) -> Animation:
    return (
        AnimationBuilder(animation_id)
        .animate_property(OpacityProperty(0.0, 1.0))
        .duration_ms(duration_ms)
        .easing(EasingFunction.ease_out())
        .build()
    )


def fade_out(animation_id: str, duration_ms: int) -> Animation:
    return (
        AnimationBuilder(animation_id)
        .animate_property(OpacityProperty(1.0, 0.0))
        .duration_ms(duration_ms)
        .easing(EasingFunction.ease_in())
        .build()
    )


def slide_in_left(animation_id: str, from_x: int, to_x: int, y: int, duration_ms: int) -> Animation:
    return (
        AnimationBuilder(animation_id)
        .animate_property(PositionProperty(from_x, y, to_x, y))
        .duration_ms(duration_ms)
        .easing(EasingFunction.ease_out())
        .build()
    )


def _transform(animation_id: str, op: TransformOp, start, end, duration_ms: int) -> Animation:
    return (
        AnimationBuilder(animation_id)
        .animate_property(TransformProperty(op, start, end))
        .duration_ms(duration_ms)
        .easing(EasingFunction.ease_out())
        .build()
    )


def translate_x(animation_id: str, start: float, end: float, duration_ms: int) -> Animation:
    return _transform(animation_id, TransformOp.TRANSLATE_X, start, end, duration_ms)


def translate_y(animation_id: str, start: float, end: float, duration_ms: int) -> Animation:
    return _transform(animation_id, TransformOp.TRANSLATE_Y, start, end, duration_ms)


def scale_animation(animation_id: str, start: float, end: float, duration_ms: int) -> Animation:
    return _transform(animation_id, TransformOp.SCALE, start, end, duration_ms)


def rotate_animation(animation_id: str, start: float, end: float, duration_ms: int) -> Animation:
    return _transform(animation_id, TransformOp.ROTATE, start, end, duration_ms)


def matrix_animation(
    animation_id: str,
    start: TransformMatrix,
    end: TransformMatrix,
    duration_ms: int,
) -> Animation:
    return _transform(animation_id, TransformOp.MATRIX, start, end, duration_ms)


def color_animation(animation_id: str, start: Color, end: Color, duration_ms: int) -> Animation:
    return (
        AnimationBuilder(animation_id)
        .animate_property(ColorProperty(start, end))
        .duration_ms(duration_ms)
        .easing(EasingFunction.ease_in_out())
        .build()
    )


def numeric_property(animation_id: str, name: str, start: float, end: float, duration_ms: int) -> Animation:
    return (
        AnimationBuilder(animation_id)
        .animate_property(CustomProperty(name, start, end))
        .duration_ms(duration_ms)
        .easing(EasingFunction.ease_out())
        .build()
    )


def css_property(animation_id: str, name: str, start: CssValue, end: CssValue, duration_ms: int) -> Animation:
    return (
        AnimationBuilder(animation_id)
        .animate_property(CssProperty(name, start, end))
        .duration_ms(duration_ms)
        .easing(EasingFunction.ease_out())
        .build()
    )


def keyframe_animation(animation_id: str, sequence: KeyframeSequence) -> Animation:
    """Drive a keyframe sequence over its own duration; segment easing comes from the sequence"""
    return (
        AnimationBuilder(animation_id)
        .animate_property(KeyframesProperty(sequence))
        .duration_ms(sequence.duration_ms)
        .easing(EasingFunction.linear())
        .build()
    )
