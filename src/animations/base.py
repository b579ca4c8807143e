"""
Base Timeline Animation

All animation primitives inherit from TimelineAnimation and implement
render_frame(). A primitive is a time-boxed effect placed on a Timeline at
a millisecond offset; it does not touch the LEDs itself. It only answers
"which brightness should these channels have at this point in time" and
LedstripAnimation writes the answer to the brightness sink.

Most simple example:

    class FadeIn(TimelineAnimation):
        def render_frame(self, fraction):
            start, end = self.options["start"], self.options["end"]
            return {led: start + (end - start) * fraction for led in self.leds}
"""

import copy
import random
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from hardware.pwm.brightness_sink import IBrightnessSink
from models.errors import ConfigurationError
from models.validation import Range, ValidationRules, validate_options

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

BRIGHTNESS_RANGE = Range(min=0, max=4095)


def generate_id(length: int = 8) -> str:
    """Short random id, for debugging only"""
    return "".join(random.choices(ALPHABET, k=length))


class TimelineAnimation:
    """
    Base class for a renderable, time-boxed effect.

    Lifecycle (per cycle, reset() starts a new one):
        set_relative_position(offset)     ← Timeline.add()
        set_absolute_position(start)      ← Timeline.set_start_time()
        set_current_position(now)         ← every tick
        render(eased)                     ← every tick while active

    State:
        progress   0..100, integer percentage of the elapsed duration
        started    on_start() has been scheduled for this cycle
        active     current tick falls inside the window (or finishes it)
        ended      progress reached 100; no more output until reset()

    IMPORTANT:
    - on_start() runs once per cycle, right before the first render of the
      tick in which the window is entered. Snapshots taken there see values
      already written earlier in the same tick by lower-offset primitives.
    - render_frame() must be a pure function of its fraction and the state
      captured by on_start().
    """

    RULES = ValidationRules(
        required=["leds"],
        types={"duration": "number", "leds": "array"},
        ranges={"duration": Range(min=0)},
    )

    # Subclasses that read current brightness from the sink set this to True
    REQUIRES_SINK = False

    def __init__(self, options: Mapping[str, Any], sink: Optional[IBrightnessSink] = None):
        """
        Validate and freeze options.

        Args:
            options: Primitive options (leds, duration, type-specific fields).
                     A "sink" key is accepted as an alternative to the keyword.
            sink: Brightness sink used to snapshot current brightness

        Raises:
            ConfigurationError: invalid options, missing sink or duration
        """
        options = dict(options) if options is not None else None
        if options is not None and "sink" in options:
            popped = options.pop("sink")
            sink = sink if sink is not None else popped

        validate_options(options, self.RULES)

        frozen = copy.deepcopy(options)
        frozen["leds"] = tuple(int(led) for led in frozen["leds"])
        self.options: Mapping[str, Any] = MappingProxyType(frozen)
        self.sink = sink

        if self.requires_sink() and self.sink is None:
            raise ConfigurationError(
                f"{type(self).__name__}: mandatory option sink is missing", field="sink"
            )

        self.id = generate_id()
        self.relative_start: float = 0
        self.absolute_start: Optional[float] = None
        self.absolute_end: Optional[float] = None
        self.absolute_current: Optional[float] = None
        self.progress = 0
        self.active = False
        self.ended = False
        self.started = False
        self._start_pending = False

        self._explicit_duration = self.options.get("duration") is not None
        self.duration: float = (
            self.options["duration"] if self._explicit_duration else self.calculate_duration()
        )

    # ------------------------------------------------------------
    # Configuration helpers
    # ------------------------------------------------------------

    def requires_sink(self) -> bool:
        return self.REQUIRES_SINK

    @property
    def leds(self) -> List[int]:
        return list(self.options["leds"])

    def calculate_duration(self) -> float:
        """
        Called when no `duration` option was passed.

        Override for primitives whose length is not known at design time.

        Raises:
            ConfigurationError: default implementation, no duration available
        """
        raise ConfigurationError(
            f"{type(self).__name__}: no duration supplied and no calculation override",
            field="duration",
        )

    def clone(self, **overrides: Any) -> "TimelineAnimation":
        """
        Fresh copy with the same (optionally overridden) options.

        The copy has its own id and pre-start lifecycle state; options are
        deep-copied so two placements never share mutable state.
        """
        options = dict(self.options)
        options.update(overrides)
        return type(self)(options, sink=self.sink)

    # ------------------------------------------------------------
    # Positioning
    # ------------------------------------------------------------

    def set_relative_position(self, offset: float) -> "TimelineAnimation":
        self.relative_start = offset
        return self

    def set_absolute_position(self, timeline_start: float) -> "TimelineAnimation":
        """
        Anchor the window to an absolute timeline start (ms).

        absolute_start = timeline_start + relative offset
        absolute_end   = absolute_start + duration
        """
        if not self._explicit_duration:
            self.duration = self.calculate_duration()
        self.absolute_start = timeline_start + self.relative_start
        self.absolute_end = self.absolute_start + self.duration
        return self

    def set_current_position(self, now: float) -> "TimelineAnimation":
        """
        Advance to absolute time `now` (ms) and recompute active/progress/ended.

        A primitive that has not produced its 100% frame yet is active on the
        first tick at or past absolute_start, even when that tick is already
        past absolute_end, so a late tick never drops the final frame.
        """
        if self.absolute_start is None or self.absolute_end is None:
            self.active = False
            self.progress = 0
            return self

        if now < self.absolute_start:
            self.active = False
            self.absolute_current = None
            self.progress = 0
            return self

        if self.ended:
            self.active = False
            self.absolute_current = None
            self.progress = 100
            return self

        if not self.started:
            self.started = True
            self._start_pending = True
        # a window passed between two ticks is still active for this one tick
        self.active = True
        self.absolute_current = now
        self.progress = self._progress_at(now)
        if self.progress >= 100:
            self.progress = 100
            self.ended = True

        return self

    def _progress_at(self, now: float) -> int:
        if self.duration <= 0:
            return 100
        elapsed = now - self.absolute_start
        return max(0, min(100, round(100 * elapsed / self.duration)))

    def time_at(self, fraction: float) -> float:
        """Absolute time inside the window at a (possibly eased) fraction, clamped to 0..1."""
        return self.absolute_start + min(max(fraction, 0.0), 1.0) * self.duration

    # ------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------

    def on_start(self) -> None:
        """Hook for per-cycle initialisation, e.g. snapshotting sink brightness."""

    def render(self, eased: Optional[float] = None) -> Dict[int, float]:
        """
        Brightness per channel for the current position.

        Args:
            eased: eased progress fraction (0.0-1.0); None = linear progress/100

        Returns:
            {channel: brightness}; empty before the first set_current_position()
        """
        if not self.started:
            return {}
        if self._start_pending:
            self._start_pending = False
            self.on_start()
        fraction = self.progress / 100 if eased is None else eased
        return self.render_frame(fraction)

    def render_frame(self, fraction: float) -> Dict[int, float]:
        raise NotImplementedError

    def reset(self) -> "TimelineAnimation":
        """Back to pre-start state. Options are kept."""
        self.progress = 0
        self.active = False
        self.ended = False
        self.started = False
        self._start_pending = False
        self.absolute_start = None
        self.absolute_end = None
        self.absolute_current = None
        return self

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id}, leds={self.leds}, "
            f"duration={self.duration}, progress={self.progress})"
        )
