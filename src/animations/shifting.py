"""
Shifting Animation

Rotates the current brightness pattern of `leds` along the stairs.

At start the brightness of every channel is captured. For each of `shifts`
iterations the pattern is rotated by one position and every channel fades
(FadeTo) to the value its neighbour had, each iteration taking
duration / shifts ms:

    up:   channel i takes channel i+1's value, the last takes the first's
    down: channel i takes channel i-1's value, the first takes the last's

With `bouncing`, the direction flips after every `bounceAfter` iterations.
"""

from typing import Dict, List, Optional

from animations.base import TimelineAnimation
from animations.fade_to import FadeTo
from engine.timeline import Timeline
from models.enums import ShiftDirection
from models.validation import Range, ValidationRules


def shift(values: List[float], direction: ShiftDirection) -> List[float]:
    """Rotate a brightness vector by one position."""
    if direction == ShiftDirection.UP:
        return values[1:] + values[:1]
    return values[-1:] + values[:-1]


class Shifting(TimelineAnimation):

    RULES = ValidationRules(
        required=["shifts", "duration", "leds"],
        types={
            "shifts": "number",
            "duration": "number",
            "leds": "array",
            "direction": "string",
            "bouncing": "boolean",
            "bounceAfter": "number",
        },
        ranges={
            "shifts": Range(min=1),
            "duration": Range(min=0),
            "leds": Range(min_length=2),
            "bounceAfter": Range(min=1),
        },
        enums={"direction": [d.value for d in ShiftDirection]},
    )
    REQUIRES_SINK = True

    def __init__(self, options, sink=None):
        super().__init__(options, sink)
        self.direction = ShiftDirection(self.options.get("direction") or ShiftDirection.UP.value)
        self.bouncing = bool(self.options.get("bouncing", False))
        self.bounce_after = int(self.options.get("bounceAfter") or len(self.options["leds"]))
        self.shifts = int(self.options["shifts"])
        self.brightnesses: List[float] = []
        self.timeline: Optional[Timeline] = None

    def on_start(self) -> None:
        leds = self.options["leds"]
        self.brightnesses = [self.sink.get_brightness(led) for led in leds]
        self.timeline = self.build_timeline(self.brightnesses)
        self.timeline.set_start_time(self.absolute_start)

    def build_timeline(self, initial: List[float]) -> Timeline:
        """
        Schedule one FadeTo per channel per iteration, starting from `initial`.

        Each FadeTo starts from the previous iteration's target rather than
        the sink, which has not received that target yet when an iteration
        boundary falls inside a tick.
        """
        timeline = Timeline()
        leds = self.options["leds"]
        step = self.duration / self.shifts
        direction = self.direction
        states = list(initial)

        for i in range(self.shifts):
            targets = shift(states, direction)
            for led, begin, target in zip(leds, states, targets):
                timeline.add(
                    round(i * step),
                    FadeTo({"brightness": target, "start": begin, "duration": step, "leds": [led]}, sink=self.sink),
                )
            states = targets
            if self.bouncing and (i + 1) % self.bounce_after == 0:
                direction = direction.flipped()

        return timeline

    def render_frame(self, fraction: float) -> Dict[int, float]:
        output: Dict[int, float] = {}
        if self.timeline is None:
            return output
        self.timeline.set_current_position(self.time_at(fraction))
        for item in self.timeline.get_active_items():
            output.update(item.render())
        return output

    def reset(self):
        self.timeline = None
        self.brightnesses = []
        return super().reset()
