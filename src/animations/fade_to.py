"""
Fade To Animation

Fades each channel from its own current brightness to a common target.
Channels starting at different levels move at different rates but arrive
together.
"""

from typing import Dict

from animations.base import BRIGHTNESS_RANGE, TimelineAnimation
from models.validation import Range, ValidationRules


class FadeTo(TimelineAnimation):
    """
    Options:
    - brightness: int[0-4095] target brightness
    - start: int[0-4095] optional, snapshot from sink when omitted
    - duration: ms
    - leds: channels to fade
    Requires a sink to read the current brightness from, unless `start` is given.
    """

    RULES = ValidationRules(
        required=["brightness", "duration", "leds"],
        types={"brightness": "number", "start": "number", "duration": "number", "leds": "array"},
        ranges={"brightness": BRIGHTNESS_RANGE, "start": BRIGHTNESS_RANGE, "duration": Range(min=0)},
    )

    def __init__(self, options, sink=None):
        super().__init__(options, sink)
        self.brightnesses: Dict[int, float] = {}

    def requires_sink(self) -> bool:
        return self.options.get("start") is None

    def on_start(self) -> None:
        start = self.options.get("start")
        for led in self.options["leds"]:
            self.brightnesses[led] = start if start is not None else self.sink.get_brightness(led)

    def render_frame(self, fraction: float) -> Dict[int, float]:
        target = self.options["brightness"]
        return {
            led: start + (target - start) * fraction
            for led, start in self.brightnesses.items()
        }

    def reset(self):
        self.brightnesses = {}
        return super().reset()
