"""
Fade Out Animation

Fades channels from their start brightness down to `end`. The start is the
explicit `start` option when given, otherwise each channel's brightness in
the sink at the moment the fade begins.
"""

from typing import Dict

from animations.base import BRIGHTNESS_RANGE, TimelineAnimation
from models.validation import Range, ValidationRules


class FadeOut(TimelineAnimation):
    """
    Options:
    - end: int[0-4095] target brightness
    - start: int[0-4095] optional, snapshot from sink when omitted
    - duration: ms
    - leds: channels to fade
    """

    RULES = ValidationRules(
        required=["end", "duration", "leds"],
        types={"start": "number", "end": "number", "duration": "number", "leds": "array"},
        ranges={"start": BRIGHTNESS_RANGE, "end": BRIGHTNESS_RANGE, "duration": Range(min=0)},
    )

    def __init__(self, options, sink=None):
        super().__init__(options, sink)
        self.start_brightness: Dict[int, float] = {}

    def requires_sink(self) -> bool:
        return self.options.get("start") is None

    def on_start(self) -> None:
        start = self.options.get("start")
        for led in self.options["leds"]:
            self.start_brightness[led] = start if start is not None else self.sink.get_brightness(led)

    def render_frame(self, fraction: float) -> Dict[int, float]:
        end = self.options["end"]
        return {
            led: begin + (end - begin) * fraction
            for led, begin in self.start_brightness.items()
        }

    def reset(self):
        self.start_brightness = {}
        return super().reset()
