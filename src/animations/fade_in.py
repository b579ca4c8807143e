"""
Fade In Animation

Fades every channel in `leds` from `start` to `end` brightness along the
same curve.
"""

from typing import Dict

from animations.base import BRIGHTNESS_RANGE, TimelineAnimation
from models.validation import Range, ValidationRules


class FadeIn(TimelineAnimation):
    """
    Options:
    - start: int[0-4095] start brightness
    - end: int[0-4095] end brightness
    - duration: ms
    - leds: channels to fade
    """

    RULES = ValidationRules(
        required=["start", "end", "duration", "leds"],
        types={"start": "number", "end": "number", "duration": "number", "leds": "array"},
        ranges={"start": BRIGHTNESS_RANGE, "end": BRIGHTNESS_RANGE, "duration": Range(min=0)},
    )

    def render_frame(self, fraction: float) -> Dict[int, float]:
        start = self.options["start"]
        end = self.options["end"]
        value = start + (end - start) * fraction
        return {led: value for led in self.options["leds"]}
