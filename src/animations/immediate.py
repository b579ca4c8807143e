"""
Immediate Animation

Sets channels to the target brightness without a fade. Lasts a nominal
50ms so it can sit on a timeline, and emits its output exactly once.
"""

from typing import Dict

from animations.base import BRIGHTNESS_RANGE, TimelineAnimation
from models.validation import Range, ValidationRules

IMMEDIATE_DURATION_MS = 50


class Immediate(TimelineAnimation):

    RULES = ValidationRules(
        required=["brightness", "leds"],
        types={"brightness": "number", "duration": "number", "leds": "array"},
        ranges={"brightness": BRIGHTNESS_RANGE, "duration": Range(min=0)},
    )

    def __init__(self, options, sink=None):
        super().__init__(options, sink)
        self.done = False

    def calculate_duration(self) -> float:
        return IMMEDIATE_DURATION_MS

    def render_frame(self, fraction: float) -> Dict[int, float]:
        if self.done:
            return {}
        self.done = True
        brightness = self.options["brightness"]
        return {led: brightness for led in self.options["leds"]}

    def reset(self):
        self.done = False
        return super().reset()
