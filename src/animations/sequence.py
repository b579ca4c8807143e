"""
Sequence Animation

Fades the channels in `leds` to `brightness` one after another instead of
all at once. Internally a sub-Timeline holds one FadeTo per channel, each
taking duration / len(leds) and starting where the previous one ends.
"""

from typing import Dict

from animations.base import BRIGHTNESS_RANGE, TimelineAnimation
from animations.fade_to import FadeTo
from engine.timeline import Timeline
from models.validation import Range, ValidationRules


class Sequence(TimelineAnimation):
    """
    Options:
    - brightness: int[0-4095] target brightness
    - duration: ms for the whole sequence
    - leds: channels, faded in list order
    Requires a sink (each step snapshots its channel when it begins).
    """

    RULES = ValidationRules(
        required=["brightness", "duration", "leds"],
        types={"brightness": "number", "duration": "number", "leds": "array"},
        ranges={"brightness": BRIGHTNESS_RANGE, "duration": Range(min=0), "leds": Range(min_length=1)},
    )
    REQUIRES_SINK = True

    def __init__(self, options, sink=None):
        super().__init__(options, sink)
        self.timeline = Timeline()

        leds = self.options["leds"]
        step = self.duration / len(leds)
        fade_to = FadeTo(
            {"brightness": self.options["brightness"], "duration": step, "leds": leds},
            sink=self.sink,
        )
        for i, led in enumerate(leds):
            self.timeline.add(round(i * step), fade_to.clone(leds=[led]))

    def set_absolute_position(self, timeline_start: float):
        super().set_absolute_position(timeline_start)
        # sub-timeline is anchored to this primitive's own start
        self.timeline.set_start_time(self.absolute_start)
        return self

    def render_frame(self, fraction: float) -> Dict[int, float]:
        output: Dict[int, float] = {}
        # eased fraction drives the sub-timeline clock
        self.timeline.set_current_position(self.time_at(fraction))
        for item in self.timeline.get_active_items():
            output.update(item.render())
        return output

    def reset(self):
        self.timeline.reset()
        return super().reset()
