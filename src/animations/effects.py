"""
Effect presets and the demo show

EFFECT_PRESETS are ready-made option sets for the primitives, keyed by the
names used in the web UI. create_demo_animation() chains them (plus a few
sequences and shifts) into the looping demo that exercises every
primitive on an 18-step staircase.
"""

from typing import Any, Dict

from animations.fade_in import FadeIn
from animations.fade_out import FadeOut
from animations.fade_to import FadeTo
from animations.sequence import Sequence
from animations.shifting import Shifting
from engine.ledstrip_animation import LedstripAnimation
from hardware.pwm.brightness_sink import IBrightnessSink

ALL_STEPS = list(range(18))
EVEN_STEPS = [2, 4, 6, 8, 10, 12, 14, 16]
ODD_STEPS = [1, 3, 5, 6, 7, 11, 13, 15, 17]

EFFECT_PRESETS: Dict[str, Dict[str, Any]] = {
    "fadeIn250": {"start": 0, "end": 200, "duration": 250, "leds": ALL_STEPS},
    "fadeOut250": {"start": 200, "end": 0, "duration": 250, "leds": ALL_STEPS},
    "fadeInHalf500": {"start": 0, "end": 500, "duration": 500, "leds": EVEN_STEPS},
    "fadeOutHalf500": {"start": 500, "end": 0, "duration": 500, "leds": EVEN_STEPS},
    "fadeInOtherHalf500": {"start": 0, "end": 500, "duration": 500, "leds": ODD_STEPS},
    "fadeOutOtherHalf500": {"start": 500, "end": 0, "duration": 500, "leds": ODD_STEPS},
    "sequenceOn1000": {"brightness": 2000, "duration": 1000, "leds": [1, 2, 3, 4, 5]},
    "shiftRight5Pins1000": {"direction": "down", "duration": 1000, "shifts": 5, "leds": [10, 11, 12, 13, 14, 15]},
}


def create_demo_animation(sink: IBrightnessSink, **runner_options) -> LedstripAnimation:
    """
    Build the looping demo show (about 25.5s per cycle).

    Args:
        sink: Brightness sink with at least 18 channels
        runner_options: Extra LedstripAnimation keyword arguments (tick_source, clock, easing)
    """
    fade_in_250 = FadeIn(EFFECT_PRESETS["fadeIn250"])
    fade_out_250 = FadeOut(EFFECT_PRESETS["fadeOut250"])
    fade_in_half_500 = FadeIn(EFFECT_PRESETS["fadeInHalf500"])
    fade_out_half_500 = FadeOut(EFFECT_PRESETS["fadeOutHalf500"])
    fade_in_other_half_500 = FadeIn(EFFECT_PRESETS["fadeInOtherHalf500"])
    fade_out_other_half_500 = FadeOut(EFFECT_PRESETS["fadeOutOtherHalf500"])

    # fade steps 1-5 one by one over 1000ms
    sequence_on_1000 = Sequence(EFFECT_PRESETS["sequenceOn1000"], sink=sink)

    # shift the current pattern of steps 10-15 down 5 times over 1000ms
    shift_right_5_pins_1000 = Shifting(EFFECT_PRESETS["shiftRight5Pins1000"], sink=sink)

    runner_options.setdefault("loop_infinite", True)
    return (LedstripAnimation(sink, **runner_options)
        .add(0, fade_in_250.clone())
        .add(300, fade_out_250.clone())

        .add(600, fade_in_half_500.clone())
        .add(1100, fade_out_half_500.clone())
        .add(1100, fade_in_other_half_500.clone())
        .add(1600, fade_out_other_half_500.clone())
        .add(1600, fade_in_half_500.clone())

        .add(2500, sequence_on_1000.clone())
        .add(2500, shift_right_5_pins_1000.clone())

        # almost off, step by step
        .add(3500, Sequence({"brightness": 20, "duration": 1000, "leds": ALL_STEPS}, sink=sink))

        # everything from its current brightness to zero
        .add(5000, FadeTo({"brightness": 0, "duration": 1000, "leds": ALL_STEPS}, sink=sink))
        .add(7700, fade_in_half_500.clone())
        .add(7700, fade_out_other_half_500.clone())
        .add(8000, fade_out_half_500.clone())
        .add(9000, Sequence({"brightness": 4000, "duration": 2000, "leds": [1, 3, 5, 7, 9, 11, 13, 15, 17]}, sink=sink))
        .add(11000, Sequence({"brightness": 0, "duration": 500, "leds": ALL_STEPS}, sink=sink))
        .add(12000, FadeIn({"start": 0, "end": 4000, "duration": 200, "leds": [1]}))
        .add(12500, Shifting({"duration": 3000, "leds": ALL_STEPS, "shifts": 27}, sink=sink))
        .add(15500, Shifting({"duration": 10000, "leds": ALL_STEPS, "shifts": 180, "direction": "down"}, sink=sink)))
