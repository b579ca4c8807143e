# hardware/pwm/brightness_sink.py
"""
IBrightnessSink Protocol
========================
The only I/O boundary of the animation engine.
Maps integer channels to 12-bit PWM brightness (0..4095).
"""

from __future__ import annotations
from typing import Protocol

MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 4095


def clamp_brightness(value: float) -> int:
    """Round and clamp a brightness into the 12-bit PWM range."""
    return max(MIN_BRIGHTNESS, min(MAX_BRIGHTNESS, int(round(value))))


class IBrightnessSink(Protocol):
    """
    Protocol defining the brightness sink contract.

    All implementations must provide:
    - set_brightness: idempotent write, clamps out-of-range input
    - get_brightness: last written value, 0 for unset channels

    Both are expected to be synchronous and fast (in-memory map or a
    single hardware register write).
    """

    def set_brightness(self, channel: int, value: int) -> None:
        ...

    def get_brightness(self, channel: int) -> int:
        ...
