"""
Hardware Layer

Low-level output handling only:

- Brightness sink contract (IBrightnessSink)
- In-memory sink for tests/previews (VirtualBrightnessSink)
- Channel → PWM driver pin mapping (PinMapper)
- PWM driver contract + virtual driver (IPwmDriver, VirtualPwmDriver)
"""
from .pwm import (
    IBrightnessSink,
    MAX_BRIGHTNESS,
    VirtualBrightnessSink,
    IPwmDriver,
    VirtualPwmDriver,
    PinMapper,
    MappedPin,
)

__all__ = [
    "IBrightnessSink",
    "MAX_BRIGHTNESS",
    "VirtualBrightnessSink",
    "IPwmDriver",
    "VirtualPwmDriver",
    "PinMapper",
    "MappedPin",
]
