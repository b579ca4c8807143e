from .brightness_sink import IBrightnessSink, MIN_BRIGHTNESS, MAX_BRIGHTNESS, clamp_brightness
from .virtual_sink import VirtualBrightnessSink
from .pwm_driver import IPwmDriver, VirtualPwmDriver
from .pin_mapper import PinMapper, MappedPin

__all__ = [
    "IBrightnessSink",
    "MIN_BRIGHTNESS",
    "MAX_BRIGHTNESS",
    "clamp_brightness",
    "VirtualBrightnessSink",
    "IPwmDriver",
    "VirtualPwmDriver",
    "PinMapper",
    "MappedPin",
]
