"""
Models package - enums, errors, easing, validation and config models
"""

from .enums import AnimationType, ShiftDirection, RunnerState, LogLevel, LogCategory
from .errors import AnimationError, ConfigurationError, ValidationError, RuntimeRenderError, SinkError
from .easing import EASINGS, get_easing

__all__ = [
    'AnimationType',
    'ShiftDirection',
    'RunnerState',
    'LogLevel',
    'LogCategory',
    'AnimationError',
    'ConfigurationError',
    'ValidationError',
    'RuntimeRenderError',
    'SinkError',
    'EASINGS',
    'get_easing',
]
