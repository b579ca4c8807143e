"""
Enums for the stair animation engine
"""

from enum import Enum, auto


class AnimationType(Enum):
    """Animation primitive identifiers (names as used in animation files)"""
    FADE_IN = "FadeIn"
    FADE_OUT = "FadeOut"
    FADE_TO = "FadeTo"
    IMMEDIATE = "Immediate"
    SEQUENCE = "Sequence"
    SHIFTING = "Shifting"


class ShiftDirection(Enum):
    """Rotation direction for the Shifting primitive"""
    UP = "up"       # each channel takes the next channel's value
    DOWN = "down"   # each channel takes the previous channel's value

    def flipped(self) -> "ShiftDirection":
        return ShiftDirection.DOWN if self == ShiftDirection.UP else ShiftDirection.UP


class RunnerState(Enum):
    """LedstripAnimation lifecycle"""
    STOPPED = auto()
    RUNNING = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # Sinks, pin mapping, PWM drivers
    ANIMATION = auto()   # Primitive construction, animation files
    TIMELINE = auto()    # Timeline scheduling
    ENGINE = auto()      # Runner start/stop/tick
    SYSTEM = auto()      # Startup, shutdown, errors
