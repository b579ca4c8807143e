"""
Error taxonomy for the animation engine

ConfigurationError  - fatal, raised before an animation is placed/started
ValidationError     - ConfigurationError naming the offending field and rule
RuntimeRenderError  - per-tick, logged by the runner, never propagated
SinkError           - raised by brightness sinks, logged by the runner
"""

from typing import Optional


class AnimationError(Exception):
    """Base class for all engine errors"""


class ConfigurationError(AnimationError):
    """Invalid animation/engine configuration. Caller must fix config before retry."""

    def __init__(self, message: str, field: Optional[str] = None, index: Optional[int] = None):
        super().__init__(message)
        self.field = field
        self.index = index


class ValidationError(ConfigurationError):
    """A single option rule was violated"""

    def __init__(self, field: str, constraint: str):
        super().__init__(f"'{field}' {constraint}", field=field)
        self.constraint = constraint


class RuntimeRenderError(AnimationError):
    """A primitive rendered a value that cannot be written to the sink"""

    def __init__(self, primitive: str, channel: int, value: object):
        super().__init__(f"{primitive} rendered invalid brightness {value!r} for channel {channel}")
        self.primitive = primitive
        self.channel = channel
        self.value = value


class SinkError(AnimationError):
    """Brightness sink could not read or write a channel"""
