from .timeline import Timeline
from .tick_source import ITickSource, AsyncioTickSource, ManualTickSource, monotonic_ms
from .ledstrip_animation import LedstripAnimation

__all__ = [
    "Timeline",
    "ITickSource",
    "AsyncioTickSource",
    "ManualTickSource",
    "monotonic_ms",
    "LedstripAnimation",
]
