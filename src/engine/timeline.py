"""
Timeline — ordered schedule of animation primitives at millisecond offsets.

Usage:
    line = (Timeline()
        .add(0, FadeIn(options))
        .add(500, FadeOut(options))
        .set_start_time(now_ms))
    # time elapses
    line.set_current_position(now_ms)
    active = line.get_active_items()

Timelines are rebuilt, not edited mid-flight: there is no removal.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from models.errors import ConfigurationError
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from animations.base import TimelineAnimation

log = get_logger().for_category(LogCategory.TIMELINE)


class Timeline:
    """
    Mapping offset (ms) → primitives scheduled at that offset.

    Same-offset entries keep insertion order; iteration always walks
    offsets in ascending numeric order.
    """

    def __init__(self) -> None:
        self.queue: Dict[int, List["TimelineAnimation"]] = {}
        self.start_time: Optional[float] = None
        self.current_position: Optional[float] = None
        self.duration: float = 0
        self.diff: float = 0

    def add(self, offset: int, animation: "TimelineAnimation") -> "Timeline":
        """
        Schedule a primitive at a fixed offset on the timeline.

        Args:
            offset: ms from timeline start
            animation: TimelineAnimation instance

        Returns:
            self (fluent)
        """
        if offset < 0:
            raise ConfigurationError(f"Timeline offset must be >= 0, got {offset}", field="at")

        offset = int(offset)
        self.queue.setdefault(offset, []).append(animation.set_relative_position(offset))
        self.duration = max(self.duration, offset + animation.duration)

        log.debug("Timeline item added", offset=offset, item=repr(animation), duration=self.duration)
        return self

    def _iter_items(self) -> Iterator["TimelineAnimation"]:
        for offset in sorted(self.queue):
            yield from self.queue[offset]

    def get_all_items(self) -> List["TimelineAnimation"]:
        return list(self._iter_items())

    def get_channels(self) -> List[int]:
        """Every channel touched by any primitive, in first-seen order."""
        channels: List[int] = []
        for item in self._iter_items():
            for led in item.leds:
                if led not in channels:
                    channels.append(led)
        return channels

    def set_start_time(self, time: float) -> "Timeline":
        """Anchor all primitives to an absolute start timestamp (ms)."""
        self.start_time = time
        for item in self._iter_items():
            item.set_absolute_position(time)
        return self

    def set_current_position(self, time: float) -> "Timeline":
        """Advance every primitive to absolute time `time` (ms)."""
        self.current_position = time
        self.diff = time - self.start_time if self.start_time is not None else 0
        for item in self._iter_items():
            item.set_current_position(time)
        return self

    def get_active_items(self) -> List["TimelineAnimation"]:
        """Primitives that must be rendered this tick, offset ascending."""
        return [item for item in self._iter_items() if item.active]

    def reset(self) -> None:
        self.start_time = None
        self.current_position = None
        self.diff = 0
        for item in self._iter_items():
            item.reset()

    def __len__(self) -> int:
        return sum(len(items) for items in self.queue.values())
