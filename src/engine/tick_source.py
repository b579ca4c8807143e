"""
Tick sources — how LedstripAnimation schedules its next tick.

The runner never sleeps or loops by itself: after every tick it asks a
tick source to call it again. Production code uses the asyncio event loop
("run again as soon as possible, yielding to other pending work"); tests
use ManualTickSource and fire ticks by hand.
"""

import asyncio
import time
from typing import Callable, Optional, Protocol

TickCallback = Callable[[], None]


def monotonic_ms() -> float:
    """Default engine clock: monotonic milliseconds."""
    return time.monotonic() * 1000


class ITickSource(Protocol):

    def schedule_next(self, callback: TickCallback) -> None:
        """Run callback once, later. Replaces any pending callback."""
        ...

    def cancel(self) -> None:
        """Drop the pending callback, if any. No callback runs after this returns."""
        ...


class AsyncioTickSource(ITickSource):
    """
    Schedules ticks on an asyncio event loop.

    interval_ms == 0 → loop.call_soon (zero-delay yield, smoothest output,
    keeps one core busy); interval_ms > 0 → loop.call_later.
    """

    def __init__(self, interval_ms: float = 0.0, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.interval_ms = max(0.0, interval_ms)
        self._loop = loop
        self._handle: Optional[asyncio.Handle] = None

    def schedule_next(self, callback: TickCallback) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()

        def run() -> None:
            self._handle = None
            callback()

        if self.interval_ms > 0:
            self._handle = loop.call_later(self.interval_ms / 1000, run)
        else:
            self._handle = loop.call_soon(run)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None


class ManualTickSource(ITickSource):
    """Holds the pending tick until fire() is called. For deterministic tests."""

    def __init__(self):
        self._pending: Optional[TickCallback] = None
        self.scheduled = 0

    def schedule_next(self, callback: TickCallback) -> None:
        self._pending = callback
        self.scheduled += 1

    def cancel(self) -> None:
        self._pending = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def fire(self) -> bool:
        """Run the pending tick. Returns False when nothing was scheduled."""
        callback = self._pending
        if callback is None:
            return False
        self._pending = None
        callback()
        return True
