"""
LedstripAnimation — runs a Timeline against a brightness sink.

Main loop (one tick):
  - advance the timeline to the current time
  - fetch active primitives
  - render each (with eased progress) and write its channels to the sink
  - notify hooks
  - stop (and optionally restart) once the timeline duration has elapsed,
    otherwise ask the tick source for the next tick

Ticks never overlap: tick N+1 is scheduled only at the end of tick N.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Iterable, List, Optional, Union

from animations.base import TimelineAnimation
from engine.tick_source import AsyncioTickSource, ITickSource, monotonic_ms
from engine.timeline import Timeline
from hardware.pwm.brightness_sink import IBrightnessSink
from models.easing import EasingFunction, get_easing
from models.enums import RunnerState
from models.errors import RuntimeRenderError
from models.validation import is_number
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ENGINE)

Hook = Callable[[List[TimelineAnimation], "LedstripAnimation"], None]


class LedstripAnimation:
    """
    Timeline runner: fades PWM-driven led strips through an IBrightnessSink.

    Example:
        animation = (LedstripAnimation(mapper, loop_infinite=True)
            .add(0, FadeIn({"start": 0, "end": 4095, "duration": 500, "leds": [0, 1]}))
            .add(500, FadeOut({"end": 0, "duration": 500, "leds": [0, 1]}, sink=mapper)))
        animation.start()
        ...
        animation.stop()
    """

    def __init__(
        self,
        sink: IBrightnessSink,
        timeline: Optional[Timeline] = None,
        *,
        easing: Union[str, EasingFunction, None] = None,
        loop_infinite: bool = False,
        tick_source: Optional[ITickSource] = None,
        clock: Optional[Callable[[], float]] = None,
        channels: Optional[Iterable[int]] = None,
        tick_interval_ms: float = 0.0,
    ):
        """
        Args:
            sink: Brightness sink receiving every rendered value
            timeline: Timeline to run (a new empty one by default)
            easing: Easing name or function applied to each primitive's progress
            loop_infinite: Restart with a fresh start time after every cycle
            tick_source: Scheduler for subsequent ticks (asyncio call_soon by default)
            clock: Millisecond clock (monotonic by default)
            channels: Channels blacked out on stop (timeline channels by default)
            tick_interval_ms: Delay between ticks for the default asyncio tick source
        """
        self.sink = sink
        self.timeline = timeline if timeline is not None else Timeline()
        self.easing: EasingFunction = get_easing(easing)
        self.loop_infinite = loop_infinite
        self.tick_source: ITickSource = tick_source or AsyncioTickSource(tick_interval_ms)
        self.clock = clock or monotonic_ms
        self._channels = list(channels) if channels is not None else None

        self.started = False
        self.start_time: Optional[float] = None
        self.current_time: Optional[float] = None
        self.hooks: List[Hook] = []

        # counters for diagnostics
        self.cycles = 0
        self.ticks = 0
        self.dropped_values = 0

    # ============================================================
    # Configuration
    # ============================================================

    def add(self, offset: int, animation: TimelineAnimation) -> "LedstripAnimation":
        """Schedule a primitive on the internal timeline (fluent)."""
        self.timeline.add(offset, animation)
        return self

    def add_hook(self, hook: Hook) -> "LedstripAnimation":
        """Register an observer called after every tick with (active_items, runner)."""
        self.hooks.append(hook)
        return self

    def remove_hook(self, hook: Hook) -> "LedstripAnimation":
        if hook in self.hooks:
            self.hooks.remove(hook)
        return self

    def set_easing_function(self, easing: Union[str, EasingFunction, None]) -> "LedstripAnimation":
        self.easing = get_easing(easing)
        return self

    def channels(self) -> List[int]:
        if self._channels is not None:
            return list(self._channels)
        return self.timeline.get_channels()

    @property
    def state(self) -> RunnerState:
        return RunnerState.RUNNING if self.started else RunnerState.STOPPED

    def is_running(self) -> bool:
        return self.started

    # ============================================================
    # Control
    # ============================================================

    def start(self, at_time: Optional[float] = None) -> "LedstripAnimation":
        """
        Start the animation.

        - marks the runner started
        - start time = `at_time` (ms, past or future allowed) or now
        - anchors the timeline and runs the first tick synchronously

        Starting an already running animation restarts it without blackout.
        """
        if self.started:
            self.tick_source.cancel()
            self.timeline.reset()

        self._begin_cycle(at_time)
        self._tick()
        return self

    def stop(self) -> "LedstripAnimation":
        """
        Stop the animation: cancel the pending tick, reset the timeline and
        set every channel to 0. No-op when already stopped.
        """
        if not self.started:
            return self

        self.started = False
        self.tick_source.cancel()
        self.timeline.reset()
        self._blackout()

        log.info("Animation stopped", cycles=self.cycles, ticks=self.ticks)
        return self

    async def wait_until_stopped(self, poll_interval: float = 0.01) -> None:
        """Wait until the runner stops (end of a non-looping cycle or stop())."""
        while self.started:
            await asyncio.sleep(poll_interval)

    # ============================================================
    # Internal loop
    # ============================================================

    def _begin_cycle(self, at_time: Optional[float]) -> None:
        self.started = True
        self.start_time = self.clock() if at_time is None else at_time
        self.timeline.set_start_time(self.start_time)
        self.cycles += 1

        log.info(
            "Animation started",
            cycle=self.cycles,
            items=len(self.timeline),
            duration_ms=self.timeline.duration,
            loop=self.loop_infinite,
        )

    def _tick(self) -> None:
        self.ticks += 1
        self.current_time = self.clock()
        self.timeline.set_current_position(self.current_time)

        items = self.timeline.get_active_items()
        for item in items:
            self._render_item(item)

        self._run_hooks(items)

        if not self.started:
            # stopped from a hook
            return

        if self.current_time >= self.start_time + self.timeline.duration:
            self.stop()
            if self.loop_infinite:
                # fresh cycle; first tick goes through the tick source so a
                # zero-length timeline cannot recurse
                self._begin_cycle(None)
                self.tick_source.schedule_next(self._tick)
            return

        self.tick_source.schedule_next(self._tick)

    def _render_item(self, item: TimelineAnimation) -> None:
        try:
            output = item.render(self.easing(item.progress / 100))
        except Exception as ex:
            log.error("Render failed, skipping item", item=repr(item), error=str(ex), error_type=type(ex).__name__)
            return

        for channel, value in output.items():
            if not is_number(value):
                self.dropped_values += 1
                err = RuntimeRenderError(type(item).__name__, channel, value)
                log.warn("Dropped render value", error=str(err), item=item.id)
                continue
            self._write(channel, round(value))

    def _write(self, channel: int, value: int) -> None:
        try:
            self.sink.set_brightness(channel, value)
        except Exception as ex:
            log.error("Sink write failed", channel=channel, value=value, error=str(ex), error_type=type(ex).__name__)

    def _blackout(self) -> None:
        for channel in self.channels():
            self._write(channel, 0)

    def _run_hooks(self, items: List[TimelineAnimation]) -> None:
        for hook in list(self.hooks):
            try:
                hook(items, self)
            except Exception as ex:
                log.error("Animation hook failed", hook=getattr(hook, "__name__", repr(hook)), error=str(ex))
