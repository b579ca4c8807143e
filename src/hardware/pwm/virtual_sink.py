from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional, Set

from hardware.pwm.brightness_sink import IBrightnessSink, clamp_brightness

ChangeHook = Callable[[Dict[int, int]], None]


class VirtualBrightnessSink(IBrightnessSink):
    """
    In-memory brightness sink.

    Used for tests, previews and development machines without PWM hardware.
    Hooks are called with a copy of the full brightness state after every
    change.
    """

    def __init__(self, channels: Optional[Iterable[int]] = None):
        self._known: List[int] = list(channels or [])
        self._brightness: Dict[int, int] = {}
        self._hooks: Set[ChangeHook] = set()

    def set_brightness(self, channel: int, value: int) -> None:
        value = clamp_brightness(value)
        if channel not in self._known:
            self._known.append(channel)
        if self._brightness.get(channel) == value:
            return
        self._brightness[channel] = value
        self._notify()

    def get_brightness(self, channel: int) -> int:
        return self._brightness.get(channel, 0)

    def set_all_brightness(self, value: int) -> None:
        for channel in self.channels():
            self.set_brightness(channel, value)

    def channels(self) -> List[int]:
        return list(self._known)

    def snapshot(self) -> Dict[int, int]:
        return {channel: self.get_brightness(channel) for channel in self._known}

    def add_hook(self, hook: ChangeHook) -> None:
        self._hooks.add(hook)

    def remove_hook(self, hook: ChangeHook) -> None:
        self._hooks.discard(hook)

    def _notify(self) -> None:
        state = self.snapshot()
        for hook in list(self._hooks):
            hook(state)
