import pytest

from engine.tick_source import ManualTickSource
from hardware.pwm import VirtualBrightnessSink


class FakeClock:
    """Settable millisecond clock for the runner"""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def ticks():
    return ManualTickSource()


@pytest.fixture
def sink():
    """Virtual sink with 6 known channels, all at 0."""
    return VirtualBrightnessSink(channels=range(6))
