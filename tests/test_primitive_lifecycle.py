"""
Lifecycle of a single primitive: positioning, progress, active/ended flags
and reset. Driven directly, without Timeline or runner.
"""

import pytest

from animations import FadeIn, Immediate
from animations.base import TimelineAnimation
from models.errors import ConfigurationError


def fade_in(duration=100, leds=(0,)):
    return FadeIn({"start": 0, "end": 4095, "duration": duration, "leds": list(leds)})


class CountingStart(TimelineAnimation):
    """Primitive that records on_start() calls and renders its progress"""

    def __init__(self, options, sink=None):
        super().__init__(options, sink)
        self.start_calls = 0

    def on_start(self):
        self.start_calls += 1

    def render_frame(self, fraction):
        return {led: fraction for led in self.leds}


class TestPositioning:
    """Absolute window derived from timeline start + relative offset."""

    def test_absolute_window(self):
        """absolute_start = timeline start + offset, absolute_end = start + duration."""
        item = fade_in(duration=250).set_relative_position(100)
        item.set_absolute_position(1000)

        assert item.absolute_start == 1100
        assert item.absolute_end == 1350

    def test_unpositioned_is_inactive(self):
        """set_current_position before set_absolute_position leaves it inactive."""
        item = fade_in()
        item.set_current_position(5000)

        assert item.active is False
        assert item.progress == 0
        assert item.render() == {}

    def test_before_window_is_inactive(self):
        """Ticks before absolute_start keep progress at 0."""
        item = fade_in().set_relative_position(500)
        item.set_absolute_position(0)
        item.set_current_position(499)

        assert item.active is False
        assert item.started is False
        assert item.progress == 0


class TestProgress:
    """Progress percentage and the ended flag."""

    def test_progress_is_integer_percentage(self):
        """Progress is the rounded share of elapsed duration."""
        item = fade_in(duration=300)
        item.set_absolute_position(0)
        item.set_current_position(100)

        assert item.progress == 33
        assert isinstance(item.progress, int)

    def test_progress_monotonic(self):
        """Non-decreasing time never decreases progress."""
        item = fade_in(duration=1000)
        item.set_absolute_position(0)

        seen = []
        for now in [0, 0, 10, 250, 250, 499, 500, 999, 1000, 1001, 5000]:
            item.set_current_position(now)
            seen.append(item.progress)

        assert seen == sorted(seen)
        assert seen[-1] == 100

    def test_end_boundary_is_inclusive(self):
        """now == absolute_end gives progress 100 and ended."""
        item = fade_in(duration=100)
        item.set_absolute_position(0)
        item.set_current_position(100)

        assert item.progress == 100
        assert item.ended is True
        assert item.active is True

    def test_completion_closure(self):
        """absolute_end then absolute_end + 1 both leave progress 100 and ended."""
        item = fade_in(duration=100)
        item.set_absolute_position(0)

        item.set_current_position(item.absolute_end)
        assert (item.progress, item.ended) == (100, True)

        item.set_current_position(item.absolute_end + 1)
        assert (item.progress, item.ended) == (100, True)
        assert item.active is False

    def test_late_tick_still_renders_final_frame(self):
        """An active primitive whose end is overshot renders its 100% frame once."""
        item = fade_in(duration=100)
        item.set_absolute_position(0)
        item.set_current_position(50)
        item.set_current_position(170)

        assert item.active is True
        assert item.ended is True
        assert item.render() == {0: 4095}

        item.set_current_position(200)
        assert item.active is False

    def test_window_skipped_between_ticks(self):
        """A window passed between two ticks renders its 100% frame once."""
        item = fade_in(duration=100).set_relative_position(100)
        item.set_absolute_position(0)
        item.set_current_position(50)
        assert item.active is False

        item.set_current_position(300)
        assert item.active is True
        assert item.ended is True
        assert item.progress == 100
        assert item.render() == {0: 4095}

        item.set_current_position(350)
        assert item.active is False
        assert item.progress == 100

    def test_skipped_window_fires_on_start(self):
        """on_start() still runs for a window that was never observed inside."""
        item = CountingStart({"duration": 10, "leds": [1]}).set_relative_position(100)
        item.set_absolute_position(0)
        item.set_current_position(500)

        assert item.render() == {1: 1.0}
        assert item.start_calls == 1

    def test_zero_duration_ends_immediately(self):
        """duration 0: progress 100 on the first tick inside the window."""
        item = fade_in(duration=0)
        item.set_absolute_position(0)
        item.set_current_position(0)

        assert item.progress == 100
        assert item.ended is True
        assert item.render() == {0: 4095}


class TestOnStart:
    """on_start() fires once per cycle, on first render."""

    def test_on_start_once(self):
        """Multiple ticks in the window fire on_start() exactly once."""
        item = CountingStart({"duration": 100, "leds": [1]})
        item.set_absolute_position(0)

        for now in (0, 30, 60, 100):
            item.set_current_position(now)
            item.render()

        assert item.start_calls == 1

    def test_on_start_again_after_reset(self):
        """reset() starts a new cycle with a fresh on_start()."""
        item = CountingStart({"duration": 100, "leds": [1]})
        item.set_absolute_position(0)
        item.set_current_position(10)
        item.render()

        item.reset()
        item.set_absolute_position(200)
        item.set_current_position(210)
        item.render()

        assert item.start_calls == 2


class TestReset:
    """reset() restores pre-start state."""

    def test_reset_idempotence(self):
        """reset then a tick before the window: progress 0, inactive."""
        item = fade_in(duration=100)
        item.set_absolute_position(0)
        item.set_current_position(100)
        assert item.ended is True

        item.reset()
        item.reset()
        item.set_absolute_position(1000)
        item.set_current_position(999)

        assert item.progress == 0
        assert item.active is False
        assert item.ended is False
        assert item.started is False

    def test_reset_keeps_options(self):
        """Options survive reset."""
        item = fade_in(duration=100, leds=(3, 4))
        item.reset()

        assert item.leds == [3, 4]
        assert item.duration == 100


class TestDurationAndClone:
    """Duration resolution and the copy-constructor."""

    def test_missing_duration_without_override(self):
        """No duration and no calculate_duration override is a configuration error."""
        with pytest.raises(ConfigurationError) as exc:
            CountingStart({"leds": [1]})

        assert exc.value.field == "duration"

    def test_immediate_default_duration(self):
        """Immediate computes a nominal 50ms when no duration is given."""
        item = Immediate({"brightness": 100, "leds": [1]})
        assert item.duration == 50

    def test_immediate_explicit_zero(self):
        """An explicit duration of 0 is kept."""
        item = Immediate({"brightness": 100, "leds": [1], "duration": 0})
        assert item.duration == 0

    def test_clone_is_independent(self):
        """Clone has its own id and lifecycle, and can override options."""
        original = fade_in(duration=100, leds=(1, 2))
        original.set_absolute_position(0)
        original.set_current_position(100)

        copy = original.clone(leds=[7])

        assert copy.id != original.id
        assert copy.leds == [7]
        assert copy.options["end"] == 4095
        assert copy.ended is False
        assert copy.absolute_start is None
        assert original.leds == [1, 2]

    def test_options_frozen(self):
        """Options cannot be mutated after construction."""
        leds = [1, 2]
        item = fade_in(leds=leds)
        leds.append(3)

        assert item.leds == [1, 2]
        with pytest.raises(TypeError):
            item.options["end"] = 0

    def test_id_is_short_random(self):
        """Ids are 8 alphanumerics, different per instance."""
        a, b = fade_in(), fade_in()
        assert len(a.id) == 8 and a.id.isalnum()
        assert a.id != b.id
