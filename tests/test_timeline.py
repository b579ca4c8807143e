import pytest

from animations import FadeIn
from engine.timeline import Timeline
from models.errors import ConfigurationError


def fade(duration=100, leds=(0,)):
    return FadeIn({"start": 0, "end": 100, "duration": duration, "leds": list(leds)})


class TestTimelineSchedule:
    """Adding primitives at offsets."""

    def test_duration_is_latest_end(self):
        """Timeline duration = max(offset + duration)."""
        line = Timeline().add(0, fade(500)).add(100, fade(100)).add(300, fade(50))
        assert line.duration == 500

        line.add(450, fade(100))
        assert line.duration == 550

    def test_empty_timeline(self):
        line = Timeline()
        assert line.duration == 0
        assert len(line) == 0
        assert line.get_active_items() == []

    def test_negative_offset_rejected(self):
        with pytest.raises(ConfigurationError):
            Timeline().add(-1, fade())

    def test_order_by_offset_then_insertion(self):
        """Iteration walks offsets ascending, same offset in insertion order."""
        a, b, c, d = fade(), fade(), fade(), fade()
        line = Timeline().add(200, a).add(0, b).add(200, c).add(50, d)

        assert line.get_all_items() == [b, d, a, c]

    def test_add_sets_relative_position(self):
        item = fade()
        Timeline().add(250, item)
        assert item.relative_start == 250

    def test_channels(self):
        """Every channel touched, first-seen order."""
        line = Timeline().add(0, fade(leds=(3, 1))).add(10, fade(leds=(1, 2)))
        assert line.get_channels() == [3, 1, 2]


class TestTimelinePlayback:
    """Anchoring and advancing."""

    def test_active_items(self):
        """Only primitives whose window contains now are active."""
        first, second = fade(100), fade(100)
        line = Timeline().add(0, first).add(200, second).set_start_time(1000)

        line.set_current_position(1050)
        assert line.get_active_items() == [first]

        # overshot end: one more tick for the final frame
        line.set_current_position(1150)
        assert line.get_active_items() == [first]
        assert first.ended

        line.set_current_position(1180)
        assert line.get_active_items() == []

        line.set_current_position(1250)
        assert line.get_active_items() == [second]
        assert line.diff == 250

    def test_overlapping_items(self):
        first, second = fade(200), fade(200)
        line = Timeline().add(0, first).add(100, second).set_start_time(0)

        line.set_current_position(150)
        assert line.get_active_items() == [first, second]

    def test_reset(self):
        """reset() clears anchoring and resets every primitive."""
        item = fade(100)
        line = Timeline().add(0, item).set_start_time(0)
        line.set_current_position(100)
        assert item.ended

        line.reset()

        assert line.start_time is None
        assert item.ended is False
        assert item.absolute_start is None
        assert line.duration == 100
