import pytest

from animations import FadeIn, Sequence
from animations.effects import EFFECT_PRESETS, create_demo_animation
from animations.stair_animation import StairAnimation
from hardware.pwm import MappedPin, PinMapper, VirtualBrightnessSink, VirtualPwmDriver
from models.animation_config import AnimationDefinition, parse_definition
from models.easing import ease_in_quad, ease_linear, ease_out_cubic
from models.enums import AnimationType
from models.errors import ConfigurationError


WELCOME = {
    "name": "Welcome",
    "description": "Bottom to top, then off",
    "timeline": [
        {"type": "Sequence", "at": 0, "options": {"brightness": 4095, "duration": 600}},
        {"type": "FadeOut", "at": 1000, "options": {"end": 0, "duration": 500, "leds": [0, 1]}},
    ],
}


@pytest.fixture
def build(sink, clock, ticks):
    def factory(config, **kwargs):
        return StairAnimation(config, sink, tick_source=ticks, clock=clock, **kwargs)
    return factory


class TestDefinitionSchema:
    """pydantic structure checks."""

    def test_parse(self):
        definition = parse_definition(WELCOME)

        assert isinstance(definition, AnimationDefinition)
        assert definition.timeline[0].type is AnimationType.SEQUENCE
        assert definition.timeline[1].at == 1000
        assert definition.loop is False
        assert definition.easing is None

    def test_timeline_required(self):
        with pytest.raises(ConfigurationError) as exc:
            parse_definition({"name": "empty"})
        assert exc.value.field == "timeline"

    def test_unknown_type_names_step(self):
        config = {"timeline": [
            {"type": "FadeIn", "at": 0, "options": {}},
            {"type": "Sparkle", "at": 10, "options": {}},
        ]}
        with pytest.raises(ConfigurationError, match="Timeline step 1") as exc:
            parse_definition(config)
        assert exc.value.index == 1
        assert exc.value.field == "type"

    def test_options_required(self):
        with pytest.raises(ConfigurationError) as exc:
            parse_definition({"timeline": [{"type": "FadeIn", "at": 0}]})
        assert exc.value.index == 0
        assert exc.value.field == "options"

    def test_negative_at(self):
        with pytest.raises(ConfigurationError) as exc:
            parse_definition({"timeline": [{"type": "FadeIn", "at": -5, "options": {}}]})
        assert exc.value.field == "at"


class TestStairAnimationBuild:
    """Definition → primitives → timeline → runner."""

    def test_builds_timeline(self, build):
        stairs = build(WELCOME)
        items = stairs.animation.timeline.get_all_items()

        assert stairs.name == "Welcome"
        assert stairs.description == "Bottom to top, then off"
        assert isinstance(items[0], Sequence)
        assert [i.relative_start for i in items] == [0, 1000]
        assert stairs.animation.timeline.duration == 1500

    def test_missing_leds_use_all_channels(self, build, sink):
        stairs = build(WELCOME)
        sequence = stairs.animation.timeline.get_all_items()[0]

        assert sequence.leds == sink.channels()

    def test_explicit_channels(self, build):
        stairs = build(WELCOME, channels=[4, 5])
        sequence = stairs.animation.timeline.get_all_items()[0]

        assert sequence.leds == [4, 5]

    def test_missing_leds_use_stair_order(self, clock, ticks):
        """With a PinMapper, steps without leds run bottom to top by step number."""
        mapper = (PinMapper()
            .add_driver("main", VirtualPwmDriver())
            .set_pin_mapping({
                0: MappedPin("main", 0, step=1),
                1: MappedPin("main", 1, step=2),
                2: MappedPin("main", 2, step=0),
            }))
        stairs = StairAnimation(WELCOME, mapper, tick_source=ticks, clock=clock)
        sequence = stairs.animation.timeline.get_all_items()[0]

        assert sequence.leds == [2, 0, 1]

    def test_invalid_step_rejected_wholesale(self, build):
        config = {"timeline": [
            {"type": "FadeIn", "at": 0, "options": {"start": 0, "end": 100, "duration": 100}},
            {"type": "Shifting", "at": 100, "options": {"shifts": 2, "duration": 100, "leds": [1]}},
        ]}
        with pytest.raises(ConfigurationError) as exc:
            build(config)

        assert str(exc.value).startswith("Timeline step 1:")
        assert exc.value.index == 1
        assert exc.value.field == "leds"

    def test_easing_from_definition(self, build):
        stairs = build({**WELCOME, "easing": "easeInQuad"})
        assert stairs.animation.easing is ease_in_quad

    def test_easing_precedence(self, build):
        """Explicit easing > definition easing > default easing."""
        assert build(WELCOME).animation.easing is ease_linear
        assert build(WELCOME, default_easing="easeOutCubic").animation.easing is ease_out_cubic
        assert build({**WELCOME, "easing": "easeInQuad"}, default_easing="easeOutCubic").animation.easing is ease_in_quad
        assert build({**WELCOME, "easing": "easeInQuad"}, easing="linear").animation.easing is ease_linear

    def test_unknown_easing(self, build):
        with pytest.raises(ConfigurationError):
            build({**WELCOME, "easing": "wobble"})

    def test_loop_flag(self, build):
        assert build({**WELCOME, "loop": True}).animation.loop_infinite is True
        assert build({**WELCOME, "loop": True}, loop_infinite=False).animation.loop_infinite is False


class TestStairAnimationControl:

    def test_start_and_stop(self, build, sink, clock, ticks):
        stairs = build(WELCOME)
        stairs.start()
        clock.advance(100)
        ticks.fire()

        assert stairs.is_running()
        assert sink.get_brightness(0) > 0

        stairs.stop()
        assert not stairs.is_running()
        assert sink.snapshot() == {channel: 0 for channel in sink.channels()}

    def test_hooks_survive_update(self, build, clock):
        calls = []
        stairs = build(WELCOME).add_hook(lambda items, runner: calls.append(runner))
        stairs.update_config({**WELCOME, "name": "Again"})
        stairs.start()

        assert stairs.name == "Again"
        assert calls == [stairs.animation]

    def test_update_config_stops_old_runner(self, build):
        stairs = build(WELCOME)
        stairs.start()
        old = stairs.animation

        stairs.update_config(WELCOME)

        assert not old.is_running()
        assert stairs.animation is not old

    def test_invalid_update_keeps_running_animation(self, build):
        stairs = build(WELCOME)
        stairs.start()
        old = stairs.animation

        with pytest.raises(ConfigurationError):
            stairs.update_config({"timeline": [{"type": "FadeTo", "at": 0, "options": {"duration": 10}}]})

        assert stairs.animation is old
        assert old.is_running()

    def test_set_easing_function(self, build):
        stairs = build(WELCOME).set_easing_function("easeInQuad")
        assert stairs.animation.easing is ease_in_quad

        stairs.update_config(WELCOME)
        assert stairs.animation.easing is ease_in_quad


class TestEffects:
    """Presets and the demo show."""

    def test_presets_are_valid(self):
        fade = FadeIn(EFFECT_PRESETS["fadeIn250"])
        assert fade.duration == 250
        assert len(fade.leds) == 18

    def test_demo_animation(self, clock, ticks):
        sink = VirtualBrightnessSink(channels=range(18))
        demo = create_demo_animation(sink, tick_source=ticks, clock=clock)

        assert demo.loop_infinite is True
        assert len(demo.timeline) == 19
        assert demo.timeline.duration == 25500

        demo.start()
        clock.advance(125)
        ticks.fire()
        assert sink.get_brightness(0) == 100
