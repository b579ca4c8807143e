"""
Stair Animation

Builds a LedstripAnimation from a declarative animation definition
(see models.animation_config). The whole definition is validated and every
primitive constructed before anything is placed on a timeline, so an
invalid definition is rejected wholesale and never half-built.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from animations import ANIMATIONS, TimelineAnimation
from engine.ledstrip_animation import Hook, LedstripAnimation
from engine.tick_source import ITickSource
from engine.timeline import Timeline
from hardware.pwm.brightness_sink import IBrightnessSink
from models.animation_config import AnimationDefinition, parse_definition
from models.easing import EasingFunction
from models.errors import ConfigurationError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)


class StairAnimation:
    """
    Configurable stair lighting animation.

    Example:
        stairs = StairAnimation({
            "name": "Welcome",
            "timeline": [
                {"type": "Sequence", "at": 0, "options": {"brightness": 4095, "duration": 1800}},
                {"type": "FadeOut", "at": 6000, "options": {"end": 0, "duration": 1000}},
            ],
        }, mapper)
        stairs.start()

    Steps without `leds` (or with an empty list) animate every channel of
    the sink.
    """

    def __init__(
        self,
        config: Union[dict, AnimationDefinition],
        sink: IBrightnessSink,
        *,
        channels: Optional[Iterable[int]] = None,
        tick_source: Optional[ITickSource] = None,
        tick_interval_ms: float = 0.0,
        clock: Optional[Callable[[], float]] = None,
        loop_infinite: Optional[bool] = None,
        easing: Union[str, EasingFunction, None] = None,
        default_easing: Union[str, EasingFunction, None] = None,
    ):
        """
        Args:
            config: Animation definition (dict as loaded from JSON/YAML)
            sink: Brightness sink (PinMapper in production)
            channels: Channels used when a step names no leds (the sink's stair order by default)
            tick_source: Passed to the runner
            tick_interval_ms: Passed to the runner (used when no tick_source is given)
            clock: Passed to the runner
            loop_infinite: Overrides the definition's `loop`
            easing: Overrides the definition's `easing`
            default_easing: Used when neither `easing` nor the definition names one

        Raises:
            ConfigurationError: invalid definition, message prefixed with the step index
        """
        self.sink = sink
        self._channels = list(channels) if channels is not None else None
        self._tick_source = tick_source
        self._tick_interval_ms = tick_interval_ms
        self._clock = clock
        self._loop_override = loop_infinite
        self._easing_override = easing
        self._default_easing = default_easing
        self.hooks: List[Hook] = []

        self.name = ""
        self.description = ""
        self.definition: Optional[AnimationDefinition] = None
        self.animation: Optional[LedstripAnimation] = None

        self._initialize(config)

    # ============================================================
    # Building
    # ============================================================

    def all_channels(self) -> List[int]:
        """Channels used for steps without `leds`: explicit, else the sink's stair order."""
        if self._channels is not None:
            return list(self._channels)
        for name in ("steps", "channels"):
            source = getattr(self.sink, name, None)
            if callable(source):
                return list(source())
        return []

    def _build_primitives(self, definition: AnimationDefinition) -> List[tuple]:
        all_channels = self.all_channels()
        placed = []

        for index, step in enumerate(definition.timeline):
            options = dict(step.options)
            if not options.get("leds"):
                options["leds"] = all_channels

            animation_class = ANIMATIONS[step.type]
            try:
                primitive: TimelineAnimation = animation_class(options, sink=self.sink)
            except ConfigurationError as ex:
                raise ConfigurationError(
                    f"Timeline step {index}: {ex}", field=ex.field, index=index
                ) from ex
            placed.append((step.at, primitive))

        return placed

    def _initialize(self, config: Union[dict, AnimationDefinition]) -> None:
        definition = parse_definition(config)
        placed = self._build_primitives(definition)

        # definition fully valid from here on
        if self.animation is not None:
            self.animation.stop()

        timeline = Timeline()
        for offset, primitive in placed:
            timeline.add(offset, primitive)

        loop = definition.loop if self._loop_override is None else self._loop_override
        easing = next(
            (e for e in (self._easing_override, definition.easing, self._default_easing) if e is not None),
            None,
        )

        self.definition = definition
        self.name = definition.name
        self.description = definition.description
        self.animation = LedstripAnimation(
            self.sink,
            timeline,
            easing=easing,
            loop_infinite=loop,
            tick_source=self._tick_source,
            tick_interval_ms=self._tick_interval_ms,
            clock=self._clock,
            channels=self._channels,
        )
        for hook in self.hooks:
            self.animation.add_hook(hook)

        log.info(
            "Stair animation built",
            name=self.name or "(unnamed)",
            steps=len(placed),
            duration_ms=timeline.duration,
            loop=loop,
        )

    # ============================================================
    # Control
    # ============================================================

    def update_config(self, config: Union[dict, AnimationDefinition]) -> "StairAnimation":
        """
        Rebuild from a new definition. The current runner is stopped only
        once the new definition has been validated.
        """
        self._initialize(config)
        return self

    def set_easing_function(self, easing: Union[str, EasingFunction, None]) -> "StairAnimation":
        self._easing_override = easing
        self.animation.set_easing_function(easing)
        return self

    def add_hook(self, hook: Hook) -> "StairAnimation":
        self.hooks.append(hook)
        self.animation.add_hook(hook)
        return self

    def start(self, at_time: Optional[float] = None) -> "StairAnimation":
        self.animation.start(at_time)
        return self

    def stop(self) -> "StairAnimation":
        self.animation.stop()
        return self

    def is_running(self) -> bool:
        return self.animation.is_running()

    async def wait_until_stopped(self, poll_interval: float = 0.01) -> None:
        await self.animation.wait_until_stopped(poll_interval)

    def describe(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description}
