"""
Animation definition schema - Pydantic models for declarative animation files

    {
      "name": "Welcome",
      "description": "Fade the stairs in, hold, fade out",
      "easing": "easeInOutQuad",
      "timeline": [
        {"type": "FadeIn", "at": 0, "options": {"start": 0, "end": 4095, "duration": 1000}},
        {"type": "FadeOut", "at": 5000, "options": {"end": 0, "duration": 1000}}
      ]
    }

pydantic checks the structure only (known type, integer `at`, `options`
object). Option values are validated by each primitive's own rule set.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from models.enums import AnimationType
from models.errors import ConfigurationError


class TimelineStepSchema(BaseModel):
    """One primitive placed on the timeline"""
    type: AnimationType = Field(description="Primitive type (e.g., 'FadeIn', 'Sequence')")
    at: int = Field(ge=0, description="Offset from timeline start in ms")
    options: Dict[str, Any] = Field(description="Primitive options (leds, duration, brightness, ...)")


class AnimationDefinition(BaseModel):
    """Complete declarative animation"""
    name: str = Field("", description="Display name")
    description: str = Field("", description="Animation description")
    timeline: List[TimelineStepSchema] = Field(description="Timeline steps, any order")
    easing: Optional[str] = Field(None, description="Easing name (e.g., 'easeInOutQuad')")
    loop: bool = Field(False, description="Restart after every cycle")


def parse_definition(config: Any) -> AnimationDefinition:
    """
    Validate a raw definition (dict) or pass an AnimationDefinition through.

    Raises:
        ConfigurationError: structural problem; `index` set when it is inside a timeline step
    """
    if isinstance(config, AnimationDefinition):
        return config
    if not isinstance(config, Mapping):
        raise ConfigurationError("Animation requires a configuration object")
    if not isinstance(config.get("timeline"), list):
        raise ConfigurationError("Animation requires 'timeline' array", field="timeline")

    try:
        return AnimationDefinition.model_validate(config)
    except PydanticValidationError as ex:
        raise _to_configuration_error(ex) from ex


def _to_configuration_error(ex: PydanticValidationError) -> ConfigurationError:
    error = ex.errors()[0]
    loc = list(error.get("loc", ()))
    message = error.get("msg", str(ex))

    if len(loc) >= 2 and loc[0] == "timeline" and isinstance(loc[1], int):
        index = loc[1]
        field = str(loc[2]) if len(loc) > 2 else None
        return ConfigurationError(f"Timeline step {index}: '{field}' {message}", field=field, index=index)

    field = ".".join(str(part) for part in loc) or None
    return ConfigurationError(f"'{field}' {message}", field=field)
