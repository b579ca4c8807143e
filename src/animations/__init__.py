"""
Animation primitives for stair lighting

Provides the TimelineAnimation contract and the concrete primitives
placed on a Timeline. The config-to-timeline builder lives in
animations.stair_animation, named presets in animations.effects.
"""

from typing import Dict, Type

from models.enums import AnimationType
from .base import TimelineAnimation
from .fade_in import FadeIn
from .fade_out import FadeOut
from .fade_to import FadeTo
from .immediate import Immediate
from .sequence import Sequence
from .shifting import Shifting


def _build_animation_registry() -> Dict[AnimationType, Type[TimelineAnimation]]:
    """Primitive class per AnimationType"""
    return {
        AnimationType.FADE_IN: FadeIn,
        AnimationType.FADE_OUT: FadeOut,
        AnimationType.FADE_TO: FadeTo,
        AnimationType.IMMEDIATE: Immediate,
        AnimationType.SEQUENCE: Sequence,
        AnimationType.SHIFTING: Shifting,
    }


ANIMATIONS: Dict[AnimationType, Type[TimelineAnimation]] = _build_animation_registry()

__all__ = [
    "ANIMATIONS",
    "TimelineAnimation",
    "FadeIn",
    "FadeOut",
    "FadeTo",
    "Immediate",
    "Sequence",
    "Shifting",
]
