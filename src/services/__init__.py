"""Services layer"""

from .animation_service import AnimationService

__all__ = [
    "AnimationService",
]
