"""Services layer"""

from .effect_service import EffectService

__all__ = [
    "EffectService",
]
