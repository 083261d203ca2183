"""
flyfx - trajectory animation engine

Animates a visual element from one screen anchor to another along a linear,
parabolic or hybrid path, easing its scale and turning it along its heading.

    stage = Stage()
    service = EffectService.create(stage)
    service.fly_to("coin", "wallet")
"""

from .errors import (
    FlyFxError,
    ConfigurationError,
    ElementNotFoundError,
    SessionStateError,
    TransformParseError,
)
from .engine.frame_clock import FrameClock, ManualTimeSource
from .engine.trajectory_engine import TrajectoryEngine
from .managers.config_manager import ConfigManager
from .models.geometry import Point, Rect
from .models.motion import AnimationSession, MotionConfig
from .services.effect_service import EffectService
from .stage.stage import Stage

__version__ = "0.1.0"

__all__ = [
    "FlyFxError",
    "ConfigurationError",
    "ElementNotFoundError",
    "SessionStateError",
    "TransformParseError",
    "FrameClock",
    "ManualTimeSource",
    "TrajectoryEngine",
    "ConfigManager",
    "Point",
    "Rect",
    "AnimationSession",
    "MotionConfig",
    "EffectService",
    "Stage",
]
