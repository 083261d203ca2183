"""
Models package - Data models for the trajectory engine
"""

from .enums import SessionPhase, SchedulingStrategy, AxisModel, EffectID, EasingID, LogLevel, LogCategory
from .geometry import Point, Rect
from .frame import MotionFrame
from .motion import MotionConfig, AnimationSession
from .transition import TransitionConfig

__all__ = [
    'SessionPhase',
    'SchedulingStrategy',
    'AxisModel',
    'EffectID',
    'EasingID',
    'LogLevel',
    'LogCategory',
    'Point',
    'Rect',
    'MotionFrame',
    'MotionConfig',
    'AnimationSession',
    'TransitionConfig',
]
