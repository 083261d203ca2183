"""
Enums for the trajectory engine and its effects
"""

from enum import Enum, auto


class SessionPhase(Enum):
    """
    Lifecycle of one AnimationSession

    IDLE -> RUNNING -> COMPLETED, never backward.
    """
    IDLE = auto()
    RUNNING = auto()
    COMPLETED = auto()


class SchedulingStrategy(Enum):
    """How a session is driven to completion"""
    DECLARATIVE = auto()   # host transition primitive + single completion event
    IMPERATIVE = auto()    # explicit per-frame sampling loop


class AxisModel(Enum):
    """Per-axis trajectory sub-model"""
    FIXED = auto()       # held at its start value
    LINEAR = auto()      # constant velocity
    KINEMATIC = auto()   # constant acceleration


class PositioningMode(Enum):
    """How an ElementProxy writes positions into element styles"""
    TRANSLATE = auto()   # transform: translate(x, y) relative to layout box
    OFFSET = auto()      # left/top relative to the containing element


class EffectID(Enum):
    """Effect identifiers"""
    FLY_TO = auto()
    CANNON_BALL = auto()
    PROJECTILE = auto()


class EasingID(Enum):
    """Named easing curves understood by the transition host"""
    LINEAR = "linear"
    EASE = "ease"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    ENGINE = auto()      # Session creation, engine lifecycle
    SCHEDULER = auto()   # Frame ticks, scheduler state
    TRANSITION = auto()  # Host transitions
    COMPLETION = auto()  # Completion dispatch, cleanup
    STAGE = auto()       # Display tree, element lookup
    EFFECT = auto()      # fly_to / cannon_ball / projectile
    SYSTEM = auto()      # Frame clock, startup, shutdown
