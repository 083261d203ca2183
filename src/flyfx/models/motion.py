"""
Motion domain models

Defines the immutable per-transit configuration (MotionConfig) and the
mutable run state of one transit (AnimationSession).
"""

import itertools
import math
from dataclasses import dataclass, field
from typing import Callable, Optional

from flyfx.errors import ConfigurationError, SessionStateError
from flyfx.models.enums import AxisModel, SessionPhase
from flyfx.models.geometry import Point

_session_ids = itertools.count(1)


def _require_finite(name: str, value: float) -> None:
    if value is None or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number", details={name: value})


@dataclass(frozen=True)
class MotionConfig:
    """
    Immutable parameters for one transit

    Attributes:
        start: Start anchor (pixels, in the handle's positioning space)
        end: End anchor (same space as start)
        duration: Transit duration in seconds, must be > 0
        acceleration_x: px/s² on X, or None when acceleration is not modeled
        acceleration_y: px/s² on Y, or None when acceleration is not modeled
        move_x: Animate X; when False X is held at start.x
        move_y: Animate Y; when False Y is held at start.y
        target_scale: Scale reached at the end of the transit
        base_rotation_deg: Rotation the element had before the transit
        track_heading: Align rotation with the direction of travel
        on_complete: Optional callback fired exactly once at the end
    """
    start: Point
    end: Point
    duration: float
    acceleration_x: Optional[float] = None
    acceleration_y: Optional[float] = None
    move_x: bool = True
    move_y: bool = True
    target_scale: float = 1.0
    base_rotation_deg: float = 0.0
    track_heading: bool = False
    on_complete: Optional[Callable[[], None]] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.start, Point) or not isinstance(self.end, Point):
            raise ConfigurationError(
                "start and end anchors are required",
                details={"start": self.start, "end": self.end},
            )
        for name, value in (
            ("start.x", self.start.x), ("start.y", self.start.y),
            ("end.x", self.end.x), ("end.y", self.end.y),
            ("duration", self.duration),
            ("target_scale", self.target_scale),
            ("base_rotation_deg", self.base_rotation_deg),
        ):
            _require_finite(name, value)

        if self.duration <= 0:
            raise ConfigurationError(
                f"duration must be > 0, got {self.duration}",
                details={"duration": self.duration},
            )

        if self.acceleration_x is not None:
            _require_finite("acceleration_x", self.acceleration_x)
        if self.acceleration_y is not None:
            _require_finite("acceleration_y", self.acceleration_y)

        if self.on_complete is not None and not callable(self.on_complete):
            raise ConfigurationError("on_complete must be callable")

    # ------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------

    @property
    def displacement(self) -> Point:
        return self.end - self.start

    @property
    def x_model(self) -> AxisModel:
        return self._axis_model(self.move_x, self.acceleration_x)

    @property
    def y_model(self) -> AxisModel:
        return self._axis_model(self.move_y, self.acceleration_y)

    @property
    def moves(self) -> bool:
        return self.move_x or self.move_y

    @property
    def requires_integration(self) -> bool:
        """True when the host transition primitive cannot express this transit"""
        return (
            self.track_heading
            or self.x_model is AxisModel.KINEMATIC
            or self.y_model is AxisModel.KINEMATIC
        )

    @staticmethod
    def _axis_model(moves: bool, acceleration: Optional[float]) -> AxisModel:
        if not moves:
            return AxisModel.FIXED
        if acceleration is None:
            return AxisModel.LINEAR
        return AxisModel.KINEMATIC


@dataclass
class AnimationSession:
    """
    Mutable run state of one transit

    Exactly one instance per triggered effect; never reused. Only the
    scheduler that owns the session mutates it.
    """
    config: MotionConfig
    id: int = field(default_factory=lambda: next(_session_ids))
    start_clock_time: Optional[float] = None
    phase: SessionPhase = SessionPhase.IDLE
    last_elapsed: float = 0.0
    frames: int = 0

    # ------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------

    def begin(self) -> None:
        """IDLE -> RUNNING"""
        if self.phase is not SessionPhase.IDLE:
            raise SessionStateError(self.id, self.phase.name, SessionPhase.RUNNING.name)
        self.phase = SessionPhase.RUNNING

    def finish(self) -> bool:
        """
        RUNNING -> COMPLETED

        Returns False if the session already completed, so late ticks and
        duplicate host events can be ignored without raising.
        """
        if self.phase is SessionPhase.COMPLETED:
            return False
        if self.phase is SessionPhase.IDLE:
            raise SessionStateError(self.id, self.phase.name, SessionPhase.COMPLETED.name)
        self.phase = SessionPhase.COMPLETED
        return True

    @property
    def is_running(self) -> bool:
        return self.phase is SessionPhase.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.phase is SessionPhase.COMPLETED

    # ------------------------------------------------------------
    # Time bookkeeping
    # ------------------------------------------------------------

    def elapsed_at(self, timestamp: float) -> float:
        """
        Elapsed seconds at a clock timestamp, clamped to [0, duration].

        The first call records start_clock_time. The returned value never
        decreases across calls.
        """
        if self.start_clock_time is None:
            self.start_clock_time = timestamp

        elapsed = timestamp - self.start_clock_time
        elapsed = min(max(elapsed, 0.0), self.config.duration)
        elapsed = max(elapsed, self.last_elapsed)
        self.last_elapsed = elapsed
        return elapsed

    def progress(self, elapsed: float) -> float:
        return elapsed / self.config.duration
