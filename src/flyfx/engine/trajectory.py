"""
Trajectory Model

Pure time → position mapping for one transit. Each axis independently uses
one of three sub-models:

  FIXED      axis held at its start value (no formula evaluated)
  LINEAR     pos = start + s * (t / T)
  KINEMATIC  pos = start + v0*t + ½·a·t², with v0 solved so that pos(T) = end

where s is the signed displacement on that axis and T the duration.
"""

from typing import Optional

from flyfx.models.enums import AxisModel
from flyfx.models.geometry import Point
from flyfx.models.motion import MotionConfig

# Conventional unit scale: 1 m of real-world acceleration = 100 px on screen
DEFAULT_PX_PER_METER = 100.0


def to_pixel_acceleration(value: float, px_per_unit: float = DEFAULT_PX_PER_METER) -> float:
    """Convert an acceleration in caller units (e.g. m/s²) into px/s²"""
    return value * px_per_unit


class AxisTrajectory:
    """Position along one axis as a function of elapsed seconds"""

    def __init__(
        self,
        model: AxisModel,
        start: float,
        end: float,
        duration: float,
        acceleration: Optional[float] = None,
    ):
        self.model = model
        self.start = start
        self.end = end
        self.duration = duration
        self.acceleration = acceleration or 0.0
        self.displacement = end - start

        if model is AxisModel.KINEMATIC:
            self.initial_velocity = self._solve_initial_velocity()
        elif model is AxisModel.LINEAR:
            self.initial_velocity = self.displacement / duration
        else:
            self.initial_velocity = 0.0

    def _solve_initial_velocity(self) -> float:
        s, a, t = self.displacement, self.acceleration, self.duration
        if a == 0:
            return s / t
        return (s - 0.5 * a * t * t) / t

    def at(self, elapsed: float) -> float:
        if self.model is AxisModel.FIXED:
            return self.start

        if elapsed == self.duration:
            return self.end

        if self.model is AxisModel.LINEAR or self.acceleration == 0:
            return self.start + self.displacement * (elapsed / self.duration)

        return (
            self.start
            + self.initial_velocity * elapsed
            + 0.5 * self.acceleration * elapsed * elapsed
        )

    def velocity(self, elapsed: float) -> float:
        if self.model is AxisModel.FIXED:
            return 0.0
        if self.model is AxisModel.LINEAR:
            return self.initial_velocity
        return self.initial_velocity + self.acceleration * elapsed

    def __repr__(self) -> str:
        return (
            f"AxisTrajectory({self.model.name}, {self.start}→{self.end}, "
            f"v0={self.initial_velocity:.3f}, a={self.acceleration})"
        )


class TrajectoryModel:
    """
    Position of a transit as a function of elapsed time

    Defined on [0, duration]. Callers clamp elapsed before calling; the
    model does not.

    Example:
        model = TrajectoryModel(config)
        model.position(0.0)              # == config.start
        model.position(config.duration)  # == config.end on moving axes
    """

    def __init__(self, config: MotionConfig):
        self.config = config
        self.duration = config.duration
        self.x = AxisTrajectory(
            config.x_model, config.start.x, config.end.x, config.duration, config.acceleration_x
        )
        self.y = AxisTrajectory(
            config.y_model, config.start.y, config.end.y, config.duration, config.acceleration_y
        )

    def position(self, elapsed: float) -> Point:
        return Point(self.x.at(elapsed), self.y.at(elapsed))

    def final_position(self) -> Point:
        return self.position(self.duration)

    def velocity(self, elapsed: float) -> Point:
        return Point(self.x.velocity(elapsed), self.y.velocity(elapsed))

    @property
    def is_stationary(self) -> bool:
        return self.x.model is AxisModel.FIXED and self.y.model is AxisModel.FIXED

    def __repr__(self) -> str:
        return f"TrajectoryModel(x={self.x!r}, y={self.y!r}, T={self.duration}s)"
