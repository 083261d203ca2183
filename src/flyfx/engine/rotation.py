"""
Rotation Estimator

Derives the heading of a moving element from two nearby samples of its
trajectory. The element's default orientation is assumed to point up, so a
heading of 0° (travelling right) maps to a rotation of +90°.
"""

import math

from flyfx.engine.trajectory import TrajectoryModel

# Finite-difference step between the two trajectory samples (seconds)
HEADING_EPSILON = 0.001


class RotationEstimator:
    """
    elapsed → rotation in degrees (heading + 90 + base rotation)

    The base rotation is extracted once, before the transit starts, and is
    not re-sampled. The forward sample is clamped to the duration, so on the
    final frame both samples coincide and the heading is atan2(0, 0) = 0.
    """

    def __init__(
        self,
        trajectory: TrajectoryModel,
        base_rotation_deg: float = 0.0,
        epsilon: float = HEADING_EPSILON,
    ):
        self.trajectory = trajectory
        self.base_rotation_deg = base_rotation_deg
        self.epsilon = epsilon

    def heading(self, elapsed: float) -> float:
        if self.trajectory.is_stationary:
            return self.base_rotation_deg

        t1 = min(elapsed + self.epsilon, self.trajectory.duration)
        p0 = self.trajectory.position(elapsed)
        p1 = self.trajectory.position(t1)
        return math.degrees(math.atan2(p1.y - p0.y, p1.x - p0.x)) + 90.0 + self.base_rotation_deg

    __call__ = heading
