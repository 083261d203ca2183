import math

import pytest

from flyfx.engine.rotation import RotationEstimator
from flyfx.engine.trajectory import TrajectoryModel
from flyfx.models.geometry import Point
from flyfx.models.motion import MotionConfig


def estimator(base=0.0, **overrides):
    values = dict(start=Point(0, 0), end=Point(100, 0), duration=1.0)
    values.update(overrides)
    return RotationEstimator(TrajectoryModel(MotionConfig(**values)), base)


def test_travelling_right_points_right():
    assert estimator().heading(0.5) == pytest.approx(90.0)


def test_travelling_down():
    est = estimator(end=Point(0, 100), move_x=False)
    assert est.heading(0.2) == pytest.approx(180.0)


def test_base_rotation_is_added():
    assert estimator(base=30.0).heading(0.5) == pytest.approx(120.0)


def test_stationary_returns_base():
    est = estimator(base=45.0, move_x=False, move_y=False)
    assert est.heading(0.0) == 45.0
    assert est.heading(1.0) == 45.0


def test_zero_displacement_uses_the_formula():
    # only fully fixed axes are degenerate: atan2(0, 0) = 0 otherwise
    est = estimator(base=-10.0, end=Point(0, 0))
    assert est.heading(0.3) == pytest.approx(80.0)


def test_final_frame_samples_collapse():
    est = estimator(end=Point(200, 0), acceleration_y=400.0)
    assert est.heading(1.0) == 90.0
    assert estimator(base=25.0, end=Point(200, 0), acceleration_y=400.0).heading(1.0) == 115.0


def test_forward_sample_is_clamped_to_duration():
    est = estimator(end=Point(200, 0), acceleration_y=400.0)
    # 0.5 ms before the end the step shrinks but keeps the arrival direction
    expected = math.degrees(math.atan2(200.0, 200.0)) + 90.0
    assert est.heading(1.0 - 0.0005) == pytest.approx(expected, abs=0.5)
