import pytest
from unittest.mock import MagicMock

from flyfx.engine.frame_clock import FrameClock
from flyfx.engine.scheduler import DeclarativeScheduler, ImperativeScheduler
from flyfx.engine.trajectory_engine import TrajectoryEngine
from flyfx.errors import ConfigurationError
from flyfx.models.frame import MotionFrame
from flyfx.models.geometry import Point
from flyfx.models.motion import MotionConfig


def make_config(**overrides):
    values = dict(start=Point(150, 150), end=Point(350, 350), duration=1.0)
    values.update(overrides)
    return MotionConfig(**values)


def test_launch_picks_imperative_for_acceleration(engine, handle):
    session = engine.launch(make_config(acceleration_y=981.0), handle)
    assert isinstance(engine.get_scheduler(session.id), ImperativeScheduler)
    assert engine.is_running(session.id)


def test_launch_picks_declarative_for_linear(engine, handle):
    session = engine.launch(make_config(), handle)
    assert isinstance(engine.get_scheduler(session.id), DeclarativeScheduler)
    assert handle.transitions == ["transform 1s linear"]


def test_declarative_runs_on_transition_host(engine, advance, handle):
    done = MagicMock()
    session = engine.launch(make_config(on_complete=done), handle)

    advance(0)
    advance(0.5)
    assert handle.position == Point(250, 250)
    done.assert_not_called()

    advance(0.5)
    assert handle.position == Point(350, 350)
    done.assert_called_once()
    assert handle.dispose_calls == 1
    assert session.is_completed


class PushOnlyHandle:
    """Handle without the host transition hooks"""

    def __init__(self):
        self.dispose_calls = 0

    def set_position(self, position): ...

    def set_scale(self, scale): ...

    def set_rotation(self, degrees): ...

    def current_frame(self):
        return MotionFrame(Point(150, 150))

    def add_transition_end_listener(self, callback): ...

    def dispose(self):
        self.dispose_calls += 1


def test_declarative_needs_transition_hooks(engine, clock):
    push_only = PushOnlyHandle()

    with pytest.raises(ConfigurationError):
        engine.launch(make_config(), push_only)

    assert push_only.dispose_calls == 1
    assert not engine.is_running()
    assert not clock.has_pending_work()


def test_imperative_accepts_push_only_handle(engine, advance):
    push_only = PushOnlyHandle()
    engine.launch(make_config(acceleration_y=981.0), push_only)

    advance(0)
    advance(1.0)
    assert push_only.dispose_calls == 1


def test_completion_disposes_and_unregisters(engine, advance, handle):
    done = MagicMock()
    disposed = MagicMock()
    session = engine.launch(make_config(acceleration_y=981.0, on_complete=done), handle, on_disposed=disposed)

    advance(0)
    advance(1.0, frames=4)

    done.assert_called_once()
    disposed.assert_called_once()
    assert handle.dispose_calls == 1
    assert not engine.is_running()
    assert engine.completed_sessions == 1
    assert session.is_completed


def test_callback_fault_still_disposes(engine, advance, handle, log_records):
    session = engine.launch(
        make_config(acceleration_y=981.0, on_complete=MagicMock(side_effect=RuntimeError("late"))),
        handle,
    )
    advance(0)
    advance(1.0)

    assert session.is_completed
    assert handle.dispose_calls == 1
    assert not engine.is_running()
    assert any(r[0] == "ERROR" for r in log_records)


def test_missing_handle_schedules_nothing(engine, clock):
    with pytest.raises(ConfigurationError):
        engine.launch(make_config(), None)
    assert not engine.is_running()
    assert not clock.has_pending_work()


def test_declarative_without_driver_is_rejected(clock, handle):
    engine = TrajectoryEngine(clock)
    with pytest.raises(ConfigurationError):
        engine.launch(make_config(), handle)
    assert not engine.is_running()
    assert handle.dispose_calls == 1
    assert not clock.has_pending_work()


def test_sessions_run_independently(engine, advance, make_handle):
    first, second = make_handle(), make_handle()
    engine.launch(make_config(acceleration_y=981.0, duration=0.5), first)
    engine.launch(make_config(acceleration_y=981.0, duration=1.0), second)

    advance(0)
    advance(0.5)
    assert first.dispose_calls == 1
    assert second.dispose_calls == 0
    assert engine.is_running()

    advance(0.5)
    assert second.dispose_calls == 1
    assert not engine.is_running()


@pytest.mark.asyncio
async def test_wait_for_idle_with_render_loop(handle):
    clock = FrameClock(fps=240)
    engine = TrajectoryEngine(clock)
    done = MagicMock()
    engine.launch(make_config(acceleration_y=981.0, duration=0.05, on_complete=done), handle)

    await clock.start()
    await engine.wait_for_idle()
    await clock.stop()

    done.assert_called_once()
    assert handle.dispose_calls == 1
