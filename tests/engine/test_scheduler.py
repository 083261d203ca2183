from unittest.mock import MagicMock

import pytest

from flyfx.engine.completion import CompletionDispatcher
from flyfx.engine.scheduler import DeclarativeScheduler, ImperativeScheduler, select_strategy
from flyfx.errors import ConfigurationError, SessionStateError
from flyfx.models.enums import SchedulingStrategy, SessionPhase
from flyfx.models.geometry import Point
from flyfx.models.motion import AnimationSession, MotionConfig
from flyfx.models.transition import ease_linear


def make_config(**overrides):
    values = dict(start=Point(150, 150), end=Point(350, 350), duration=1.0)
    values.update(overrides)
    return MotionConfig(**values)


def build(scheduler_class, clock, handle, config, **kwargs):
    session = AnimationSession(config)
    dispatcher = CompletionDispatcher(session, callback=config.on_complete, cleanup=handle.dispose)
    return scheduler_class(session, handle, clock, dispatcher, **kwargs)


# ============================================================
# Strategy selection
# ============================================================

def test_select_strategy():
    assert select_strategy(make_config()) is SchedulingStrategy.DECLARATIVE
    assert select_strategy(make_config(acceleration_y=981.0)) is SchedulingStrategy.IMPERATIVE
    assert select_strategy(make_config(acceleration_x=0.0)) is SchedulingStrategy.IMPERATIVE
    assert select_strategy(make_config(track_heading=True)) is SchedulingStrategy.IMPERATIVE
    assert select_strategy(make_config(move_x=False, move_y=False)) is SchedulingStrategy.DECLARATIVE


# ============================================================
# Imperative
# ============================================================

def test_imperative_runs_to_completion(clock, advance, handle):
    done = MagicMock()
    scheduler = build(ImperativeScheduler, clock, handle, make_config(acceleration_y=981.0, on_complete=done))

    scheduler.start()
    assert scheduler.phase is SessionPhase.RUNNING
    assert handle.positions == []

    advance(0)
    assert handle.positions[0] == Point(150, 150)

    advance(1.0, frames=8)
    assert handle.positions[-1] == Point(350, 350)
    assert handle.scales[-1] == 1.0
    done.assert_called_once()
    assert handle.dispose_calls == 1
    assert clock.pending_frames == 0
    assert scheduler.session.frames == 9


def test_imperative_recomputes_from_elapsed_time(clock, advance, handle):
    scheduler = build(ImperativeScheduler, clock, handle, make_config(acceleration_y=981.0))
    scheduler.start()

    advance(0)
    advance(0.5)  # a long gap instead of 30 frames

    assert handle.positions[-1] == scheduler.trajectory.position(0.5)
    assert scheduler.phase is SessionPhase.RUNNING


def test_imperative_pushes_are_time_monotonic(clock, advance, handle):
    scheduler = build(ImperativeScheduler, clock, handle, make_config(acceleration_x=0.0, move_y=False))
    scheduler.start()
    advance(0)
    advance(1.0, frames=16)

    xs = [p.x for p in handle.positions]
    assert xs == sorted(xs)
    assert xs[-1] == 350


def test_late_tick_is_ignored(clock, advance, handle):
    done = MagicMock()
    scheduler = build(ImperativeScheduler, clock, handle, make_config(acceleration_y=981.0, on_complete=done))
    scheduler.start()
    advance(0)
    advance(1.0)
    pushes = len(handle.positions)

    scheduler.on_tick(clock.now() + 1.0)

    assert len(handle.positions) == pushes
    done.assert_called_once()
    assert handle.dispose_calls == 1


def test_imperative_tracks_heading(clock, advance, handle):
    config = make_config(end=Point(350, 150), track_heading=True, base_rotation_deg=10.0)
    scheduler = build(ImperativeScheduler, clock, handle, config)
    scheduler.start()
    advance(0)
    advance(0.5)
    assert handle.rotations[-1] == pytest.approx(100.0)


def test_rotation_not_pushed_without_heading(clock, advance, handle):
    scheduler = build(ImperativeScheduler, clock, handle, make_config(acceleration_y=981.0))
    scheduler.start()
    advance(0)
    assert handle.rotations == []


def test_start_twice_raises(clock, handle):
    scheduler = build(ImperativeScheduler, clock, handle, make_config(acceleration_y=981.0))
    scheduler.start()
    with pytest.raises(SessionStateError):
        scheduler.start()


def test_missing_handle_rejected(clock):
    config = make_config()
    session = AnimationSession(config)
    with pytest.raises(ConfigurationError):
        ImperativeScheduler(session, None, clock, CompletionDispatcher(session))


# ============================================================
# Declarative
# ============================================================

def test_declarative_delegates_final_frame(clock, handle):
    driver = MagicMock()
    driver.animate.return_value = object()
    done = MagicMock()
    scheduler = build(
        DeclarativeScheduler, clock, handle,
        make_config(target_scale=0.5, on_complete=done),
        driver=driver, ease_function=ease_linear,
    )

    scheduler.start()

    target_handle, target, transition = driver.animate.call_args[0]
    assert target_handle is handle
    assert target.position == Point(350, 350)
    assert target.scale == 0.5
    assert transition.duration == 1.0
    assert transition.ease_function is ease_linear

    handle.fire_transition_end()
    handle.fire_transition_end()

    done.assert_called_once()
    assert handle.dispose_calls == 1
    assert scheduler.phase is SessionPhase.COMPLETED


def test_declarative_held_axis_stays_at_start(clock, handle):
    driver = MagicMock()
    scheduler = build(DeclarativeScheduler, clock, handle, make_config(move_y=False), driver=driver)
    scheduler.start()
    assert driver.animate.call_args[0][1].position == Point(350, 150)


def test_declarative_timer_fallback_respects_duration(clock, advance, handle):
    driver = MagicMock()
    driver.animate.return_value = None
    done = MagicMock()
    scheduler = build(
        DeclarativeScheduler, clock, handle,
        make_config(move_x=False, move_y=False, on_complete=done),
        driver=driver,
    )

    scheduler.start()
    assert clock.pending_timers == 1

    advance(0.5)
    done.assert_not_called()
    assert handle.positions == []

    advance(0.5)
    done.assert_called_once()
    assert handle.dispose_calls == 1


def test_declarative_rejects_heading(clock, handle):
    with pytest.raises(ConfigurationError):
        build(DeclarativeScheduler, clock, handle, make_config(track_heading=True), driver=MagicMock())


def test_declarative_requires_driver(clock, handle):
    with pytest.raises(ConfigurationError):
        build(DeclarativeScheduler, clock, handle, make_config(), driver=None)
