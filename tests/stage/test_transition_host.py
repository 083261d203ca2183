import pytest
from unittest.mock import MagicMock

from flyfx.models.enums import PositioningMode
from flyfx.models.frame import MotionFrame
from flyfx.models.geometry import Point, Rect
from flyfx.models.transition import TransitionConfig, ease, ease_linear
from flyfx.stage.element import Element
from flyfx.stage.proxy import ElementProxy


@pytest.fixture
def proxy():
    return ElementProxy(Element(rect=Rect(100, 100, 100, 100)), PositioningMode.TRANSLATE, origin=Point(150, 150))


def test_interpolates_and_lands_on_target(transition_host, advance, proxy):
    ended = MagicMock()
    proxy.add_transition_end_listener(ended)

    transition = transition_host.animate(
        proxy, MotionFrame(Point(350, 350), 0.5), TransitionConfig(1.0, ease_linear)
    )
    assert transition is not None
    assert proxy.element.style["transition"] == "transform 1s linear"

    advance(0)
    assert proxy.current_frame().position == Point(150, 150)

    advance(0.5)
    assert proxy.current_frame().position == Point(250, 250)
    assert proxy.current_frame().scale == pytest.approx(0.75)
    ended.assert_not_called()

    advance(0.5)
    assert proxy.current_frame().position == Point(350, 350)
    assert proxy.current_frame().scale == 0.5
    ended.assert_called_once()
    assert transition.finished
    assert not transition_host.is_active()


def test_easing_shapes_progress(transition_host, advance, proxy):
    transition_host.animate(proxy, MotionFrame(Point(350, 150)), TransitionConfig(1.0, ease))
    advance(0)
    advance(0.5)
    # 'ease' is well ahead of linear at the midpoint
    assert proxy.current_frame().position.x > 250 + 50


def test_nothing_to_interpolate_returns_none(transition_host, clock, proxy):
    ended = MagicMock()
    proxy.add_transition_end_listener(ended)

    assert transition_host.animate(proxy, MotionFrame(Point(150, 150)), TransitionConfig(1.0)) is None
    assert not clock.has_pending_work()
    ended.assert_not_called()


def test_new_transition_replaces_running_one(transition_host, advance, proxy):
    ended = MagicMock()
    proxy.add_transition_end_listener(ended)

    first = transition_host.animate(proxy, MotionFrame(Point(350, 150)), TransitionConfig(1.0))
    advance(0)
    advance(0.5)
    second = transition_host.animate(proxy, MotionFrame(Point(250, 350)), TransitionConfig(0.5))

    assert first.cancelled
    assert second.origin.position == Point(250, 150)
    advance(0)
    advance(0.5)

    assert proxy.current_frame().position == Point(250, 350)
    ended.assert_called_once()
    assert not first.finished
