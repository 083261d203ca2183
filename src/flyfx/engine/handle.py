"""
Collaborator interfaces consumed by the engine.

The engine never touches display elements directly: it pushes computed values
into a VisualHandle and, for declarative transits, asks a TransitionDriver to
interpolate on its behalf. Declarative transits need a TransitionTarget, a
VisualHandle that also carries the host transition hooks.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from flyfx.models.frame import MotionFrame
from flyfx.models.geometry import Point
from flyfx.models.transition import TransitionConfig


@runtime_checkable
class VisualHandle(Protocol):
    """Handle on the transient visual being animated"""

    def set_position(self, position: Point) -> None: ...

    def set_scale(self, scale: float) -> None: ...

    def set_rotation(self, degrees: float) -> None: ...

    def current_frame(self) -> MotionFrame: ...

    def add_transition_end_listener(self, callback: Callable[..., Any]) -> None: ...

    def dispose(self) -> None: ...


@runtime_checkable
class TransitionTarget(VisualHandle, Protocol):
    """VisualHandle a TransitionDriver can animate and signal"""

    def set_transition(self, description: Optional[str]) -> None: ...

    def dispatch_transition_end(self) -> int: ...


class TransitionDriver(Protocol):
    """Host transition primitive used by the declarative strategy"""

    def animate(
        self,
        handle: TransitionTarget,
        target: MotionFrame,
        config: TransitionConfig,
    ) -> Optional[Any]:
        """
        Start interpolating handle towards target.

        Returns None when there is nothing to interpolate; in that case no
        transition-end signal will ever be delivered.
        """
        ...
