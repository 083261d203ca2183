"""
Element Proxy

VisualHandle implementation over a stage Element. Keeps the last pushed
position, scale and rotation and renders them into the element's inline
styles.

Positioning modes:
    TRANSLATE  position is an anchor in stage space; the element is
               translated by (position - origin)
    OFFSET     position is written to left/top (container-relative)
"""

from typing import Any, Callable, Optional

from flyfx.models.enums import LogCategory, PositioningMode
from flyfx.models.frame import MotionFrame
from flyfx.models.geometry import Point
from flyfx.stage.element import Element, Event, parse_length
from flyfx.stage.transform import format_number
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.STAGE)

TRANSITION_END = "transitionend"


class ElementProxy:
    """
    Handle on the transient visual (clone or wrapper+clone).

    Args:
        element: Element receiving position/scale/rotation
        mode: How positions are written (see module docstring)
        root: Outermost element removed on dispose (defaults to element)
        origin: Anchor of the untranslated layout box (TRANSLATE mode)
    """

    def __init__(
        self,
        element: Element,
        mode: PositioningMode = PositioningMode.TRANSLATE,
        root: Optional[Element] = None,
        origin: Point = Point(0.0, 0.0),
    ):
        self.element = element
        self.root = root or element
        self.mode = mode
        self.origin = origin

        if mode is PositioningMode.OFFSET:
            self._position = Point(
                parse_length(element.style.get("left")) or 0.0,
                parse_length(element.style.get("top")) or 0.0,
            )
        else:
            self._position = origin
        self._scale = 1.0
        self._rotation: Optional[float] = None
        self._disposed = False

    # ------------------------------------------------------------
    # VisualHandle
    # ------------------------------------------------------------

    def set_position(self, position: Point) -> None:
        self._position = position
        if self.mode is PositioningMode.OFFSET:
            self.element.style["left"] = f"{format_number(position.x)}px"
            self.element.style["top"] = f"{format_number(position.y)}px"
        self._render()

    def set_scale(self, scale: float) -> None:
        self._scale = scale
        self._render()

    def set_rotation(self, degrees: float) -> None:
        self._rotation = degrees
        self._render()

    def current_frame(self) -> MotionFrame:
        return MotionFrame(self._position, self._scale, self._rotation)

    def add_transition_end_listener(self, callback: Callable[..., Any]) -> None:
        self.element.add_event_listener(TRANSITION_END, callback)

    def dispose(self) -> None:
        """Remove the visual from the stage; safe to call more than once"""
        if self._disposed:
            return
        self._disposed = True
        self.root.remove()
        log.debug(f"Disposed {self.root!r}")

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ------------------------------------------------------------
    # Host transition hooks
    # ------------------------------------------------------------

    def set_transition(self, description: Optional[str]) -> None:
        if description is None:
            self.element.style.pop("transition", None)
        else:
            self.element.style["transition"] = description

    def dispatch_transition_end(self) -> int:
        return self.element.dispatch_event(Event(TRANSITION_END, detail={"property": "transform"}))

    # ------------------------------------------------------------

    def _render(self) -> None:
        parts = []
        if self.mode is PositioningMode.TRANSLATE:
            offset = self._position - self.origin
            x, y = format_number(offset.x), format_number(offset.y)
            parts.append(f"translate({x}px, {y}px)")
        if self._rotation is not None:
            parts.append(f"rotate({format_number(self._rotation)}deg)")
        parts.append(f"scale({format_number(self._scale)})")
        self.element.style["transform"] = " ".join(parts)

    def __repr__(self) -> str:
        return f"ElementProxy({self.element!r}, {self.mode.name})"
