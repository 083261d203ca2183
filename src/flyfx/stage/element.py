"""
Element - node of the in-memory display tree.

Holds an id, inline styles, an optional layout rectangle, children and event
listeners. There is no layout engine: an element's box is either the rect
supplied by the application or, for absolutely positioned elements, derived
from its left/top/width/height styles inside its parent.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from flyfx.errors import TransformParseError
from flyfx.models.geometry import Rect
from flyfx.stage.transform import parse_transform

_LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))\s*(px|%)?\s*$")

EventCallback = Callable[["Event"], Any]


@dataclass
class Event:
    """Event delivered to listeners"""
    type: str
    target: Optional["Element"] = None
    detail: Dict[str, Any] = field(default_factory=dict)


@dataclass
class _Listener:
    callback: EventCallback
    once: bool = False


def parse_length(value: Optional[str], reference: float = 0.0) -> Optional[float]:
    """'120px' → 120.0, '50%' → reference / 2, anything else → None"""
    if value is None:
        return None
    match = _LENGTH_RE.match(str(value))
    if not match:
        return None
    number = float(match.group(1))
    if match.group(2) == "%":
        return reference * number / 100.0
    return number


class Element:
    """
    Display tree node.

    Example:
        card = Element("div", id="card", rect=Rect(100, 100, 100, 100))
        stage.body.append_child(card)
        card.get_bounding_client_rect().center   # Point(150, 150)
    """

    def __init__(
        self,
        tag: str = "div",
        id: Optional[str] = None,
        rect: Optional[Rect] = None,
        style: Optional[Dict[str, str]] = None,
    ):
        self.tag = tag
        self.id = id
        self.rect = rect
        self.style: Dict[str, str] = dict(style or {})
        self.attributes: Dict[str, str] = {}
        self.children: List[Element] = []
        self.parent: Optional[Element] = None
        self.is_root = False
        self._listeners: Dict[str, List[_Listener]] = {}

    # ------------------------------------------------------------
    # Tree operations
    # ------------------------------------------------------------

    def append_child(self, child: Element) -> Element:
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        """Detach from the tree. Removing a detached element is a no-op."""
        if self.parent is None:
            return
        self.parent.children.remove(self)
        self.parent = None

    @property
    def is_connected(self) -> bool:
        node: Optional[Element] = self
        while node is not None:
            if node.is_root:
                return True
            node = node.parent
        return False

    def iter_descendants(self):
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def clone(self, deep: bool = True) -> Element:
        """
        Copy id, styles, attributes and layout rect. Listeners are not
        copied; the clone starts detached.
        """
        twin = Element(self.tag, self.id, self.rect, copy.deepcopy(self.style))
        twin.attributes = dict(self.attributes)
        if deep:
            for child in self.children:
                twin.append_child(child.clone(deep=True))
        return twin

    def remove_attribute(self, name: str) -> None:
        if name == "id":
            self.id = None
        self.attributes.pop(name, None)

    # ------------------------------------------------------------
    # Styles & geometry
    # ------------------------------------------------------------

    def set_style(self, **styles: Any) -> None:
        """set_style(position="absolute", z_index=99); underscores become dashes"""
        for key, value in styles.items():
            self.style[key.replace("_", "-")] = str(value)

    def update_style(self, styles: Dict[str, Any]) -> None:
        for key, value in styles.items():
            self.style[key] = str(value)

    def _layout_rect(self) -> Rect:
        positioned = self.style.get("position") == "absolute" and self.parent is not None
        if not positioned:
            return self.rect or Rect()

        container = self.parent.get_bounding_client_rect()
        fallback = self.rect or Rect()
        left = parse_length(self.style.get("left"), container.width)
        top = parse_length(self.style.get("top"), container.height)
        width = parse_length(self.style.get("width"), container.width)
        height = parse_length(self.style.get("height"), container.height)

        return Rect(
            container.left + (left if left is not None else fallback.left - container.left),
            container.top + (top if top is not None else fallback.top - container.top),
            width if width is not None else fallback.width,
            height if height is not None else fallback.height,
        )

    def get_bounding_client_rect(self) -> Rect:
        """
        Screen rectangle of the element.

        Translations in the element's transform shift the box; rotation and
        scale are not applied to the box.
        """
        box = self._layout_rect()
        try:
            tx, ty = parse_transform(self.style.get("transform", "none")).translation
        except TransformParseError:
            # invalid transform renders as none
            return box
        if tx or ty:
            box = box.translated(tx, ty)
        return box

    @property
    def offset_width(self) -> float:
        return self._layout_rect().width

    @property
    def offset_height(self) -> float:
        return self._layout_rect().height

    # ------------------------------------------------------------
    # Events
    # ------------------------------------------------------------

    def add_event_listener(self, event_type: str, callback: EventCallback, once: bool = False) -> None:
        self._listeners.setdefault(event_type, []).append(_Listener(callback, once))

    def remove_event_listener(self, event_type: str, callback: EventCallback) -> None:
        listeners = self._listeners.get(event_type, [])
        self._listeners[event_type] = [l for l in listeners if l.callback is not callback]

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, []))

    def dispatch_event(self, event: Event) -> int:
        """Call every listener for event.type in registration order. Returns the count."""
        if event.target is None:
            event.target = self

        listeners = list(self._listeners.get(event.type, []))
        if any(l.once for l in listeners):
            self._listeners[event.type] = [l for l in self._listeners[event.type] if not l.once]

        for listener in listeners:
            listener.callback(event)
        return len(listeners)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<{self.tag}{ident}>"
