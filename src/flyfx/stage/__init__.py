"""
Stage - in-memory display tree the effects run on

- element: display tree nodes, styles and events
- stage: tree root and element lookup
- transform: transform string parsing
- proxy: VisualHandle over an element
- transition_host: declarative transition primitive
"""

from .element import Element, Event
from .stage import Stage
from .proxy import ElementProxy
from .transition_host import TransitionHost

__all__ = [
    "Element",
    "Event",
    "Stage",
    "ElementProxy",
    "TransitionHost",
]
