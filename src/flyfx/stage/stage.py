"""
Stage - root of the display tree and the lookup surface used by effects.
"""

from typing import Dict, Optional

from flyfx.models.enums import LogCategory
from flyfx.models.geometry import Rect
from flyfx.stage.element import Element
from flyfx.stage.transform import parse_transform
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.STAGE)


class Stage:
    """
    Display tree with a fixed-size body.

    Example:
        stage = Stage(1280, 720)
        stage.create_element("card", Rect(100, 100, 100, 100))
        stage.get_element_by_id("card")
    """

    def __init__(self, width: float = 1920, height: float = 1080):
        self.body = Element("body", rect=Rect(0, 0, width, height))
        self.body.is_root = True

    def create_element(
        self,
        id: Optional[str] = None,
        rect: Optional[Rect] = None,
        parent: Optional[Element] = None,
        tag: str = "div",
        style: Optional[Dict[str, str]] = None,
    ) -> Element:
        """Create an element and attach it (to body unless parent is given)"""
        element = Element(tag, id=id, rect=rect, style=style)
        (parent or self.body).append_child(element)
        log.debug(f"Element created: {element!r}", rect=rect)
        return element

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        """First connected element with this id, in document order"""
        for element in self.body.iter_descendants():
            if element.id == element_id:
                return element
        return None

    def get_computed_style(self, element: Element) -> Dict[str, str]:
        """
        Inline styles with the transform resolved to matrix() form, the way
        a browser reports it ('none' when there is no transform).
        """
        computed = dict(element.style)
        matrix = parse_transform(element.style.get("transform", "none"))
        computed["transform"] = "none" if matrix.is_identity else matrix.to_css()
        return computed

    @property
    def element_count(self) -> int:
        return sum(1 for _ in self.body.iter_descendants())
