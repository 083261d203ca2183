"""
Geometry primitives

Point and Rect in pixel units. Both are immutable.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """2D point or offset in pixels"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> tuple:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (layout box)"""
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def origin(self) -> Point:
        return Point(self.left, self.top)

    @property
    def center(self) -> Point:
        """Anchor point used as a trajectory endpoint"""
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.left + dx, self.top + dy, self.width, self.height)

    def relative_to(self, container: "Rect") -> "Rect":
        """Same rectangle expressed in the container's coordinate space"""
        return Rect(self.left - container.left, self.top - container.top, self.width, self.height)
