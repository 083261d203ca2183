"""
Motion frame model

A MotionFrame is one computed sample of a transit: what the engine pushes to
a Visual Proxy handle on a tick (or once, as the declarative target).
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from flyfx.models.geometry import Point


@dataclass(frozen=True)
class MotionFrame:
    """
    position    -> where the element is (handle's positioning space)
    scale       -> uniform scale factor
    rotation_deg -> heading plus base rotation, None when not tracked
    """

    position: Point
    scale: float = 1.0
    rotation_deg: Optional[float] = None
    elapsed: float = 0.0
    timestamp: float = field(default_factory=time.time, compare=False)

    def with_position(self, position: Point) -> "MotionFrame":
        return MotionFrame(position, self.scale, self.rotation_deg, self.elapsed)

    def lerp(self, target: "MotionFrame", factor: float) -> "MotionFrame":
        """Blend towards target; factor 0.0 = self, 1.0 = target"""
        if factor >= 1.0:
            return target

        x = self.position.x + (target.position.x - self.position.x) * factor
        y = self.position.y + (target.position.y - self.position.y) * factor
        scale = self.scale + (target.scale - self.scale) * factor
        return MotionFrame(Point(x, y), scale, target.rotation_deg)
