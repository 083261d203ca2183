"""
Scale curve: the element keeps its size for the first two thirds of the
flight, then ramps linearly to the target scale so it reads as "arriving".
"""

RAMP_START = 0.66
RAMP_SPAN = 1.0 - RAMP_START


class ScaleCurve:
    """progress (0.0-1.0) → scale factor"""

    def __init__(self, target_scale: float = 1.0):
        self.target_scale = target_scale

    def scale(self, progress: float) -> float:
        if progress <= RAMP_START:
            return 1.0
        if progress >= 1.0:
            return self.target_scale

        t = (progress - RAMP_START) / RAMP_SPAN
        return 1.0 + (self.target_scale - 1.0) * t

    __call__ = scale

    def __repr__(self) -> str:
        return f"ScaleCurve(target={self.target_scale})"
