"""
Transition Models

Defines the configuration handed to the host transition primitive and the
easing curves it understands.
"""

from typing import Callable, Dict, Optional, Union

from flyfx.errors import ConfigurationError
from flyfx.models.enums import EasingID

EaseFunction = Callable[[float], float]


class TransitionConfig:
    """
    Configuration for one host transition

    Attributes:
        duration: Total transition duration in seconds
        ease_function: Easing function (t: 0.0-1.0) → (factor: 0.0-1.0)

    Examples:
        # Constant-velocity slide (cannon ball X axis)
        slide = TransitionConfig(duration=1.2, ease_function=ease_linear)

        # Default fly-to curve
        fly = TransitionConfig(duration=0.4, ease_function=resolve_easing("ease"))
    """

    def __init__(
        self,
        duration: float = 0.3,
        ease_function: Optional[EaseFunction] = None,
    ):
        if duration <= 0:
            raise ConfigurationError(
                f"transition duration must be > 0, got {duration}",
                details={"duration": duration},
            )
        self.duration = duration
        self.ease_function = ease_function or ease_linear

    def __repr__(self):
        name = getattr(self.ease_function, "__name__", "custom")
        return f"TransitionConfig({self.duration}s, {name})"


# === Easing Functions ===

def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Progress (0.0 = start, 1.0 = end)

    Returns:
        Interpolation factor (0.0 to 1.0)
    """
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out (very smooth acceleration/deceleration)"""
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EaseFunction:
    """
    Build a CSS-style cubic-bezier timing function.

    Control points are (0,0), (x1,y1), (x2,y2), (1,1). For a progress value
    x the curve parameter u is found by Newton iteration, with bisection as
    fallback when the slope is too flat.
    """

    def bezier(u: float, p1: float, p2: float) -> float:
        # B(u) = 3(1-u)²u·p1 + 3(1-u)u²·p2 + u³
        return 3 * (1 - u) ** 2 * u * p1 + 3 * (1 - u) * u ** 2 * p2 + u ** 3

    def slope(u: float, p1: float, p2: float) -> float:
        return 3 * (1 - u) ** 2 * p1 + 6 * (1 - u) * u * (p2 - p1) + 3 * u ** 2 * (1 - p2)

    def solve_u(x: float) -> float:
        u = x
        for _ in range(8):
            err = bezier(u, x1, x2) - x
            if abs(err) < 1e-7:
                return u
            d = slope(u, x1, x2)
            if abs(d) < 1e-6:
                break
            u -= err / d

        lo, hi = 0.0, 1.0
        u = x
        while hi - lo > 1e-7:
            if bezier(u, x1, x2) < x:
                lo = u
            else:
                hi = u
            u = (lo + hi) / 2
        return u

    def ease(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return bezier(solve_u(t), y1, y2)

    ease.__name__ = f"cubic_bezier({x1}, {y1}, {x2}, {y2})"
    return ease


ease = cubic_bezier(0.25, 0.1, 0.25, 1.0)
ease.__name__ = "ease"
ease_in = cubic_bezier(0.42, 0.0, 1.0, 1.0)
ease_in.__name__ = "ease_in"
ease_out = cubic_bezier(0.0, 0.0, 0.58, 1.0)
ease_out.__name__ = "ease_out"
ease_in_out = cubic_bezier(0.42, 0.0, 0.58, 1.0)
ease_in_out.__name__ = "ease_in_out"

EASINGS: Dict[EasingID, EaseFunction] = {
    EasingID.LINEAR: ease_linear,
    EasingID.EASE: ease,
    EasingID.EASE_IN: ease_in,
    EasingID.EASE_OUT: ease_out,
    EasingID.EASE_IN_OUT: ease_in_out,
}


def resolve_easing(value: Union[str, EasingID, EaseFunction, None]) -> EaseFunction:
    """Map a name ("ease", "linear", ...), an EasingID or a callable to an easing function"""
    if value is None:
        return ease_linear
    if callable(value):
        return value
    try:
        easing_id = value if isinstance(value, EasingID) else EasingID(value)
    except ValueError:
        raise ConfigurationError(
            f"Unknown easing '{value}'",
            details={"easing": value, "valid": [e.value for e in EasingID]},
        ) from None
    return EASINGS[easing_id]


def easing_name(function: EaseFunction) -> str:
    """CSS-style name of a registered easing ('ease-in'), else the function name"""
    for easing_id, registered in EASINGS.items():
        if registered is function:
            return easing_id.value
    return getattr(function, "__name__", "custom")
