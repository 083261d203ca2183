"""
Base Effect Class

All effects inherit from BaseEffect and implement run().

An effect is the application-facing side of a transit: it resolves elements
on the Stage, builds the transient visual and its ElementProxy, turns its
options into a MotionConfig and hands everything to the TrajectoryEngine.
"""

from typing import Any, Callable, Dict, Optional, Tuple, Type

from flyfx.effects.options import EffectOptions
from flyfx.engine.trajectory import DEFAULT_PX_PER_METER, to_pixel_acceleration
from flyfx.engine.trajectory_engine import TrajectoryEngine
from flyfx.models.enums import EffectID, LogCategory
from flyfx.models.geometry import Rect
from flyfx.models.motion import AnimationSession, MotionConfig
from flyfx.stage.element import Element
from flyfx.stage.proxy import ElementProxy
from flyfx.stage.stage import Stage
from flyfx.stage.transform import format_number
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EFFECT)


def px(value: float) -> str:
    return f"{format_number(value)}px"


def box_style(rect: Rect) -> Dict[str, str]:
    """Absolute placement styles reproducing rect"""
    return {
        "position": "absolute",
        "top": px(rect.top),
        "left": px(rect.left),
        "width": px(rect.width),
        "height": px(rect.height),
    }


class BaseEffect:
    """
    Base class for trajectory effects

    Subclasses set EFFECT_ID / OPTIONS and implement run(), returning the
    launched AnimationSession (or None when nothing was started).
    """
    EFFECT_ID: EffectID
    OPTIONS: Type[EffectOptions] = EffectOptions

    def __init__(
        self,
        stage: Stage,
        engine: TrajectoryEngine,
        px_per_meter: float = DEFAULT_PX_PER_METER,
    ):
        self.stage = stage
        self.engine = engine
        self.px_per_meter = px_per_meter

    # ------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------

    def run(self, flying_id: str, target_id: str, options: EffectOptions) -> Optional[AnimationSession]:
        raise NotImplementedError

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def find_pair(self, flying_id: str, target_id: str) -> Tuple[Optional[Element], Optional[Element]]:
        return self.stage.get_element_by_id(flying_id), self.stage.get_element_by_id(target_id)

    def pixel_acceleration(self, value: float) -> float:
        return to_pixel_acceleration(value, self.px_per_meter)

    def start_transit(
        self,
        flying: Element,
        proxy: ElementProxy,
        build_config: Callable[[], MotionConfig],
        remove_original: bool,
        **launch_options: Any,
    ) -> AnimationSession:
        """
        Build the MotionConfig and launch it. The original element is only
        removed once the engine has accepted the transit.

        Raises:
            ConfigurationError: the transient visual is removed again and the
                original is left in place
        """
        try:
            session = self.engine.launch(build_config(), proxy, **launch_options)
        except Exception:
            proxy.dispose()
            log.warn(f"{self.EFFECT_ID.name} not started, stage restored", element=repr(flying))
            raise

        if remove_original:
            flying.remove()
        return session

    @staticmethod
    def reset_transformation(clone: Element) -> None:
        clone.style["transform"] = "none"
        clone.style["transform-origin"] = "center center"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.EFFECT_ID.name})"
