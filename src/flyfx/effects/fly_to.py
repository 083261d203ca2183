"""
Fly To Effect

Clones the flying element on top of the stage body and slides the clone to
the target's centre while shrinking it, using the host transition with an
easing curve. The clone is removed once the transition ends.
"""

from typing import Optional

from flyfx.effects.base import BaseEffect, box_style
from flyfx.effects.options import FlyToOptions
from flyfx.models.enums import EffectID, LogCategory, PositioningMode
from flyfx.models.motion import AnimationSession, MotionConfig
from flyfx.models.transition import resolve_easing
from flyfx.stage.proxy import ElementProxy
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EFFECT)


class FlyToEffect(BaseEffect):
    """
    Eased slide-and-shrink.

    Parameters:
        duration: seconds (default 0.4)
        scale: scale on arrival (default 0.1)
        easing: host easing name (default "ease")
    """
    EFFECT_ID = EffectID.FLY_TO
    OPTIONS = FlyToOptions

    def run(self, flying_id: str, target_id: str, options: FlyToOptions) -> Optional[AnimationSession]:
        flying, target = self.find_pair(flying_id, target_id)
        if flying is None or target is None:
            log.warn(
                "fly_to skipped: element not found",
                flying=flying_id if flying is None else "ok",
                target=target_id if target is None else "ok",
            )
            return None

        flying_rect = flying.get_bounding_client_rect()
        clone = flying.clone(deep=True)
        clone.update_style(box_style(flying_rect))
        clone.update_style({"z-index": "99", "opacity": "1", "animation": "none"})
        if options.reset_transformation:
            self.reset_transformation(clone)
        clone.update_style(options.clone_styles)
        self.stage.body.append_child(clone)

        target_rect = target.get_bounding_client_rect()
        proxy = ElementProxy(clone, PositioningMode.TRANSLATE, origin=flying_rect.center)

        return self.start_transit(
            flying,
            proxy,
            lambda: MotionConfig(
                start=flying_rect.center,
                end=target_rect.center,
                duration=options.duration,
                move_x=options.move_x,
                move_y=options.move_y,
                target_scale=options.scale,
                on_complete=options.on_transition_end,
            ),
            options.remove_original,
            ease_function=resolve_easing(options.easing),
        )
