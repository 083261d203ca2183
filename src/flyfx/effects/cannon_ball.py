"""
Cannon Ball Effect

Constant horizontal velocity with gravity on the vertical axis. The clone
sits inside an absolutely positioned wrapper placed over the flying element;
the wrapper is what gets removed at the end.

Scheduling follows from the moving axes:
    move_y              imperative (gravity needs per-frame integration)
    move_x only         host transition, linear
    neither             timer for the full duration
"""

from typing import Optional

from flyfx.effects.base import BaseEffect, box_style
from flyfx.effects.options import CannonBallOptions
from flyfx.models.enums import EffectID, LogCategory, PositioningMode
from flyfx.models.motion import AnimationSession, MotionConfig
from flyfx.models.transition import ease_linear
from flyfx.stage.element import Element
from flyfx.stage.proxy import ElementProxy
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EFFECT)


class CannonBallEffect(BaseEffect):
    EFFECT_ID = EffectID.CANNON_BALL
    OPTIONS = CannonBallOptions

    def run(self, flying_id: str, target_id: str, options: CannonBallOptions) -> Optional[AnimationSession]:
        flying, target = self.find_pair(flying_id, target_id)
        if flying is None or target is None:
            log.warn(
                "cannon_ball skipped: element not found",
                flying=flying_id if flying is None else "ok",
                target=target_id if target is None else "ok",
            )
            return None

        flying_rect = flying.get_bounding_client_rect()
        target_rect = target.get_bounding_client_rect()

        wrapper = Element("div")
        wrapper.update_style(box_style(flying_rect))
        wrapper.update_style({"z-index": "99", "overflow": "visible", "pointer-events": "none"})

        clone = flying.clone(deep=True)
        clone.update_style({
            "position": "absolute",
            "top": "0px",
            "left": "0px",
            "width": "100%",
            "height": "100%",
            "transform": "none",
        })
        wrapper.append_child(clone)
        self.stage.body.append_child(wrapper)

        gravity = self.pixel_acceleration(0.0 if options.fly_3d else options.acceleration)
        proxy = ElementProxy(clone, PositioningMode.TRANSLATE, root=wrapper, origin=flying_rect.center)

        log.debug("cannon_ball prepared", gravity=f"{gravity}px/s²", fly_3d=options.fly_3d)
        return self.start_transit(
            flying,
            proxy,
            lambda: MotionConfig(
                start=flying_rect.center,
                end=target_rect.center,
                duration=options.duration,
                acceleration_y=gravity,
                move_x=options.move_x,
                move_y=options.move_y,
                # scale only follows the vertical flight
                target_scale=options.scale if options.move_y else 1.0,
                on_complete=options.on_transition_end,
            ),
            options.remove_original,
            ease_function=ease_linear,
        )
