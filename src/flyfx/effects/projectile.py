"""
Projectile Effect

A gravity arc inside a container element (the "field", or the stage body
when there is none). The clone is placed with container-relative left/top,
turned along its direction of travel and keeps whatever rotation the source
element already had.
"""

from flyfx.effects.base import BaseEffect, px
from flyfx.effects.options import ProjectileOptions
from flyfx.errors import ElementNotFoundError, TransformParseError
from flyfx.models.enums import EffectID, LogCategory, PositioningMode
from flyfx.models.geometry import Point
from flyfx.models.motion import AnimationSession, MotionConfig
from flyfx.stage.element import Element
from flyfx.stage.proxy import ElementProxy
from flyfx.stage.transform import rotation_from_transform
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EFFECT)


class ProjectileEffect(BaseEffect):
    EFFECT_ID = EffectID.PROJECTILE
    OPTIONS = ProjectileOptions

    def run(self, flying_id: str, target_id: str, options: ProjectileOptions) -> AnimationSession:
        """
        Raises:
            ElementNotFoundError: flying or target element is missing
        """
        flying, target = self.find_pair(flying_id, target_id)
        if flying is None:
            raise ElementNotFoundError(flying_id)
        if target is None:
            raise ElementNotFoundError(target_id)

        container = self.stage.get_element_by_id(options.container_id) or self.stage.body

        clone = flying.clone(deep=True)
        clone.remove_attribute("id")
        clone.update_style({"position": "absolute", "pointer-events": "none", "margin": "0"})
        if options.reset_transformation:
            self.reset_transformation(clone)
        clone.update_style(options.clone_styles)
        container.append_child(clone)

        base_rotation = self.base_rotation(flying)

        flying_rect = flying.get_bounding_client_rect()
        container_rect = container.get_bounding_client_rect()
        target_rect = target.get_bounding_client_rect()

        start = flying_rect.relative_to(container_rect).origin
        target_box = target_rect.relative_to(container_rect)
        # clone centred on the target
        end = Point(
            target_box.left + (target_box.width - clone.offset_width) / 2,
            target_box.top + (target_box.height - clone.offset_height) / 2,
        )

        clone.update_style({"left": px(start.x), "top": px(start.y)})

        proxy = ElementProxy(clone, PositioningMode.OFFSET)
        return self.start_transit(
            flying,
            proxy,
            lambda: MotionConfig(
                start=start,
                end=end,
                duration=options.duration,
                acceleration_y=self.pixel_acceleration(options.acceleration),
                move_x=options.move_x,
                move_y=options.move_y,
                target_scale=options.scale,
                base_rotation_deg=base_rotation,
                track_heading=True,
                on_complete=options.on_transition_end,
            ),
            options.remove_original,
        )

    def base_rotation(self, element: Element) -> float:
        """Rotation already applied to element, from its computed transform"""
        try:
            return rotation_from_transform(self.stage.get_computed_style(element)["transform"])
        except TransformParseError as ex:
            log.warn(
                "Unreadable source transform, base rotation 0",
                transform=ex.details["transform"],
                reason=ex.details["reason"],
            )
            return 0.0
