"""
Effect Service

Application-facing entry point: validates effect options (config defaults
merged under call-site overrides) and runs the registered effect.
"""

from typing import Any, Callable, Dict, Optional, Type

from flyfx.effects.base import BaseEffect
from flyfx.effects.cannon_ball import CannonBallEffect
from flyfx.effects.fly_to import FlyToEffect
from flyfx.effects.options import build_options
from flyfx.effects.projectile import ProjectileEffect
from flyfx.engine.frame_clock import FrameClock
from flyfx.engine.trajectory import DEFAULT_PX_PER_METER
from flyfx.engine.trajectory_engine import TrajectoryEngine
from flyfx.managers.config_manager import ConfigManager
from flyfx.models.enums import EffectID, LogCategory
from flyfx.models.motion import AnimationSession
from flyfx.stage.stage import Stage
from flyfx.stage.transition_host import TransitionHost
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EFFECT)


def _build_effect_registry() -> Dict[EffectID, Type[BaseEffect]]:
    """Build effect registry from the effect classes"""
    classes = (FlyToEffect, CannonBallEffect, ProjectileEffect)
    return {effect_class.EFFECT_ID: effect_class for effect_class in classes}


class EffectService:
    """
    Service for triggering trajectory effects on a Stage

    Example:
        service = EffectService.create(stage, ConfigManager("flyfx.yaml"))
        await service.clock.start()

        service.fly_to("coin", "wallet", scale=0.2)
        service.cannon_ball("ball", "basket", on_transition_end=score)

        await service.engine.wait_for_idle()
    """

    EFFECTS: Dict[EffectID, Type[BaseEffect]] = _build_effect_registry()

    def __init__(
        self,
        stage: Stage,
        engine: TrajectoryEngine,
        config_manager: Optional[ConfigManager] = None,
    ):
        self.stage = stage
        self.engine = engine
        self.config_manager = config_manager

        px_per_meter = config_manager.engine.px_per_meter if config_manager else DEFAULT_PX_PER_METER
        self.effects: Dict[EffectID, BaseEffect] = {
            effect_id: effect_class(stage, engine, px_per_meter)
            for effect_id, effect_class in self.EFFECTS.items()
        }

        log.info("EffectService initialized", effects=[e.name for e in self.effects])

    @classmethod
    def create(
        cls,
        stage: Stage,
        config_manager: Optional[ConfigManager] = None,
        time_source: Optional[Callable[[], float]] = None,
    ) -> "EffectService":
        """
        Wire clock, transition host and engine from configuration.

        Args:
            stage: Display tree the effects run on
            config_manager: Loaded (or loadable) configuration; factory defaults when None
            time_source: Clock time source (tests pass a ManualTimeSource)
        """
        config_manager = config_manager or ConfigManager()
        config_manager.apply_logging()

        settings = config_manager.engine
        if time_source is None:
            clock = FrameClock(fps=settings.fps)
        else:
            clock = FrameClock(fps=settings.fps, time_source=time_source)
        engine = TrajectoryEngine(clock, TransitionHost(clock))
        return cls(stage, engine, config_manager)

    @property
    def clock(self) -> FrameClock:
        return self.engine.clock

    # ============================================================
    # Triggering
    # ============================================================

    def trigger(
        self,
        effect_id: EffectID,
        flying_id: str,
        target_id: str,
        **options: Any,
    ) -> Optional[AnimationSession]:
        """
        Run one effect.

        Args:
            effect_id: Which effect
            flying_id: Element that flies
            target_id: Element it flies to
            **options: Effect options overriding configured defaults

        Returns:
            The launched session, or None when the effect skipped (missing element)

        Raises:
            ConfigurationError: invalid options
            ElementNotFoundError: projectile with a missing element
        """
        effect = self.effects[effect_id]
        defaults = self.config_manager.effect_defaults(effect_id) if self.config_manager else {}
        validated = build_options(effect.OPTIONS, {**defaults, **options})

        log.info(
            f"Triggering {effect_id.name}",
            flying=flying_id,
            target=target_id,
            duration=f"{validated.duration}s",
        )
        return effect.run(flying_id, target_id, validated)

    def fly_to(self, flying_id: str, target_id: str, **options: Any) -> Optional[AnimationSession]:
        return self.trigger(EffectID.FLY_TO, flying_id, target_id, **options)

    def cannon_ball(self, flying_id: str, target_id: str, **options: Any) -> Optional[AnimationSession]:
        return self.trigger(EffectID.CANNON_BALL, flying_id, target_id, **options)

    def projectile(self, flying_id: str, target_id: str, **options: Any) -> AnimationSession:
        return self.trigger(EffectID.PROJECTILE, flying_id, target_id, **options)
