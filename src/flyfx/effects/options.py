"""
Effect option schemas - Pydantic models for the options each effect accepts
"""

from typing import Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from flyfx.errors import ConfigurationError
from flyfx.models.enums import EasingID


class EffectOptions(BaseModel):
    """Options shared by every effect"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    move_x: bool = Field(True, description="Animate the horizontal axis")
    move_y: bool = Field(True, description="Animate the vertical axis")
    duration: float = Field(1.0, gt=0, allow_inf_nan=False, description="Seconds")
    scale: float = Field(1.0, allow_inf_nan=False, description="Scale reached on arrival")
    on_transition_end: Optional[Callable[[], Any]] = Field(
        None, description="Called once when the transit completes"
    )
    remove_original: bool = Field(True, description="Remove the source element when the effect starts")


class FlyToOptions(EffectOptions):
    """fly_to: eased slide-and-shrink of a clone"""
    model_config = ConfigDict(
        json_schema_extra={"example": {"duration": 0.4, "scale": 0.1, "easing": "ease"}}
    )

    duration: float = Field(0.4, gt=0, allow_inf_nan=False)
    scale: float = Field(0.1, allow_inf_nan=False)
    easing: str = Field("ease", description="linear | ease | ease-in | ease-out | ease-in-out")
    reset_transformation: bool = False
    clone_styles: Dict[str, str] = Field(default_factory=dict)

    @field_validator("easing")
    @classmethod
    def _known_easing(cls, value: str) -> str:
        EasingID(value)
        return value


class CannonBallOptions(EffectOptions):
    """cannon_ball: linear X, gravity on Y"""
    model_config = ConfigDict(
        json_schema_extra={"example": {"duration": 1.2, "acceleration": 9.81, "fly_3d": False}}
    )

    duration: float = Field(1.2, gt=0, allow_inf_nan=False)
    acceleration: float = Field(9.81, allow_inf_nan=False, description="m/s²")
    fly_3d: bool = Field(False, description="Ignore gravity (straight flight)")


class ProjectileOptions(EffectOptions):
    """projectile: gravity arc with the clone turned along its heading"""
    model_config = ConfigDict(
        json_schema_extra={"example": {"duration": 1.0, "acceleration": 4.0, "scale": 1.0}}
    )

    acceleration: float = Field(4.0, allow_inf_nan=False, description="m/s²")
    container_id: str = Field("field", description="Element the clone is placed in (falls back to body)")
    reset_transformation: bool = False
    clone_styles: Dict[str, str] = Field(default_factory=dict)


OptionsT = TypeVar("OptionsT", bound=EffectOptions)


def build_options(model: Type[OptionsT], values: Dict[str, Any]) -> OptionsT:
    """
    Validate raw option values against an options model.

    Raises:
        ConfigurationError: listing every invalid field
    """
    try:
        return model(**values)
    except ValidationError as ex:
        problems = {
            ".".join(str(part) for part in err["loc"]) or "options": err["msg"]
            for err in ex.errors()
        }
        raise ConfigurationError(
            f"Invalid {model.__name__}",
            details=problems,
        ) from ex
