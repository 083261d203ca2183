"""
Config Manager

Loads the YAML configuration (engine settings, logging, per-effect defaults)
with a fallback to the packaged factory defaults.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from flyfx.errors import ConfigurationError
from flyfx.models.enums import EffectID, LogCategory, LogLevel
from flyfx.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.CONFIG)

FACTORY_DEFAULTS_PATH = Path(__file__).parent.parent / "config" / "factory_defaults.yaml"


class EngineSettings(BaseModel):
    """engine: section"""
    fps: int = Field(60, gt=0, description="Render loop frequency")
    px_per_meter: float = Field(100.0, gt=0, allow_inf_nan=False, description="Acceleration unit scale")


class ConfigManager:
    """
    YAML configuration with factory-defaults fallback

    Example:
        config = ConfigManager("flyfx.yaml")
        config.load()

        config.engine.fps                          # 60
        config.effect_defaults(EffectID.FLY_TO)    # {"duration": 0.4, ...}
        config.apply_logging()
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        defaults_path: Union[str, Path] = FACTORY_DEFAULTS_PATH,
    ):
        """
        Args:
            config_path: User config file; None uses the factory defaults only
            defaults_path: Factory defaults fallback
        """
        self.config_path = Path(config_path) if config_path is not None else None
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.using_defaults = False

    def load(self) -> Dict[str, Any]:
        """
        Load the user config, falling back to factory defaults on failure.

        Returns:
            Loaded config data dict
        """
        if self.config_path is not None:
            try:
                self.data = self._read(self.config_path)
                self.using_defaults = False
                log.info(f"Loaded {self.config_path.name}", sections=str(list(self.data.keys())))
                return self.data
            except (OSError, yaml.YAMLError, ConfigurationError) as ex:
                log.error(f"Failed to load {self.config_path}", error=str(ex), error_type=type(ex).__name__)
                log.warn("Falling back to factory defaults")

        self.data = self._read(self.factory_defaults_path)
        self.using_defaults = True
        log.info("Using factory defaults", path=str(self.factory_defaults_path))
        return self.data

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{path.name} must contain a mapping",
                details={"path": str(path), "type": type(data).__name__},
            )
        return data

    def _ensure_loaded(self) -> None:
        if not self.data:
            self.load()

    # ===== Sections =====

    @property
    def engine(self) -> EngineSettings:
        self._ensure_loaded()
        try:
            return EngineSettings(**(self.data.get("engine") or {}))
        except ValidationError as ex:
            raise ConfigurationError(
                "Invalid engine settings",
                details={".".join(map(str, e["loc"])): e["msg"] for e in ex.errors()},
            ) from ex

    def effect_defaults(self, effect_id: EffectID) -> Dict[str, Any]:
        """Raw option defaults for one effect (keyed by lowercase effect name)"""
        self._ensure_loaded()
        effects = self.data.get("effects") or {}
        return dict(effects.get(effect_id.name.lower()) or {})

    def logging_settings(self) -> Dict[str, Any]:
        self._ensure_loaded()
        section = self.data.get("logging") or {}
        level_name = str(section.get("level", "INFO")).upper()
        try:
            level = LogLevel[level_name]
        except KeyError:
            log.warn(f"Unknown log level '{level_name}', using INFO")
            level = LogLevel.INFO
        return {"min_level": level, "use_colors": bool(section.get("colors", True))}

    def apply_logging(self) -> None:
        """Reconfigure the global logger from the logging: section"""
        settings = self.logging_settings()
        configure_logger(**settings)
        log.debug("Logger configured", min_level=settings["min_level"].name, colors=settings["use_colors"])
