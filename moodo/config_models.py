from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from moodo import ARGS_DIR, PROJECT_ROOT
from moodo.models import Mood

logger = logging.getLogger(__name__)


# =============================================================================
# MoodoConfig (args/moodo.yaml)
# =============================================================================

class EngineSettingsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    display_limit: int = Field(default=2, ge=1)
    starter_display_limit: int = Field(default=3, ge=1)
    generation_timeout_seconds: float = Field(default=30.0, gt=0)
    default_mood: Mood = Field(default=Mood.ENERGIZED)


class PersonalizationConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    max_interactions: int = Field(default=100, ge=1)
    max_mood_patterns: int = Field(default=50, ge=1)
    window_hours: int = Field(default=2, ge=0, le=12)
    storage_key: str = Field(default="MoodoUserLearningData", min_length=1)


class StorageConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    db_path: str = Field(default="data/moodo.db")

    def resolved_db_path(self) -> Path:
        path = Path(self.db_path)
        return path if path.is_absolute() else PROJECT_ROOT / path


class LoggingSettingsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)


class MoodoConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    engine: EngineSettingsConfig = Field(default_factory=EngineSettingsConfig)
    personalization: PersonalizationConfig = Field(default_factory=PersonalizationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingSettingsConfig = Field(default_factory=LoggingSettingsConfig)


# =============================================================================
# Loader
# =============================================================================

_CONFIG_MAP: dict[str, type[BaseModel]] = {
    "moodo": MoodoConfig,
}


def load_and_validate(config_name: str, model_class: type[BaseModel] | None = None) -> BaseModel:
    """Read args/<config_name>.yaml into its model, falling back to defaults.

    A missing or empty file is not an error. An unreadable file, broken YAML
    or values the model rejects are logged and replaced by defaults.
    """
    model_class = model_class or _CONFIG_MAP.get(config_name)
    if model_class is None:
        raise ValueError(f"Unknown config: {config_name}. Available: {sorted(_CONFIG_MAP)}")

    yaml_path = ARGS_DIR / f"{config_name}.yaml"
    if not yaml_path.exists():
        logger.debug(f"No {yaml_path.name}, using defaults")
        return model_class()

    try:
        with open(yaml_path) as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"expected a mapping at the top level, got {type(raw).__name__}")
        return model_class.model_validate(raw)
    except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
        logger.warning(f"Config validation failed for {config_name}: {e}, using defaults")
        return model_class()


def load_config() -> MoodoConfig:
    return load_and_validate("moodo")
