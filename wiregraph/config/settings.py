"""Engine settings."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from loguru import logger
from pydantic import BaseModel, ValidationError, field_validator

from ..errors import ConfigurationError
from .loader import ConfigurationLoader

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class WiregraphSettings(BaseModel):
    """Settings for logging and diagnostics."""

    log_level: str = "WARNING"
    log_format: str = DEFAULT_LOG_FORMAT
    log_resolution: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level


_settings: Optional[WiregraphSettings] = None


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> WiregraphSettings:
    """Load settings from defaults, an optional YAML file and the environment.

    Args:
        config_path: YAML file with a top-level mapping of setting names
        environ: Environment to read overrides from (defaults to ``os.environ``)

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    loader = ConfigurationLoader()
    raw: Dict[str, Any] = {}

    if config_path is not None:
        try:
            raw = loader.merge_configs(raw, loader.load_yaml(config_path))
        except (OSError, ValueError) as e:
            raise ConfigurationError.from_exception(
                e, f"Cannot load settings from {config_path}: {e}"
            ) from e

    raw = loader.merge_configs(raw, loader.env_overrides(environ))

    try:
        return WiregraphSettings(**raw)
    except ValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError.invalid_value(
            field_path, first.get("input"), first["msg"]
        ) from e


def get_settings() -> WiregraphSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def current_settings() -> Optional[WiregraphSettings]:
    """Return the settings already in effect without loading them."""
    return _settings


def configure(settings: Optional[WiregraphSettings] = None, **overrides: Any) -> WiregraphSettings:
    """Replace the process-wide settings and reapply logging.

    Args:
        settings: New settings; the current ones when omitted
        **overrides: Individual fields to change

    Returns:
        The settings now in effect
    """
    global _settings
    from ..utils.logging_config import setup_logging

    base = settings or get_settings()
    try:
        _settings = WiregraphSettings(**{**base.model_dump(), **overrides})
    except ValidationError as e:
        first = e.errors()[0]
        raise ConfigurationError.invalid_value(
            ".".join(str(part) for part in first["loc"]), first.get("input"), first["msg"]
        ) from e

    setup_logging(_settings)
    logger.debug(f"Settings updated: {_settings.model_dump(exclude={'log_format'})}")
    return _settings


def reset_settings() -> None:
    """Forget the process-wide settings (mainly for testing)."""
    global _settings
    _settings = None
