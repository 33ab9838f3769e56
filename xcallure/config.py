import logging
import os

from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

_VALID_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_truthy(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


class ConverterSettings(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    log_level: str = "WARNING"
    fail_fast: bool = False

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _VALID_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_VALID_LEVELS)}")
        return level


def load_settings() -> ConverterSettings:
    """Build settings from XCALLURE_* environment variables."""

    level = _env_str("XCALLURE_LOG_LEVEL", "WARNING")
    if level.upper() not in _VALID_LEVELS:
        logger.warning("Ignoring unknown XCALLURE_LOG_LEVEL %r", level)
        level = "WARNING"

    return ConverterSettings(
        log_level=level,
        fail_fast=_env_truthy("XCALLURE_FAIL_FAST"),
    )
