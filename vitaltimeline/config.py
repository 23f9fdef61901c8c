"""Configuration for the timeline engine.

Values come from environment variables prefixed with ``VITALTIMELINE_`` (or a
``.env`` file) with the defaults below.

Example:
    >>> from vitaltimeline.config import get_settings
    >>> get_settings().default_sample_rate_ms
    1000
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimelineSettings(BaseSettings):
    """Engine settings loaded from environment variables.

    Attributes:
        default_duration_sec: Duration of a fresh timeline in seconds.
        default_sample_rate_ms: Sample spacing of a fresh timeline in ms.
        clock_start: Wall-clock start ("H:MM") for the Clock export column.
        history_limit: Maximum number of undo steps kept by the store.
        min_import_sample_rate_ms: Floor for the sample rate inferred on CSV import.
        cascade_enabled: Initial state of the global cascade switch.
        log_level: Logging level used by the command line front end.
    """

    model_config = SettingsConfigDict(
        env_prefix="VITALTIMELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_duration_sec: float = Field(default=1800.0, gt=0)
    default_sample_rate_ms: int = Field(default=1000, gt=0)
    clock_start: str = "00:00"
    history_limit: int = Field(default=100, ge=0)
    min_import_sample_rate_ms: int = Field(default=1000, gt=0)
    cascade_enabled: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("clock_start")
    @classmethod
    def _check_clock_start(cls, value: str) -> str:
        return check_clock_start(value)


def check_clock_start(value: str) -> str:
    """Validate an ``H:MM`` wall-clock start and return it unchanged.

    Raises:
        ValueError: If the value is malformed or out of range.
    """
    hours, _, minutes = value.partition(":")
    if not (hours.isdigit() and minutes.isdigit()):
        raise ValueError(f"clock_start must look like H:MM, got {value!r}")
    if int(hours) > 23 or int(minutes) > 59:
        raise ValueError(f"clock_start out of range: {value!r}")
    return value


@lru_cache
def get_settings() -> TimelineSettings:
    """Get cached settings instance."""
    return TimelineSettings()
