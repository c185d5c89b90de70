"""Scheduler configuration loaded from environment variables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Sequence

import pytz
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)
DEFAULT_FALLBACK_HOURS: tuple[int, ...] = (18, 19, 20)
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SchedulingConfigError(ValueError):
    """Raised for misconfiguration or degenerate arguments from a caller."""


class SchedulerConfig(BaseSettings):
    """Tunable knobs of the posting-time scheduler."""

    model_config = SettingsConfigDict(
        env_prefix="TIMING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        validate_default=True,
    )

    top_n: int = Field(3, ge=1)
    fallback_hours: Annotated[tuple[int, ...], NoDecode] = Field(DEFAULT_FALLBACK_HOURS)
    default_hour: int = Field(18, ge=0, le=23)
    max_events: int = Field(500, ge=1)
    timezone: str | None = None
    log_level: str = "INFO"

    @field_validator("fallback_hours", mode="before")
    @classmethod
    def _split_hours(cls, value: str | Sequence[Any] | None) -> tuple[int, ...]:
        if value is None:
            return DEFAULT_FALLBACK_HOURS
        if isinstance(value, str):
            tokens = [part.strip() for part in value.split(",") if part.strip()]
            return tuple(int(token) for token in tokens)
        return tuple(value)

    @field_validator("fallback_hours", mode="after")
    @classmethod
    def _check_hours(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("fallback_hours must not be empty")
        bad = [hour for hour in value if not 0 <= hour <= 23]
        if bad:
            raise ValueError(f"fallback_hours out of range: {bad}")
        return value

    @field_validator("timezone", mode="after")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            pytz.timezone(value.strip())
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"unknown timezone '{value}'") from exc
        return value.strip()

    @field_validator("log_level", mode="after")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"invalid log level '{value}'")
        return level

    @property
    def tzinfo(self):
        return pytz.timezone(self.timezone) if self.timezone else None


def load_config(env_path: Path | None = None, **overrides: Any) -> SchedulerConfig:
    """Load configuration from .env/environment with validation."""
    load_kwargs: dict[str, Any] = dict(overrides)
    if env_path is not None:
        load_kwargs["_env_file"] = str(env_path)
    try:
        config = SchedulerConfig(**load_kwargs)
    except ValidationError as exc:
        raise SchedulingConfigError(f"Invalid scheduler configuration: {exc}") from exc

    logger.debug(
        "SchedulerConfig loaded",
        extra={
            "event": "config.loaded",
            "extra_fields": {
                "top_n": config.top_n,
                "fallback_hours": list(config.fallback_hours),
                "default_hour": config.default_hour,
                "max_events": config.max_events,
                "timezone": config.timezone,
            },
        },
    )
    return config
