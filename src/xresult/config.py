"""
Configuration — logging settings for the execution boundary.

Uses pydantic-settings to load from environment variables (XRESULT_*),
validating values when the settings object is built:

    XRESULT_LOG_LEVEL=DEBUG
    XRESULT_LOG_FORMAT=json

The Result core never logs; only LoggingExecutionContext emits events, and
configure_structlog() decides where they go.
"""

from __future__ import annotations

import logging
from typing import Literal

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseSettings):
    """
    Logging configuration.

    Load order (highest priority first):
      1. Keyword arguments
      2. Environment variables (XRESULT_LOG_LEVEL, XRESULT_LOG_FORMAT)
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="XRESULT_",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum level emitted")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="console for humans, json for log shippers",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard level names in any case, reject the rest."""
        normalized = value.strip().upper()
        if normalized not in _LEVEL_NAMES:
            raise ValueError(
                f"log_level must be one of {', '.join(_LEVEL_NAMES)}, got {value!r}"
            )
        return normalized


def configure_structlog(settings: LoggingSettings | None = None) -> None:
    """
    Configure structlog for structured logging.

    json: JSON lines to stdout (machine-readable).
    console: colored, human-readable output.
    """
    settings = settings or LoggingSettings()
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.log_format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
