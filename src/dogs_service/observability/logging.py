"""Structured logging configuration using structlog.

Environment-aware output: JSON in production, colored console otherwise.
The request id bound by ``RequestIdMiddleware`` is merged into every event
logged while a request is in flight.

Usage:
    from dogs_service.observability import get_logger

    logger = get_logger(__name__)
    logger.info("dog_created", dog_id=7)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, MutableMapping

Processor = structlog.types.Processor

LIFESPAN_PRIORITY_LOGGING = 50

SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "authorization",
        "api_key",
        "secret",
        "credential",
        "database_url",
    }
)

REDACTED_VALUE: str = "***REDACTED***"


class LoggingSettings(BaseSettings):
    """Logging configuration from ``LOG_LEVEL`` and ``ENVIRONMENT``.

    Example:
        >>> LoggingSettings(environment="production").use_json_logs
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if isinstance(v, str):
            return v.upper()
        return str(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            msg = f"log_level must be one of {valid_levels}"
            raise ValueError(msg)
        return v

    @property
    def use_json_logs(self) -> bool:
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


class SensitiveDataProcessor:
    """Structlog processor that redacts sensitive keys from the event dict.

    A key is sensitive when it is listed in ``SENSITIVE_FIELDS`` or contains
    ``password`` or ``token``.
    """

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key in list(event_dict.keys()):
            if self._is_sensitive(key):
                event_dict[key] = REDACTED_VALUE
        return event_dict

    def _is_sensitive(self, key: str) -> bool:
        key_lower = key.lower()
        if key_lower in SENSITIVE_FIELDS:
            return True
        return "password" in key_lower or "token" in key_lower


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Cached ``LoggingSettings``; clear with ``get_logging_settings.cache_clear()``."""
    return LoggingSettings()


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog processors, level filtering and rendering.

    Called once at startup by :func:`logging_lifespan`.

    Args:
        settings: Explicit settings; loaded from the environment when omitted.
    """
    if settings is None:
        settings = get_logging_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SensitiveDataProcessor(),
        structlog.processors.format_exc_info,
    ]

    if settings.use_json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_int),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=settings.log_level_int)


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, with ``logger_name`` bound when ``name`` is given.

    The logger stays lazy until first use, so module-level loggers pick up
    the configuration applied later by :func:`configure_logging`.
    """
    if name is None:
        return structlog.get_logger()
    # ``logger`` is a positional parameter of wrap_logger and cannot be an initial value.
    return structlog.get_logger(logger_name=name)


@asynccontextmanager
async def logging_lifespan(app: Any) -> AsyncIterator[None]:
    """Configure logging before any other startup hook runs."""
    configure_logging()
    yield
