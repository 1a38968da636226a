"""Dogs service observability: structured logging."""

from dogs_service.observability.logging import (
    LIFESPAN_PRIORITY_LOGGING,
    LoggingSettings,
    SensitiveDataProcessor,
    configure_logging,
    get_logger,
    get_logging_settings,
    logging_lifespan,
)

__all__ = [
    "LIFESPAN_PRIORITY_LOGGING",
    "LoggingSettings",
    "SensitiveDataProcessor",
    "configure_logging",
    "get_logger",
    "get_logging_settings",
    "logging_lifespan",
]
