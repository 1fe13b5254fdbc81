"""Logging and observability configuration using Pydantic Logfire.

All modules use Python's standard logging library (logging.getLogger(__name__));
once configured, Logfire captures and enriches these logs.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_context(logger, "info", "Task added", task_id="123")
"""

import logging

import logfire

from tasklist.core.config import Settings
from tasklist.core.config import settings as default_settings


def configure_logfire(settings: Settings | None = None) -> None:
    """Configure Pydantic Logfire and route standard logging into it.

    Nothing is sent to Logfire unless a token is configured.
    """
    settings = settings or default_settings
    logfire.configure(
        token=settings.logfire_token,
        service_name="tasklist",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    root = logging.getLogger()
    if not any(isinstance(handler, logfire.LogfireLoggingHandler) for handler in root.handlers):
        root.addHandler(logfire.LogfireLoggingHandler())

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for store and service operations.

    Usage:
        with span("task_store.add"):
            ...
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (task_id, request_id, operation, etc.)

    Usage:
        log_with_context(logger, "info", "Task removed", task_id="123", operation="remove")
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
