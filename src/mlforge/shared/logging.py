"""
Structured logging system for mlforge.

This module provides helper functions that record structured log entries,
including context information when options fail to parse or validate.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from mlforge.shared.constants import LogConfig, LogLevels


class StructuredFormatter(logging.Formatter):
    """Formatter that renders log records as JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "error_code"):
            log_entry["error_code"] = record.error_code

        if hasattr(record, "context"):
            log_entry["context"] = record.context

        if hasattr(record, "operation"):
            log_entry["operation"] = record.operation

        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms

        if hasattr(record, "result_info"):
            log_entry["result_info"] = record.result_info

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def _create_rich_console() -> Console:
    """Create the rich console used for log output (stderr, custom theme)."""
    custom_theme = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red bold reverse",
            "log.time": "dim cyan",
            "log.message": "white",
            "log.path": "dim blue",
        }
    )
    # stdout is reserved for command output (tables and JSON documents)
    return Console(theme=custom_theme, stderr=True)


def setup_structured_logger(
    name: str = LogConfig.LOGGER_NAME,
    level: str = LogConfig.DEFAULT_LEVEL,
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Configure a logger for structured logging.

    Args:
        name: Logger name (default: "mlforge")
        level: Log level name (default: "INFO")
        log_file: Optional path of a JSON log file
        use_rich_console: Whether console output goes through rich

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        logger.handlers.clear()

    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    if use_rich_console:
        handler: logging.Handler = RichHandler(
            console=_create_rich_console(),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            log_time_format=LogConfig.TIME_FORMAT,
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
    handler.setLevel(log_level)
    logger.addHandler(handler)

    # The file handler always writes JSON
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding=LogConfig.DEFAULT_ENCODING)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def set_log_level(level: str, name: str = LogConfig.LOGGER_NAME) -> None:
    """Change the level of a configured logger and all of its handlers."""
    logger = logging.getLogger(name)
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)
    for handler in logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(log_level)


def level_for_verbosity(verbosity: str) -> str:
    """Translate a --verbosity value (q, m, diag) into a logging level name."""
    return LogLevels.BY_VERBOSITY.get(verbosity, LogConfig.DEFAULT_LEVEL)


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
) -> None:
    """Record that an operation completed successfully."""
    logger.debug(
        "Operation '%s' completed successfully",
        operation,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
        },
    )


def log_operation_start(
    logger: logging.Logger,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Record the start of an operation."""
    logger.debug(
        "Starting operation '%s'",
        operation,
        extra={
            "operation": operation,
            "context": context or {},
        },
    )


def log_validation_error(
    logger: logging.Logger,
    field: str,
    value: Any,
    reason: str,
    context: dict[str, Any] | None = None,
    level: int = logging.WARNING,
) -> None:
    """
    Record a failed validation of an option or option combination.

    Args:
        logger: Logger instance
        field: Name of the option (or rule) that failed
        value: Offending value
        reason: Why validation failed
        context: Additional context (optional)
        level: Log level of the record (default: WARNING)
    """
    validation_context = {
        "field": field,
        "value": str(value),
        "reason": reason,
    }

    if context:
        validation_context.update(context)

    logger.log(
        level,
        "Validation failed for '%s': %s",
        field,
        reason,
        extra={
            "error_code": "VALIDATION_ERROR",
            "context": validation_context,
            "operation": "validation",
        },
    )
