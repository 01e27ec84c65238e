"""
Logging Configuration Constants

This module contains all constants related to logging configuration,
log levels, and log formatting.
"""

from typing import ClassVar


class LogLevels:
    """Log level constants."""

    # --verbosity value to logging level name
    BY_VERBOSITY: ClassVar[dict[str, str]] = {
        "q": "WARNING",
        "m": "INFO",
        "diag": "DEBUG",
    }


class LogConfig:
    """Log configuration constants."""

    LOGGER_NAME = "mlforge"
    DEFAULT_LEVEL = "INFO"
    DEFAULT_ENCODING = "utf-8"
    TIME_FORMAT = "[%H:%M:%S]"


class LogOperations:
    """Operation names used in structured log records."""

    RESOLVE_OPTIONS = "resolve_options"
    VALIDATE_OPTIONS = "validate_options"
    PARSE_ARGS = "parse_args"
    NEW_COMMAND = "new_command"
