"""
CLI Error Handling Utilities

This module provides utilities for consistent error handling across CLI
commands, including standardized error output formatting and exception
mapping. Every message an error carries is written out, so all violations
of an invocation reach the user together.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from mlforge.shared.constants import CLIDefaults, CLIMessages
from mlforge.shared.errors import (
    ApplicationError,
    CliError,
    MLForgeError,
    create_cli_error,
    create_cli_output_error,
)

logger = logging.getLogger(__name__)


def format_json_output(
    command: str,
    *,
    success: bool,
    errors: list[str] | None = None,
    data: dict[str, Any] | None = None,
) -> bytes:
    """Format command output as a JSON document.

    Args:
        command: The command that was executed
        success: Whether the operation was successful
        errors: List of error messages
        data: Additional data to include

    Returns:
        JSON-formatted bytes for output
    """
    output: dict[str, Any] = {
        "success": success,
        "command": command,
    }

    if errors:
        output["errors"] = errors

    if data:
        output["data"] = data

    return json.dumps(output, indent=2, default=str).encode("utf-8")


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context)
    messages = _collect_messages(error, cli_error)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, messages, error_context, json_output=json_output)

    return cli_error.exit_code


def _create_error_context(
    error: Exception,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    """Create structured error context for logging."""
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error_to_cli_error(
    error: Exception,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, ApplicationError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
            code=error.code,
            exit_code=CLIDefaults.EXIT_ERROR,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            original_error=error,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"{CLIMessages.Error.UNEXPECTED_ERROR}{error}",
        command=command,
        original_error=error,
    )


def _collect_messages(error: Exception, cli_error: CliError) -> list[str]:
    if isinstance(error, MLForgeError):
        return error.messages
    return [cli_error.message]


def _log_error(
    error: Exception,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, ApplicationError):
        logger.debug(
            "CLI validation error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    else:
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
            exc_info=error,
        )


def _output_error(
    cli_error: CliError,
    error: Exception,
    command: str,
    messages: list[str],
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error messages in the appropriate format."""
    if json_output:
        _output_json_error(cli_error, error, command, messages, error_context)
    else:
        for message in messages:
            sys.stderr.write(f"Error: {message}\n")


def _output_json_error(
    cli_error: CliError,
    error: Exception,
    command: str,
    messages: list[str],
    error_context: dict[str, Any],
) -> None:
    """Output error in JSON format."""
    codes = (
        [code.value for code in error.codes]
        if hasattr(error, "codes")
        else [cli_error.code.value]
    )
    try:
        error_output = format_json_output(
            command=command,
            success=False,
            errors=messages,
            data={
                "error_code": cli_error.code.value,
                "error_codes": codes,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
            },
        )
        sys.stdout.write(error_output.decode("utf-8"))
        sys.stdout.write("\n")
        sys.stdout.flush()
    except (OSError, UnicodeEncodeError, TypeError) as output_error:
        _handle_json_output_error(output_error, command, messages, error_context)


def _handle_json_output_error(
    output_error: Exception,
    command: str,
    messages: list[str],
    error_context: dict[str, Any],
) -> None:
    """Handle JSON output error with fallback to stderr."""
    cli_output_error = create_cli_output_error(
        message=f"Failed to format JSON output: {output_error}",
        command=command,
        output_type="json",
        original_error=output_error,
    )
    logger.error(
        "JSON output error: %s",
        cli_output_error.message,
        extra={"context": error_context},
    )
    for message in messages:
        sys.stderr.write(f"Error: {message}\n")
    sys.stderr.write(f"JSON output failed: {cli_output_error.message}\n")
