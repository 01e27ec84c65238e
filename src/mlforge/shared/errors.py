"""mlforge Error Handling Module

This module defines the error handling system for mlforge, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- User-friendly Messages: Every error carries a message meant for the console
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for mlforge.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Option parsing errors
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    INVALID_CHOICE = "INVALID_CHOICE"
    EMPTY_LIST_AFTER_PARSING = "EMPTY_LIST_AFTER_PARSING"
    UNKNOWN_PARSE_FAILURE = "UNKNOWN_PARSE_FAILURE"

    # Cross-option validation errors
    MISSING_REQUIRED_OPTION = "MISSING_REQUIRED_OPTION"
    MUTUALLY_EXCLUSIVE_OPTIONS = "MUTUALLY_EXCLUSIVE_OPTIONS"
    UNSUPPORTED_COMBINATION = "UNSUPPORTED_COMBINATION"

    # Generic validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SCHEMA_ERROR = "SCHEMA_ERROR"

    # CLI errors
    CLI_INVALID_ARGUMENTS = "CLI_INVALID_ARGUMENTS"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum and sequences of primitives to primitive types.

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, (list, tuple)):
            coerced[key] = ", ".join(str(item) for item in val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, list, tuple are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization.

    Attributes:
        option: Optional command-line option associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    option: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as dict, always including additional_data."""
        data: dict[str, Any] = {}
        if self.option is not None:
            data["option"] = self.option
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data or {}
        return data


ErrorContext = ErrorContextModel


class MLForgeError(Exception):
    """Base exception class for all mlforge errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize MLForgeError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    @property
    def messages(self) -> list[str]:
        """All user-facing messages carried by this error."""
        return [self.message]

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ApplicationError(MLForgeError):
    """Application-level errors.

    Examples:
    - Invalid command line arguments
    - Option schema errors
    """


class OptionError(ApplicationError):
    """A single command-line option failed to parse or coerce.

    Raised for PATH_NOT_FOUND, INVALID_CHOICE, EMPTY_LIST_AFTER_PARSING and
    UNKNOWN_PARSE_FAILURE. These abort before cross-option validation runs.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        option: str | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code,
            message,
            context or ErrorContext(option=option),
            original_error,
        )
        self.option = option


@dataclass(frozen=True)
class RuleViolation:
    """One failed cross-option rule."""

    rule: str
    code: ErrorCode
    message: str
    options: tuple[str, ...] = ()


class OptionValidationError(ApplicationError):
    """One or more options or option combinations were rejected.

    Carries every violation so the user can fix all of them in one pass.
    The error code is the code of the first violation.
    """

    def __init__(
        self,
        violations: Sequence[RuleViolation],
        operation: str | None = None,
    ) -> None:
        if not violations:
            msg = "OptionValidationError requires at least one violation"
            raise ValueError(msg)
        self.violations = tuple(violations)
        context = ErrorContext(
            operation=operation,
            additional_data={
                "violation_count": len(self.violations),
                "rules": [violation.rule for violation in self.violations],
            },
        )
        super().__init__(
            self.violations[0].code,
            "; ".join(violation.message for violation in self.violations),
            context,
        )

    @property
    def messages(self) -> list[str]:
        """Messages of every violation, in rule order."""
        return [violation.message for violation in self.violations]

    @property
    def codes(self) -> list[ErrorCode]:
        """Codes of every violation, in rule order."""
        return [violation.code for violation in self.violations]


class CliError(ApplicationError):
    """CLI-specific error with an exit code for command-line operations."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


# Convenience functions for common error scenarios
def create_path_not_found_error(
    option: str,
    path: str,
    message: str | None = None,
    original_error: Exception | None = None,
) -> OptionError:
    """Create a path-not-found error for a path-typed option."""
    return OptionError(
        ErrorCode.PATH_NOT_FOUND,
        message or f"Path does not exist for {option}: {path}",
        option=option,
        context=ErrorContext(
            option=option,
            operation="coerce_path",
            additional_data={"path": path},
        ),
        original_error=original_error,
    )


def create_invalid_choice_error(
    option: str,
    value: str,
    choices: Sequence[str],
    original_error: Exception | None = None,
) -> OptionError:
    """Create an invalid-choice error naming the value and the allowed set."""
    allowed = ", ".join(choices)
    return OptionError(
        ErrorCode.INVALID_CHOICE,
        f"Invalid value for {option}: '{value}' is not one of {allowed}",
        option=option,
        context=ErrorContext(
            option=option,
            operation="coerce_choice",
            additional_data={"value": value, "choices": list(choices)},
        ),
        original_error=original_error,
    )


def create_empty_list_error(option: str, tokens: Sequence[str]) -> OptionError:
    """Create an error for a list option that decoded to nothing."""
    return OptionError(
        ErrorCode.EMPTY_LIST_AFTER_PARSING,
        f"No values left for {option} after parsing: {' '.join(tokens)!r}",
        option=option,
        context=ErrorContext(
            option=option,
            operation="decode_list",
            additional_data={"tokens": list(tokens)},
        ),
    )


def create_unknown_parse_error(
    option: str,
    tokens: Sequence[Any],
    original_error: Exception | None = None,
) -> OptionError:
    """Create an error for an unexpected failure while decoding an option."""
    raw = " ".join(str(token) for token in tokens)
    return OptionError(
        ErrorCode.UNKNOWN_PARSE_FAILURE,
        f"Unknown error occurred while parsing argument for {option} :{raw}",
        option=option,
        context=ErrorContext(
            option=option,
            operation="decode_list",
            additional_data={"tokens": raw},
        ),
        original_error=original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return CliError(
        code,
        message,
        context,
        original_error,
        command,
        exit_code,
    )


def create_cli_output_error(
    message: str,
    command: str | None = None,
    output_type: str | None = None,
    original_error: Exception | None = None,
) -> CliError:
    """Create a CLI output error with context."""
    additional_data: dict[str, PrimitiveContextValue] = {}
    if command is not None:
        additional_data["command"] = command
    if output_type is not None:
        additional_data["output_type"] = output_type

    context = ErrorContext(
        operation="cli_output",
        additional_data=additional_data if additional_data else None,
    )
    return CliError(
        ErrorCode.CLI_OUTPUT_ERROR,
        message,
        context,
        original_error,
        command,
        exit_code=1,
    )
