"""
CLI Context Management Module

This module provides a centralized system for managing global CLI state
using Pydantic models and ContextVar, giving type-safe access to the global
options across Typer commands.

The context includes:
- json_output: JSON output mode (bool)
- log_level: Logging level name (str)
"""

from __future__ import annotations

import contextvars

from pydantic import BaseModel, Field

from mlforge.shared.constants import LogConfig


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        json_output: Whether to output in JSON format
        log_level: Logging level name in effect
    """

    json_output: bool = Field(
        default=False,
        description="Whether to output in JSON format",
    )

    log_level: str = Field(
        default=LogConfig.DEFAULT_LEVEL,
        description="Logging level",
    )

    def is_json_output_enabled(self) -> bool:
        """Check if JSON output is enabled."""
        return self.json_output


cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """
    Get the current CLI context.

    Returns a default context when the main callback has not run, e.g. when
    a command handler is called directly.
    """
    context = cli_context_var.get()
    if context is None:
        return CliContext()
    return context


def set_cli_context(context: CliContext) -> None:
    """Set the current CLI context."""
    cli_context_var.set(context)


def clear_cli_context() -> None:
    """Clear the current CLI context."""
    cli_context_var.set(None)
