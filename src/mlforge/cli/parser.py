"""
Programmatic parsing of the new command.

``parse_new_args`` runs raw tokens through the parameters the Typer app
declares for ``new`` (same types, choices, path checks and list decoder)
and returns the validated ``NewOptions`` instead of handing them off.
Engine failures are mapped onto the option error taxonomy:

- a path parameter rejecting its value -> PATH_NOT_FOUND
- a choice parameter rejecting its value -> INVALID_CHOICE
- the list decoder failing -> its own code (EMPTY_LIST_AFTER_PARSING, ...)
- anything else the engine rejects -> CLI_INVALID_ARGUMENTS
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import click
import typer

from mlforge.cli.common.models import NewOptions
from mlforge.cli.common.validation import build_new_options
from mlforge.cli.typer_app import app
from mlforge.shared.constants import CLICommands, LogOperations
from mlforge.shared.errors import (
    ErrorCode,
    ErrorContext,
    OptionError,
    create_invalid_choice_error,
    create_path_not_found_error,
)
from mlforge.shared.logging import log_operation_start

logger = logging.getLogger(__name__)


def _param_flag(param: click.Parameter | None) -> str:
    if param is None:
        return ""
    if isinstance(param, click.Option) and param.opts:
        return param.opts[0]
    return param.name or ""


def _map_bad_parameter(error: click.BadParameter, args: Sequence[str]) -> OptionError:
    cause = error.__cause__
    if isinstance(cause, OptionError):
        return cause

    param = error.param
    option = _param_flag(param)
    value = _raw_value(option, args)
    param_type = getattr(param, "type", None)

    if isinstance(param_type, click.Path):
        return create_path_not_found_error(
            option,
            value,
            message=f"Invalid value for {option}: {error.message}",
            original_error=error,
        )
    if isinstance(param_type, click.Choice):
        return create_invalid_choice_error(
            option,
            value,
            tuple(str(choice) for choice in param_type.choices),
            original_error=error,
        )
    return _usage_error(error, option)


def _usage_error(error: click.UsageError, option: str | None = None) -> OptionError:
    return OptionError(
        ErrorCode.CLI_INVALID_ARGUMENTS,
        error.format_message(),
        option=option,
        context=ErrorContext(option=option, operation=LogOperations.PARSE_ARGS),
        original_error=error,
    )


def _raw_value(option: str, args: Sequence[str]) -> str:
    """Last raw value given for a flag, in ``--flag value`` or ``--flag=value`` form."""
    value = ""
    for index, token in enumerate(args):
        if token == option and index + 1 < len(args):
            value = args[index + 1]
        elif token.startswith(f"{option}="):
            value = token.split("=", 1)[1]
    return value


def _new_command() -> click.Command:
    """The click command Typer builds for ``new``."""
    group = typer.main.get_command(app)
    return group.commands[CLICommands.NEW]  # type: ignore[attr-defined]


def parse_new_args(args: Sequence[str]) -> NewOptions:
    """Parse and validate the raw arguments of the new command.

    Args:
        args: Tokens following ``new`` on the command line

    Returns:
        The validated options

    Raises:
        OptionError: A single option failed to parse, or the engine rejected
            the tokens
        OptionValidationError: Several options failed to coerce, or any
            cross-option rule was violated
    """
    tokens = list(args)
    log_operation_start(logger, LogOperations.PARSE_ARGS, context={"token_count": len(tokens)})
    command = _new_command()
    try:
        # Parses and runs parameter callbacks without invoking the command
        ctx = command.make_context(CLICommands.NEW, tokens)
    except click.BadParameter as e:
        raise _map_bad_parameter(e, tokens) from e
    except click.UsageError as e:
        raise _usage_error(e) from e
    return build_new_options(**ctx.params)


__all__ = ["parse_new_args"]
