"""New command handler for mlforge CLI.

Resolves and validates the options of ``new`` and hands the validated
configuration off. Training and code generation consume the configuration
downstream; the handoff here reports it as a table or a JSON document.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from mlforge.cli.common.context import get_cli_context
from mlforge.cli.common.error_handler import format_json_output, handle_cli_error
from mlforge.cli.common.models import NewOptions
from mlforge.cli.common.validation import build_new_options
from mlforge.shared.constants import (
    CLICommands,
    CLIDefaults,
    CLIMessages,
    LogOperations,
)
from mlforge.shared.errors import ApplicationError
from mlforge.shared.logging import (
    level_for_verbosity,
    log_operation_start,
    log_operation_success,
    set_log_level,
)
from mlforge.shared.types import Verbosity

logger = logging.getLogger(__name__)


def _build_summary_table(options: NewOptions) -> Table:
    table = Table(title=CLIMessages.Info.CONFIGURATION_TITLE)
    table.add_column(CLIMessages.Info.TABLE_COLUMN_OPTION, style="cyan", no_wrap=True)
    table.add_column(CLIMessages.Info.TABLE_COLUMN_VALUE, style="magenta")

    for option, value in options.summary().items():
        if value is None or value == []:
            rendered = CLIMessages.Info.NOT_SET
        elif isinstance(value, list):
            rendered = ", ".join(value)
        elif isinstance(value, bool):
            rendered = "true" if value else "false"
        else:
            rendered = str(value)
        table.add_row(option, rendered)
    return table


def handle_new_command(
    options: NewOptions,
    *,
    json_output: bool = False,
    console: Console | None = None,
) -> int:
    """Hand off a validated configuration of the new command.

    Args:
        options: Validated new command options
        json_output: Emit a JSON document instead of a table
        console: Rich console for table output

    Returns:
        Exit code (0 for success)
    """
    set_log_level(level_for_verbosity(options.verbosity.value))
    log_operation_start(
        logger,
        LogOperations.NEW_COMMAND,
        context={"ml_task": options.ml_task.value if options.ml_task else None},
    )

    if json_output:
        output = format_json_output(
            command=CLICommands.NEW,
            success=True,
            data=options.summary(),
        )
        sys.stdout.write(output.decode("utf-8"))
        sys.stdout.write("\n")
        sys.stdout.flush()
        return CLIDefaults.EXIT_SUCCESS

    if options.verbosity is not Verbosity.QUIET:
        console = console or Console()
        console.print(CLIMessages.Info.CONFIGURATION_VALID)
        console.print(_build_summary_table(options))

    logger.info("Configuration for '%s' is ready", options.name or options.dataset)
    return CLIDefaults.EXIT_SUCCESS


def new_command(**raw: Any) -> None:
    """Validate the raw options of the new command and hand them off.

    Every violation is reported through the CLI error handler and the
    command exits with a non-zero code.

    Raises:
        typer.Exit: On any validation failure, or a non-zero handoff result
    """
    json_output = get_cli_context().is_json_output_enabled()
    started = time.perf_counter()

    try:
        options = build_new_options(**raw)
    except ApplicationError as e:
        exit_code = handle_cli_error(e, CLICommands.NEW, json_output=json_output)
        raise typer.Exit(exit_code) from e

    log_operation_success(
        logger,
        LogOperations.VALIDATE_OPTIONS,
        duration_ms=(time.perf_counter() - started) * 1000,
    )

    exit_code = handle_new_command(options, json_output=json_output)
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)
