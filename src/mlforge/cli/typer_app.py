"""
mlforge Typer CLI Application

This is the main Typer-based CLI application for mlforge. It declares the
global options and the ``new`` command, with help generated from the
option schema.
"""

from __future__ import annotations

import typer

from mlforge.cli.common.context import CliContext, set_cli_context
from mlforge.cli.common.options import (
    CacheOption,
    DatasetOption,
    HasHeaderOption,
    IgnoreColumnsOption,
    JsonOutputOption,
    LabelColumnIndexOption,
    LabelColumnNameOption,
    MaxExplorationTimeOption,
    MlTaskOption,
    NameOption,
    OutputPathOption,
    TestDatasetOption,
    ValidationDatasetOption,
    VerbosityOption,
    VersionOption,
)
from mlforge.cli.new_handler import new_command
from mlforge.config import get_settings
from mlforge.shared.constants import CLICommands, CLIDefaults, CLIHelp, NewDefaults
from mlforge.shared.logging import setup_structured_logger

__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(json_output: bool, version: bool) -> None:
    """
    Process the global options.

    Configures logging from the application settings and stores the global
    options in the CLI context before any command runs.

    Args:
        json_output: Whether to output in JSON format
        version: Whether to show version information
    """
    if version:
        version_callback(value=True)

    settings = get_settings()
    log_level = settings.effective_log_level()
    setup_structured_logger(
        level=log_level,
        log_file=settings.log_file,
        use_rich_console=settings.rich_console,
    )
    set_cli_context(CliContext(json_output=json_output, log_level=log_level))


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    json_output: JsonOutputOption = CLIDefaults.DEFAULT_JSON,
    version: VersionOption = False,
) -> None:
    """mlforge - Train a model from a dataset and scaffold a runnable project."""
    main_callback(json_output, version)


@app.command(CLICommands.NEW)
def new_command_typer(
    dataset: DatasetOption = None,
    validation_dataset: ValidationDatasetOption = None,
    test_dataset: TestDatasetOption = None,
    ml_task: MlTaskOption = None,
    label_column_name: LabelColumnNameOption = None,
    label_column_index: LabelColumnIndexOption = None,
    max_exploration_time: MaxExplorationTimeOption = NewDefaults.MAX_EXPLORATION_TIME,
    verbosity: VerbosityOption = NewDefaults.VERBOSITY,
    name: NameOption = None,
    output_path: OutputPathOption = NewDefaults.OUTPUT_PATH,
    has_header: HasHeaderOption = "true",
    cache: CacheOption = NewDefaults.CACHE,
    ignore_columns: IgnoreColumnsOption = None,
) -> None:
    """
    Create a new project that trains and runs a model for the given dataset.

    --dataset, --ml-task and exactly one of --label-column-name or
    --label-column-index are required. All violated requirements are
    reported together.

    Examples:
        # Binary classification with a named label column
        mlforge new --dataset data.csv --ml-task binary-classification \\
            --label-column-name Label

        # Regression on a headerless file, label in the first column
        mlforge new --dataset data.tsv --ml-task regression \\
            --label-column-index 0 --has-header false

        # Ignore some columns (repeat the flag or use commas)
        mlforge new --dataset data.csv --ml-task regression \\
            --label-column-name Price --ignore-columns Id,Date --ignore-columns Notes
    """
    new_command(
        dataset=dataset,
        validation_dataset=validation_dataset,
        test_dataset=test_dataset,
        ml_task=ml_task,
        label_column_name=label_column_name,
        label_column_index=label_column_index,
        max_exploration_time=max_exploration_time,
        verbosity=verbosity,
        name=name,
        output_path=output_path,
        has_header=has_header,
        cache=cache,
        ignore_columns=ignore_columns,
    )


if __name__ == "__main__":
    app()
