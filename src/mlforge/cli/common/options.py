"""
Reusable Typer Options Module

This module provides the Typer option declarations of the mlforge CLI as
``Annotated`` aliases. Help text comes from the option schema so the help
screen and the schema never drift apart.

Per-option coercion is delegated to the option's type:
- file options use ``exists=True`` so a missing file fails at parse time
- choice options use ``str`` enums, rendered by Typer as choice types
- unsigned integers use ``min=0``
- ``--has-header`` takes a case-insensitive ``true``/``false`` value
- ``--ignore-columns`` is decoded by ``ignore_columns_callback``
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import click
import typer

from mlforge.cli.common.parsing import ignore_columns_callback
from mlforge.cli.common.schema import get_option_spec
from mlforge.shared.constants import CLIHelp, CLIOptions, NewDefaults
from mlforge.shared.types import CacheMode, MlTask, Verbosity


def _help(name: str) -> str:
    return get_option_spec(name).description


# Global options
JsonOutputOption = Annotated[
    bool,
    typer.Option(
        CLIOptions.JSON,
        help=CLIHelp.JSON_HELP,
    ),
]

VersionOption = Annotated[
    bool,
    typer.Option(
        CLIOptions.VERSION,
        CLIOptions.VERSION_SHORT,
        help=CLIHelp.VERSION_HELP,
        is_eager=True,
    ),
]


# New command options
DatasetOption = Annotated[
    Path | None,
    typer.Option(
        CLIOptions.DATASET,
        help=_help(CLIOptions.DATASET),
        exists=True,
        file_okay=True,
        dir_okay=False,
        show_default=False,
    ),
]

ValidationDatasetOption = Annotated[
    Path | None,
    typer.Option(
        CLIOptions.VALIDATION_DATASET,
        help=_help(CLIOptions.VALIDATION_DATASET),
        exists=True,
        file_okay=True,
        dir_okay=False,
        show_default=False,
    ),
]

TestDatasetOption = Annotated[
    Path | None,
    typer.Option(
        CLIOptions.TEST_DATASET,
        help=_help(CLIOptions.TEST_DATASET),
        exists=True,
        file_okay=True,
        dir_okay=False,
        show_default=False,
    ),
]

MlTaskOption = Annotated[
    MlTask | None,
    typer.Option(
        CLIOptions.ML_TASK,
        help=_help(CLIOptions.ML_TASK),
        show_default=False,
    ),
]

LabelColumnNameOption = Annotated[
    str | None,
    typer.Option(
        CLIOptions.LABEL_COLUMN_NAME,
        help=_help(CLIOptions.LABEL_COLUMN_NAME),
        show_default=False,
    ),
]

LabelColumnIndexOption = Annotated[
    int | None,
    typer.Option(
        CLIOptions.LABEL_COLUMN_INDEX,
        help=_help(CLIOptions.LABEL_COLUMN_INDEX),
        min=0,
        show_default=False,
    ),
]

MaxExplorationTimeOption = Annotated[
    int,
    typer.Option(
        CLIOptions.MAX_EXPLORATION_TIME,
        help=_help(CLIOptions.MAX_EXPLORATION_TIME),
        min=0,
    ),
]

VerbosityOption = Annotated[
    Verbosity,
    typer.Option(
        CLIOptions.VERBOSITY,
        help=_help(CLIOptions.VERBOSITY),
    ),
]

NameOption = Annotated[
    str | None,
    typer.Option(
        CLIOptions.NAME,
        help=_help(CLIOptions.NAME),
        show_default=False,
    ),
]

OutputPathOption = Annotated[
    Path,
    typer.Option(
        CLIOptions.OUTPUT_PATH,
        help=_help(CLIOptions.OUTPUT_PATH),
        file_okay=False,
        dir_okay=True,
    ),
]

HasHeaderOption = Annotated[
    str,
    typer.Option(
        CLIOptions.HAS_HEADER,
        help=_help(CLIOptions.HAS_HEADER),
        click_type=click.Choice(NewDefaults.BOOLEAN_VALUES, case_sensitive=False),
    ),
]

CacheOption = Annotated[
    CacheMode,
    typer.Option(
        CLIOptions.CACHE,
        help=_help(CLIOptions.CACHE),
    ),
]

IgnoreColumnsOption = Annotated[
    list[str] | None,
    typer.Option(
        CLIOptions.IGNORE_COLUMNS,
        help=_help(CLIOptions.IGNORE_COLUMNS),
        callback=ignore_columns_callback,
        show_default=False,
    ),
]
