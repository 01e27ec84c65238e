"""
CLI Configuration Constants

This module contains all constants related to command-line interface
configuration, option names, help text and default values.
"""

from typing import ClassVar, Literal


class CLIOptions:
    """CLI option names and flags."""

    # Global options
    JSON = "--json"
    VERSION = "--version"
    VERSION_SHORT = "-V"

    # New command options
    DATASET = "--dataset"
    VALIDATION_DATASET = "--validation-dataset"
    TEST_DATASET = "--test-dataset"
    ML_TASK = "--ml-task"
    LABEL_COLUMN_NAME = "--label-column-name"
    LABEL_COLUMN_INDEX = "--label-column-index"
    MAX_EXPLORATION_TIME = "--max-exploration-time"
    VERBOSITY = "--verbosity"
    NAME = "--name"
    OUTPUT_PATH = "--output-path"
    HAS_HEADER = "--has-header"
    CACHE = "--cache"
    IGNORE_COLUMNS = "--ignore-columns"


class CLICommands:
    """CLI command names."""

    NEW = "new"


class CLIHelp:
    """CLI help text and descriptions."""

    # Version
    VERSION_HELP = "Show version information and exit."
    VERSION_TEXT = "mlforge CLI v{version}"
    JSON_HELP = "Enable machine-readable JSON output instead of human-readable format."

    # App info
    APP_NAME = "mlforge"
    APP_DESCRIPTION = "mlforge - Train a model from a dataset and scaffold a runnable project"
    APP_STYLE: Literal["rich"] = "rich"

    # New command
    DATASET_HELP = (
        "File path to either a single dataset or a training dataset "
        "for train/test split approaches."
    )
    VALIDATION_DATASET_HELP = (
        "File path for the validation dataset in train/validation/test split approaches."
    )
    TEST_DATASET_HELP = "File path for the test dataset in train/test approaches."
    ML_TASK_HELP = (
        "Type of ML task to perform. Current supported tasks: "
        "binary-classification, multiclass-classification and regression."
    )
    LABEL_COLUMN_NAME_HELP = "Name of the label (target) column to predict."
    LABEL_COLUMN_INDEX_HELP = "Index of the label (target) column to predict."
    MAX_EXPLORATION_TIME_HELP = (
        "Maximum time in seconds for exploring models with best configuration."
    )
    VERBOSITY_HELP = (
        "Output verbosity choices: q[uiet], m[inimal] (by default) and diag[nostic]."
    )
    NAME_HELP = "Name for the output project or solution to create."
    OUTPUT_PATH_HELP = (
        "Location folder to place the generated output. "
        "The default is the current directory."
    )
    HAS_HEADER_HELP = (
        "Specify true/false depending if the dataset file(s) have a header row."
    )
    CACHE_HELP = (
        "Specify on/off/auto if you want cache to be turned on, off or auto determined."
    )
    IGNORE_COLUMNS_HELP = "Specify the columns that needs to be ignored in the given dataset."


class NewDefaults:
    """Default values of the new command."""

    MAX_EXPLORATION_TIME = 10
    VERBOSITY = "m"
    OUTPUT_PATH = "."
    HAS_HEADER = True
    CACHE = "auto"

    BOOLEAN_VALUES: ClassVar[tuple[str, ...]] = ("true", "false")

    LIST_SEPARATOR = ","


class CLIDefaults:
    """CLI default values."""

    VERSION = "0.1.0"

    DEFAULT_JSON = False

    # Exit codes
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130


class CLIMessages:
    """CLI message templates."""

    class Error:
        """Error message templates."""

        OPTION_REQUIRED = "Option required : {option}"
        MUTUALLY_EXCLUSIVE = (
            "The following options are mutually exclusive please provide only one : "
            "{options}"
        )
        UNSUPPORTED_COMBINATION = (
            "Currently we don't support specifying {second} in conjunction with {first}"
        )
        UNEXPECTED_ERROR = "Unexpected error: "

    class Info:
        """Info message templates."""

        CONFIGURATION_TITLE = "New project configuration"
        CONFIGURATION_VALID = "[green]Options validated successfully[/green]"
        TABLE_COLUMN_OPTION = "Option"
        TABLE_COLUMN_VALUE = "Value"
        NOT_SET = "-"
