"""
Option Schema Module

This module declares every option accepted by the ``new`` command as an
``OptionSpec``: its flag, help text, value type, default, allowed values and
arity. The Typer option declarations, the help text and the rendering of a
resolved configuration back into flags all read from this schema.

Schema invariants:
- Option names are unique.
- A default on a choice-constrained option belongs to its allowed values.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mlforge.shared.constants import CLIHelp, CLIOptions, NewDefaults
from mlforge.shared.errors import ApplicationError, ErrorCode, ErrorContext
from mlforge.shared.types import CacheMode, MlTask, Verbosity, enum_values


class OptionValueType(str, Enum):
    """Semantic type of an option's value."""

    FILE_PATH = "file-path"
    DIRECTORY_PATH = "directory-path"
    STRING = "string"
    UNSIGNED_INTEGER = "unsigned-integer"
    BOOLEAN = "boolean"
    STRING_LIST = "string-list"


class Arity(str, Enum):
    """How many raw tokens an option accepts."""

    EXACTLY_ONE = "exactly-one"
    ZERO_OR_ONE = "zero-or-one"
    ONE_OR_MORE = "one-or-more"


class _NoDefault:
    """Marker for options that declare no default value."""

    _instance: _NoDefault | None = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class OptionSpec:
    """Declaration of one accepted command-line option.

    Attributes:
        name: The flag token, e.g. ``--dataset``
        description: Help text shown for the option
        value_type: Semantic type used to coerce the raw value
        default: Default value, or ``NO_DEFAULT``
        choices: Allowed values for choice-constrained options
        arity: How many raw tokens the option accepts
    """

    name: str
    description: str
    value_type: OptionValueType
    default: Any = NO_DEFAULT
    choices: tuple[str, ...] | None = None
    arity: Arity = Arity.ZERO_OR_ONE

    @property
    def field_name(self) -> str:
        """Python identifier of the option, e.g. ``label_column_name``."""
        return self.name.lstrip("-").replace("-", "_")

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def is_required(self) -> bool:
        return self.arity is Arity.EXACTLY_ONE


NEW_COMMAND_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(
        CLIOptions.DATASET,
        CLIHelp.DATASET_HELP,
        OptionValueType.FILE_PATH,
        arity=Arity.EXACTLY_ONE,
    ),
    OptionSpec(
        CLIOptions.VALIDATION_DATASET,
        CLIHelp.VALIDATION_DATASET_HELP,
        OptionValueType.FILE_PATH,
    ),
    OptionSpec(
        CLIOptions.TEST_DATASET,
        CLIHelp.TEST_DATASET_HELP,
        OptionValueType.FILE_PATH,
    ),
    OptionSpec(
        CLIOptions.ML_TASK,
        CLIHelp.ML_TASK_HELP,
        OptionValueType.STRING,
        choices=enum_values(MlTask),
        arity=Arity.EXACTLY_ONE,
    ),
    OptionSpec(
        CLIOptions.LABEL_COLUMN_NAME,
        CLIHelp.LABEL_COLUMN_NAME_HELP,
        OptionValueType.STRING,
    ),
    OptionSpec(
        CLIOptions.LABEL_COLUMN_INDEX,
        CLIHelp.LABEL_COLUMN_INDEX_HELP,
        OptionValueType.UNSIGNED_INTEGER,
    ),
    OptionSpec(
        CLIOptions.MAX_EXPLORATION_TIME,
        CLIHelp.MAX_EXPLORATION_TIME_HELP,
        OptionValueType.UNSIGNED_INTEGER,
        default=NewDefaults.MAX_EXPLORATION_TIME,
    ),
    OptionSpec(
        CLIOptions.VERBOSITY,
        CLIHelp.VERBOSITY_HELP,
        OptionValueType.STRING,
        default=NewDefaults.VERBOSITY,
        choices=enum_values(Verbosity),
    ),
    OptionSpec(
        CLIOptions.NAME,
        CLIHelp.NAME_HELP,
        OptionValueType.STRING,
    ),
    OptionSpec(
        CLIOptions.OUTPUT_PATH,
        CLIHelp.OUTPUT_PATH_HELP,
        OptionValueType.DIRECTORY_PATH,
        default=NewDefaults.OUTPUT_PATH,
    ),
    OptionSpec(
        CLIOptions.HAS_HEADER,
        CLIHelp.HAS_HEADER_HELP,
        OptionValueType.BOOLEAN,
        default=NewDefaults.HAS_HEADER,
    ),
    OptionSpec(
        CLIOptions.CACHE,
        CLIHelp.CACHE_HELP,
        OptionValueType.STRING,
        default=NewDefaults.CACHE,
        choices=enum_values(CacheMode),
    ),
    OptionSpec(
        CLIOptions.IGNORE_COLUMNS,
        CLIHelp.IGNORE_COLUMNS_HELP,
        OptionValueType.STRING_LIST,
        default=(),
        arity=Arity.ONE_OR_MORE,
    ),
)


def validate_schema(specs: Iterable[OptionSpec]) -> tuple[OptionSpec, ...]:
    """Check the schema invariants and return the specs as a tuple.

    Raises:
        ApplicationError: SCHEMA_ERROR on a duplicate name or a default that
            is outside the option's allowed values
    """
    checked: list[OptionSpec] = []
    seen: set[str] = set()
    for spec in specs:
        if spec.name in seen:
            raise ApplicationError(
                ErrorCode.SCHEMA_ERROR,
                f"Duplicate option in schema: {spec.name}",
                ErrorContext(option=spec.name, operation="validate_schema"),
            )
        seen.add(spec.name)

        if spec.choices is not None and spec.has_default:
            if str(spec.default) not in spec.choices:
                raise ApplicationError(
                    ErrorCode.SCHEMA_ERROR,
                    (
                        f"Default {spec.default!r} of {spec.name} is not one of "
                        f"{', '.join(spec.choices)}"
                    ),
                    ErrorContext(
                        option=spec.name,
                        operation="validate_schema",
                        additional_data={"choices": list(spec.choices)},
                    ),
                )
        checked.append(spec)
    return tuple(checked)


_SPECS_BY_NAME: dict[str, OptionSpec] = {
    spec.name: spec for spec in validate_schema(NEW_COMMAND_OPTIONS)
}


def get_option_spec(name: str) -> OptionSpec:
    """Look up an option of the new command by flag name.

    Raises:
        KeyError: If the command declares no such option
    """
    return _SPECS_BY_NAME[name]


__all__ = [
    "NEW_COMMAND_OPTIONS",
    "NO_DEFAULT",
    "Arity",
    "OptionSpec",
    "OptionValueType",
    "get_option_spec",
    "validate_schema",
]
