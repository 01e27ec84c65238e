"""
Pydantic models for CLI option resolution.

``NewOptions`` is the resolved option set of the ``new`` command. It is
built once per invocation from the values the parsing engine produced,
coerces each value to its declared type, and is immutable afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mlforge.cli.common.parsing import decode_ignore_columns
from mlforge.cli.common.schema import NEW_COMMAND_OPTIONS, OptionSpec, OptionValueType
from mlforge.shared.constants import LogOperations, NewDefaults
from mlforge.shared.errors import (
    ErrorCode,
    ErrorContext,
    OptionError,
    OptionValidationError,
    RuleViolation,
    create_invalid_choice_error,
    create_path_not_found_error,
)
from mlforge.shared.types import (
    CacheMode,
    MlTask,
    UnsignedInt,
    ValidFilePath,
    Verbosity,
)


class NewOptions(BaseModel):
    """Resolved options of the new command.

    Zero-or-one options that were neither supplied nor defaulted are
    ``None``. ``ignore_columns`` keeps the order the names were given in.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dataset: ValidFilePath | None = None
    validation_dataset: ValidFilePath | None = None
    test_dataset: ValidFilePath | None = None
    ml_task: MlTask | None = None
    label_column_name: str | None = None
    label_column_index: UnsignedInt | None = None
    max_exploration_time: UnsignedInt = NewDefaults.MAX_EXPLORATION_TIME
    verbosity: Verbosity = Verbosity(NewDefaults.VERBOSITY)
    name: str | None = None
    output_path: Path = Field(default_factory=lambda: Path(NewDefaults.OUTPUT_PATH))
    has_header: bool = NewDefaults.HAS_HEADER
    cache: CacheMode = CacheMode(NewDefaults.CACHE)
    ignore_columns: tuple[str, ...] = ()

    @field_validator("has_header", mode="before")
    @classmethod
    def parse_has_header(cls, v: Any) -> bool:
        """Accept a bool or a case-insensitive ``true``/``false`` string."""
        if isinstance(v, bool):
            return v
        text = str(v).strip().lower()
        if text not in NewDefaults.BOOLEAN_VALUES:
            msg = f"'{v}' is not a valid boolean, expected true or false"
            raise ValueError(msg)
        return text == "true"

    @field_validator("ignore_columns", mode="before")
    @classmethod
    def parse_ignore_columns(cls, v: Any) -> tuple[str, ...]:
        """Accept ``None``, decoded lists, or raw comma-separated tokens."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        tokens = list(v)
        if not tokens:
            return ()
        return tuple(decode_ignore_columns(tokens))

    def get(self, option: str) -> Any:
        """Value of an option by flag name, e.g. ``get("--cache")``."""
        return getattr(self, option.lstrip("-").replace("-", "_"))

    def is_supplied(self, option: str) -> bool:
        """Whether an option holds a value (non-empty for list options)."""
        value = self.get(option)
        if isinstance(value, tuple):
            return len(value) > 0
        return value is not None

    def to_args(self) -> list[str]:
        """Render the options back into command-line flags.

        Parsing the result yields an equal ``NewOptions``.
        """
        args: list[str] = []
        for spec in NEW_COMMAND_OPTIONS:
            value = getattr(self, spec.field_name)
            if value is None:
                continue
            if spec.value_type is OptionValueType.STRING_LIST:
                for item in value:
                    args.extend([spec.name, item])
                continue
            args.extend([spec.name, _render_value(value)])
        return args

    def summary(self) -> dict[str, Any]:
        """JSON-safe mapping of flag name to resolved value."""
        return {
            spec.name: _summary_value(getattr(self, spec.field_name))
            for spec in NEW_COMMAND_OPTIONS
        }


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (MlTask, Verbosity, CacheMode)):
        return value.value
    return str(value)


def _summary_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int)):
        return value
    if isinstance(value, tuple):
        return list(value)
    return _render_value(value)


_SPECS_BY_FIELD: dict[str, OptionSpec] = {
    spec.field_name: spec for spec in NEW_COMMAND_OPTIONS
}


def _option_error_from_pydantic(error: dict[str, Any], raw: dict[str, Any]) -> OptionError:
    """Map one pydantic error entry onto the option error taxonomy."""
    loc = error.get("loc", ())
    field = str(loc[0]) if loc else ""
    spec = _SPECS_BY_FIELD.get(field)
    option = spec.name if spec else field
    value = raw.get(field, error.get("input"))
    error_type = error.get("type", "")

    if error_type in ("path_not_file", "path_not_directory"):
        return create_path_not_found_error(option, str(value))
    if error_type == "enum" and spec is not None and spec.choices is not None:
        return create_invalid_choice_error(option, _render_value(value), spec.choices)
    return OptionError(
        ErrorCode.VALIDATION_ERROR,
        f"Invalid value for {option}: {error.get('msg', 'validation failed')}",
        option=option,
        context=ErrorContext(
            option=option,
            operation=LogOperations.RESOLVE_OPTIONS,
            additional_data={"value": str(value), "error_type": error_type},
        ),
    )


def resolve_new_options(**raw: Any) -> NewOptions:
    """Resolve raw per-option values into ``NewOptions``.

    Keys are option field names (``label_column_name``); missing keys take
    their declared defaults.

    Raises:
        OptionError: When exactly one option fails to coerce
        OptionValidationError: When several options fail to coerce
    """
    try:
        return NewOptions(**raw)
    except ValidationError as e:
        errors = [_option_error_from_pydantic(err, raw) for err in e.errors()]
        if len(errors) == 1:
            raise errors[0] from e
        raise OptionValidationError(
            [
                RuleViolation(
                    rule=f"coerce:{err.option}",
                    code=err.code,
                    message=err.message,
                    options=(err.option,) if err.option else (),
                )
                for err in errors
            ],
            operation=LogOperations.RESOLVE_OPTIONS,
        ) from e


__all__ = [
    "NewOptions",
    "resolve_new_options",
]
