"""
Cross-option validation for the new command.

Relationships between options that no single option's type can express are
modeled as a fixed list of ``ValidationRule`` objects. Every rule is a pure
predicate over ``NewOptions``; all rules are evaluated and every violation
is reported together, so a user can fix them in one pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from mlforge.cli.common.models import NewOptions, resolve_new_options
from mlforge.shared.constants import CLIMessages, CLIOptions, LogOperations
from mlforge.shared.errors import ErrorCode, OptionValidationError, RuleViolation
from mlforge.shared.logging import log_validation_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationRule:
    """A pure predicate over ``NewOptions`` with a fixed error message.

    Attributes:
        name: Identifier of the rule
        code: Error code reported when the rule is violated
        message: Human-readable error message
        options: Flags the rule is about
        violated: Returns True when the options break the rule
    """

    name: str
    code: ErrorCode
    message: str
    options: tuple[str, ...]
    violated: Callable[[NewOptions], bool]

    def check(self, options: NewOptions) -> RuleViolation | None:
        """Evaluate the rule, returning a violation or None."""
        if not self.violated(options):
            return None
        return RuleViolation(
            rule=self.name,
            code=self.code,
            message=self.message,
            options=self.options,
        )


def _missing(option: str) -> Callable[[NewOptions], bool]:
    return lambda options: not options.is_supplied(option)


def _label_columns_supplied(options: NewOptions) -> int:
    return sum(
        options.is_supplied(option)
        for option in (CLIOptions.LABEL_COLUMN_NAME, CLIOptions.LABEL_COLUMN_INDEX)
    )


def _ignore_columns_with_label_index(options: NewOptions) -> bool:
    # Ignoring columns by name is ambiguous once the label is positional
    return options.is_supplied(CLIOptions.LABEL_COLUMN_INDEX) and options.is_supplied(
        CLIOptions.IGNORE_COLUMNS,
    )


NEW_COMMAND_RULES: tuple[ValidationRule, ...] = (
    ValidationRule(
        name="dataset_required",
        code=ErrorCode.MISSING_REQUIRED_OPTION,
        message=CLIMessages.Error.OPTION_REQUIRED.format(option=CLIOptions.DATASET),
        options=(CLIOptions.DATASET,),
        violated=_missing(CLIOptions.DATASET),
    ),
    ValidationRule(
        name="ml_task_required",
        code=ErrorCode.MISSING_REQUIRED_OPTION,
        message=CLIMessages.Error.OPTION_REQUIRED.format(option=CLIOptions.ML_TASK),
        options=(CLIOptions.ML_TASK,),
        violated=_missing(CLIOptions.ML_TASK),
    ),
    ValidationRule(
        name="label_column_required",
        code=ErrorCode.MISSING_REQUIRED_OPTION,
        message=CLIMessages.Error.OPTION_REQUIRED.format(
            option=f"{CLIOptions.LABEL_COLUMN_NAME} or {CLIOptions.LABEL_COLUMN_INDEX}",
        ),
        options=(CLIOptions.LABEL_COLUMN_NAME, CLIOptions.LABEL_COLUMN_INDEX),
        violated=lambda options: _label_columns_supplied(options) == 0,
    ),
    ValidationRule(
        name="label_column_exclusive",
        code=ErrorCode.MUTUALLY_EXCLUSIVE_OPTIONS,
        message=CLIMessages.Error.MUTUALLY_EXCLUSIVE.format(
            options=f"{CLIOptions.LABEL_COLUMN_NAME}, {CLIOptions.LABEL_COLUMN_INDEX}",
        ),
        options=(CLIOptions.LABEL_COLUMN_NAME, CLIOptions.LABEL_COLUMN_INDEX),
        violated=lambda options: _label_columns_supplied(options) == 2,
    ),
    ValidationRule(
        name="ignore_columns_with_label_index",
        code=ErrorCode.UNSUPPORTED_COMBINATION,
        message=CLIMessages.Error.UNSUPPORTED_COMBINATION.format(
            first=CLIOptions.LABEL_COLUMN_INDEX,
            second=CLIOptions.IGNORE_COLUMNS,
        ),
        options=(CLIOptions.LABEL_COLUMN_INDEX, CLIOptions.IGNORE_COLUMNS),
        violated=_ignore_columns_with_label_index,
    ),
)


def validate_cross_options(
    options: NewOptions,
    rules: Sequence[ValidationRule] = NEW_COMMAND_RULES,
) -> list[RuleViolation]:
    """Evaluate every rule and return all violations, in rule order."""
    violations = [
        violation
        for violation in (rule.check(options) for rule in rules)
        if violation is not None
    ]
    for violation in violations:
        log_validation_error(
            logger,
            field=violation.rule,
            value=", ".join(violation.options),
            reason=violation.message,
            context={"error_code": violation.code.value},
            level=logging.DEBUG,
        )
    return violations


def build_new_options(**raw: Any) -> NewOptions:
    """Resolve raw option values and cross-validate them.

    Raises:
        OptionError: When a single option fails to parse or coerce
        OptionValidationError: When several options fail to coerce, or when
            any cross-option rule is violated (all violations are carried)
    """
    options = resolve_new_options(**raw)
    violations = validate_cross_options(options)
    if violations:
        raise OptionValidationError(violations, operation=LogOperations.VALIDATE_OPTIONS)
    return options


__all__ = [
    "NEW_COMMAND_RULES",
    "ValidationRule",
    "build_new_options",
    "validate_cross_options",
]
