"""Tests for cross-option validation of the new command."""

from __future__ import annotations

import logging

import pytest

from mlforge.cli.common.models import NewOptions
from mlforge.cli.common.validation import (
    NEW_COMMAND_RULES,
    ValidationRule,
    build_new_options,
    validate_cross_options,
)
from mlforge.shared.errors import ErrorCode, OptionValidationError

MISSING_DATASET = "Option required : --dataset"
MISSING_ML_TASK = "Option required : --ml-task"
MISSING_LABEL = "Option required : --label-column-name or --label-column-index"
EXCLUSIVE_LABEL = (
    "The following options are mutually exclusive please provide only one : "
    "--label-column-name, --label-column-index"
)
UNSUPPORTED_IGNORE = (
    "Currently we don't support specifying --ignore-columns in conjunction with "
    "--label-column-index"
)


@pytest.fixture
def complete(dataset_file) -> dict:
    return {
        "dataset": dataset_file,
        "ml_task": "binary-classification",
        "label_column_name": "Label",
    }


class TestValidationRules:
    """Test the rule list."""

    def test_rule_order(self):
        assert [rule.name for rule in NEW_COMMAND_RULES] == [
            "dataset_required",
            "ml_task_required",
            "label_column_required",
            "label_column_exclusive",
            "ignore_columns_with_label_index",
        ]

    def test_check_returns_violation(self):
        rule = ValidationRule(
            name="always",
            code=ErrorCode.VALIDATION_ERROR,
            message="always violated",
            options=("--name",),
            violated=lambda options: True,
        )

        violation = rule.check(NewOptions())

        assert violation is not None
        assert violation.rule == "always"
        assert violation.options == ("--name",)

    def test_check_returns_none(self):
        rule = ValidationRule(
            name="never",
            code=ErrorCode.VALIDATION_ERROR,
            message="never violated",
            options=(),
            violated=lambda options: False,
        )

        assert rule.check(NewOptions()) is None


class TestValidateCrossOptions:
    """Test validate_cross_options."""

    def test_complete_options(self, complete):
        assert validate_cross_options(NewOptions(**complete)) == []

    def test_label_column_index_alone(self, complete):
        complete.pop("label_column_name")
        complete["label_column_index"] = 0

        assert validate_cross_options(NewOptions(**complete)) == []

    def test_missing_dataset(self, complete):
        complete.pop("dataset")

        violations = validate_cross_options(NewOptions(**complete))

        assert [v.message for v in violations] == [MISSING_DATASET]
        assert violations[0].code == ErrorCode.MISSING_REQUIRED_OPTION

    def test_missing_ml_task(self, complete):
        complete.pop("ml_task")

        violations = validate_cross_options(NewOptions(**complete))

        assert [v.message for v in violations] == [MISSING_ML_TASK]

    def test_missing_label(self, complete):
        complete.pop("label_column_name")

        violations = validate_cross_options(NewOptions(**complete))

        assert [v.message for v in violations] == [MISSING_LABEL]
        assert violations[0].code == ErrorCode.MISSING_REQUIRED_OPTION

    def test_both_labels(self, complete):
        complete["label_column_index"] = 1

        violations = validate_cross_options(NewOptions(**complete))

        assert [v.message for v in violations] == [EXCLUSIVE_LABEL]
        assert violations[0].code == ErrorCode.MUTUALLY_EXCLUSIVE_OPTIONS

    def test_ignore_columns_with_label_index(self, complete):
        complete.pop("label_column_name")
        complete["label_column_index"] = 2
        complete["ignore_columns"] = ["Id"]

        violations = validate_cross_options(NewOptions(**complete))

        assert [v.message for v in violations] == [UNSUPPORTED_IGNORE]
        assert violations[0].code == ErrorCode.UNSUPPORTED_COMBINATION

    def test_ignore_columns_with_label_name(self, complete):
        complete["ignore_columns"] = ["Id"]

        assert validate_cross_options(NewOptions(**complete)) == []

    def test_nothing_supplied(self):
        """Test that every violated rule is reported, in rule order."""
        violations = validate_cross_options(NewOptions())

        assert [v.message for v in violations] == [
            MISSING_DATASET,
            MISSING_ML_TASK,
            MISSING_LABEL,
        ]

    def test_all_violations_together(self):
        options = NewOptions(
            label_column_name="Label",
            label_column_index=0,
            ignore_columns=["Id"],
        )

        violations = validate_cross_options(options)

        assert [v.code for v in violations] == [
            ErrorCode.MISSING_REQUIRED_OPTION,
            ErrorCode.MISSING_REQUIRED_OPTION,
            ErrorCode.MUTUALLY_EXCLUSIVE_OPTIONS,
            ErrorCode.UNSUPPORTED_COMBINATION,
        ]

    @pytest.mark.parametrize(
        "extra",
        [
            {},
            {"ml_task": "regression"},
            {"label_column_name": "Label"},
            {"label_column_index": 0, "ignore_columns": ["Id"]},
        ],
    )
    def test_missing_dataset_always_reported(self, extra):
        messages = [v.message for v in validate_cross_options(NewOptions(**extra))]
        assert MISSING_DATASET in messages

    def test_custom_rules(self):
        assert validate_cross_options(NewOptions(), rules=()) == []


class TestBuildNewOptions:
    """Test build_new_options."""

    def test_success(self, complete):
        options = build_new_options(**complete)

        assert options.label_column_name == "Label"

    def test_raises_with_all_violations(self):
        with pytest.raises(OptionValidationError) as exc_info:
            build_new_options()

        error = exc_info.value
        assert error.messages == [MISSING_DATASET, MISSING_ML_TASK, MISSING_LABEL]
        assert error.code == ErrorCode.MISSING_REQUIRED_OPTION
        assert error.context.operation == "validate_options"


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def validation_records():
    """Records emitted by the validation module's logger."""
    logger = logging.getLogger("mlforge.cli.common.validation")
    handler = _ListHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler.records
    logger.removeHandler(handler)
    logger.setLevel(previous_level)


def test_violations_logged_at_debug(validation_records):
    """Test that violations are logged as diagnostics, not console warnings."""
    validate_cross_options(NewOptions())

    assert len(validation_records) == 3
    assert {record.levelno for record in validation_records} == {logging.DEBUG}
    assert validation_records[0].context["reason"] == MISSING_DATASET
