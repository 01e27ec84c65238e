"""Tests for the CLI error handler."""

from __future__ import annotations

import json

from mlforge.cli.common.error_handler import format_json_output, handle_cli_error
from mlforge.shared.errors import (
    CliError,
    ErrorCode,
    OptionError,
    OptionValidationError,
    RuleViolation,
)


def _violations() -> list[RuleViolation]:
    return [
        RuleViolation(
            rule="dataset_required",
            code=ErrorCode.MISSING_REQUIRED_OPTION,
            message="Option required : --dataset",
            options=("--dataset",),
        ),
        RuleViolation(
            rule="label_column_exclusive",
            code=ErrorCode.MUTUALLY_EXCLUSIVE_OPTIONS,
            message="The following options are mutually exclusive please provide only one : "
            "--label-column-name, --label-column-index",
            options=("--label-column-name", "--label-column-index"),
        ),
    ]


class TestFormatJsonOutput:
    """Test format_json_output."""

    def test_success(self):
        output = json.loads(format_json_output("new", success=True, data={"--name": "Demo"}))

        assert output == {"success": True, "command": "new", "data": {"--name": "Demo"}}

    def test_errors(self):
        output = json.loads(format_json_output("new", success=False, errors=["boom"]))

        assert output == {"success": False, "command": "new", "errors": ["boom"]}

    def test_returns_bytes(self):
        assert isinstance(format_json_output("new", success=True), bytes)


class TestHandleCliError:
    """Test handle_cli_error."""

    def test_option_error(self, capsys):
        error = OptionError(
            ErrorCode.PATH_NOT_FOUND,
            "Path does not exist for --dataset: data.csv",
            option="--dataset",
        )

        exit_code = handle_cli_error(error, "new")

        assert exit_code == 1
        assert "Error: Path does not exist for --dataset: data.csv\n" in capsys.readouterr().err

    def test_every_violation_is_written(self, capsys):
        exit_code = handle_cli_error(OptionValidationError(_violations()), "new")

        assert exit_code == 1
        lines = [
            line for line in capsys.readouterr().err.splitlines() if line.startswith("Error: ")
        ]
        assert lines == [f"Error: {v.message}" for v in _violations()]

    def test_json_output(self, capsys):
        exit_code = handle_cli_error(
            OptionValidationError(_violations()),
            "new",
            json_output=True,
        )

        assert exit_code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["success"] is False
        assert output["command"] == "new"
        assert output["errors"] == [v.message for v in _violations()]
        assert output["data"]["error_code"] == "MISSING_REQUIRED_OPTION"
        assert output["data"]["error_codes"] == [
            "MISSING_REQUIRED_OPTION",
            "MUTUALLY_EXCLUSIVE_OPTIONS",
        ]
        assert output["data"]["error_type"] == "OptionValidationError"

    def test_cli_error_keeps_exit_code(self, capsys):
        error = CliError(ErrorCode.CLI_INVALID_ARGUMENTS, "bad usage", exit_code=2)

        assert handle_cli_error(error, "new") == 2
        assert "bad usage" in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys):
        assert handle_cli_error(KeyboardInterrupt(), "new") == 130
        assert "interrupted" in capsys.readouterr().err

    def test_unexpected_error(self, capsys):
        exit_code = handle_cli_error(RuntimeError("kaboom"), "new")

        assert exit_code == 1
        assert "Unexpected error: kaboom" in capsys.readouterr().err
