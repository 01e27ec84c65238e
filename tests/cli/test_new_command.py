"""Tests for the new command of the Typer CLI."""

from __future__ import annotations

import io
import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from mlforge.cli.common.models import NewOptions
from mlforge.cli.new_handler import handle_new_command
from mlforge.cli.typer_app import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestNewCommandHelp:
    """Test help output."""

    def test_help_lists_options(self, runner):
        result = runner.invoke(app, ["new", "--help"])

        assert result.exit_code == 0
        for option in (
            "--dataset",
            "--validation-dataset",
            "--test-dataset",
            "--ml-task",
            "--label-column-name",
            "--label-column-index",
            "--max-exploration-time",
            "--verbosity",
            "--name",
            "--output-path",
            "--has-header",
            "--cache",
            "--ignore-columns",
        ):
            assert option in result.output

    def test_help_shows_descriptions(self, runner):
        result = runner.invoke(app, ["new", "--help"])

        assert "Name of the label" in result.output
        assert "Index of the label" in result.output

    def test_app_help(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "new" in result.output

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "mlforge CLI v0.1.0" in result.stdout


class TestNewCommandSuccess:
    """Test successful invocations."""

    def test_prints_configuration(self, runner, valid_args):
        result = runner.invoke(app, ["new", *valid_args])

        assert result.exit_code == 0, result.output
        assert "Options validated successfully" in result.stdout
        assert "binary-classification" in result.stdout

    def test_quiet_prints_nothing(self, runner, valid_args):
        result = runner.invoke(app, ["new", *valid_args, "--verbosity", "q"])

        assert result.exit_code == 0, result.output
        assert "Options validated successfully" not in result.stdout

    def test_json_output(self, runner, valid_args, dataset_file):
        result = runner.invoke(
            app,
            ["--json", "new", *valid_args, "--ignore-columns", "Id,Feature"],
        )

        assert result.exit_code == 0, result.output
        output = json.loads(result.stdout)
        assert output["success"] is True
        assert output["command"] == "new"
        data = output["data"]
        assert data["--dataset"] == str(dataset_file)
        assert data["--ml-task"] == "binary-classification"
        assert data["--label-column-name"] == "Label"
        assert data["--label-column-index"] is None
        assert data["--max-exploration-time"] == 10
        assert data["--verbosity"] == "m"
        assert data["--has-header"] is True
        assert data["--cache"] == "auto"
        assert data["--ignore-columns"] == ["Id", "Feature"]

    def test_has_header_value(self, runner, valid_args):
        result = runner.invoke(app, ["--json", "new", *valid_args, "--has-header", "False"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["--has-header"] is False

    def test_log_file(self, runner, valid_args, tmp_path, monkeypatch):
        log_file = tmp_path / "mlforge.log"
        monkeypatch.setenv("MLFORGE_LOG_FILE", str(log_file))

        result = runner.invoke(app, ["new", *valid_args, "--name", "Demo"])

        assert result.exit_code == 0, result.output
        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert any("Demo" in record["message"] for record in records)


class TestNewCommandFailures:
    """Test rejected invocations."""

    def test_reports_all_missing_options(self, runner):
        result = runner.invoke(app, ["new"])

        assert result.exit_code == 1
        assert "Error: Option required : --dataset" in result.stderr
        assert "Error: Option required : --ml-task" in result.stderr
        assert (
            "Error: Option required : --label-column-name or --label-column-index"
            in result.stderr
        )

    def test_violation_written_once(self, runner):
        """Test that violations reach stderr only as error lines."""
        result = runner.invoke(app, ["new", "--ml-task", "regression", "--label-column-name", "L"])

        assert result.exit_code == 1
        assert result.stderr.count("Option required : --dataset") == 1
        assert "Validation failed" not in result.stderr

    def test_mutually_exclusive_labels(self, runner, valid_args):
        result = runner.invoke(app, ["new", *valid_args, "--label-column-index", "0"])

        assert result.exit_code == 1
        assert (
            "Error: The following options are mutually exclusive please provide only one : "
            "--label-column-name, --label-column-index"
        ) in result.stderr

    def test_ignore_columns_with_label_index(self, runner, dataset_file):
        result = runner.invoke(
            app,
            [
                "new",
                "--dataset", str(dataset_file),
                "--ml-task", "regression",
                "--label-column-index", "1",
                "--ignore-columns", "Id",
            ],
        )

        assert result.exit_code == 1
        assert (
            "Error: Currently we don't support specifying --ignore-columns in "
            "conjunction with --label-column-index"
        ) in result.stderr

    def test_json_failure(self, runner):
        result = runner.invoke(app, ["--json", "new", "--ml-task", "regression"])

        assert result.exit_code == 1
        output = json.loads(result.stdout)
        assert output["success"] is False
        assert output["errors"] == [
            "Option required : --dataset",
            "Option required : --label-column-name or --label-column-index",
        ]
        assert output["data"]["error_codes"] == [
            "MISSING_REQUIRED_OPTION",
            "MISSING_REQUIRED_OPTION",
        ]
        assert output["data"]["exit_code"] == 1

    def test_missing_dataset_file(self, runner, tmp_path):
        result = runner.invoke(
            app,
            [
                "new",
                "--dataset", str(tmp_path / "missing.csv"),
                "--ml-task", "regression",
                "--label-column-name", "Label",
            ],
        )

        assert result.exit_code == 2

    def test_invalid_ml_task(self, runner, dataset_file):
        result = runner.invoke(
            app,
            ["new", "--dataset", str(dataset_file), "--ml-task", "clustering"],
        )

        assert result.exit_code == 2

    def test_empty_ignore_columns(self, runner, valid_args):
        result = runner.invoke(app, ["new", *valid_args, "--ignore-columns", " , "])

        assert result.exit_code == 2


class TestHandleNewCommand:
    """Test the handoff of a validated configuration."""

    def test_table_output(self, dataset_file):
        buffer = io.StringIO()
        console = Console(file=buffer, width=200)
        options = NewOptions(
            dataset=dataset_file,
            ml_task="regression",
            label_column_name="Price",
            ignore_columns=["Id", "Date"],
        )

        exit_code = handle_new_command(options, console=console)

        assert exit_code == 0
        output = buffer.getvalue()
        assert "Options validated successfully" in output
        assert "--label-column-name" in output
        assert "Price" in output
        assert "Id, Date" in output

    def test_json_output(self, dataset_file, capsys):
        options = NewOptions(dataset=dataset_file, ml_task="regression", label_column_index=0)

        exit_code = handle_new_command(options, json_output=True)

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["data"]["--label-column-index"] == 0
