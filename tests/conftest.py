"""
Pytest configuration and shared fixtures for mlforge tests.

This module provides common fixtures and configuration that can be used
across all test modules in the project.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from mlforge.cli.common.context import clear_cli_context
from mlforge.config import get_settings


@pytest.fixture
def dataset_file(tmp_path: Path) -> Path:
    """Create a small CSV dataset.

    Returns:
        Path to the created dataset file.
    """
    path = tmp_path / "train.csv"
    path.write_text("Id,Feature,Label\n1,0.5,true\n2,0.7,false\n", encoding="utf-8")
    return path


@pytest.fixture
def second_dataset_file(tmp_path: Path) -> Path:
    """Create a second CSV dataset (used as validation or test data)."""
    path = tmp_path / "test.csv"
    path.write_text("Id,Feature,Label\n3,0.1,true\n", encoding="utf-8")
    return path


@pytest.fixture
def valid_args(dataset_file: Path) -> list[str]:
    """Minimal raw arguments of the new command that pass validation."""
    return [
        "--dataset",
        str(dataset_file),
        "--ml-task",
        "binary-classification",
        "--label-column-name",
        "Label",
    ]


@pytest.fixture(autouse=True)
def _reset_global_state(monkeypatch: pytest.MonkeyPatch):
    """Reset the CLI context and cached settings around each test."""
    for name in ("MLFORGE_DEBUG", "MLFORGE_LOG_LEVEL", "MLFORGE_LOG_FILE", "MLFORGE_RICH_CONSOLE"):
        monkeypatch.delenv(name, raising=False)
    clear_cli_context()
    get_settings.cache_clear()
    yield
    clear_cli_context()
    get_settings.cache_clear()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
