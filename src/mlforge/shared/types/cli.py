"""
CLI-related Type Definitions

This module provides the enumerated value types and constrained scalars used
to validate command-line options at the boundary, preventing invalid data
from propagating into the core logic.

Choice-constrained options are modeled as ``str`` enums so Typer renders
them as choice types while the user-facing values stay plain strings.
"""

from __future__ import annotations

from enum import Enum

from pydantic import FilePath, NonNegativeInt

# File system types
ValidFilePath = FilePath

# CLI option types
UnsignedInt = NonNegativeInt


class MlTask(str, Enum):
    """Machine-learning task to train a model for."""

    BINARY_CLASSIFICATION = "binary-classification"
    MULTICLASS_CLASSIFICATION = "multiclass-classification"
    REGRESSION = "regression"


class Verbosity(str, Enum):
    """Output verbosity of the new command."""

    QUIET = "q"
    MINIMAL = "m"
    DIAGNOSTIC = "diag"


class CacheMode(str, Enum):
    """Whether the training data cache is on, off or auto determined."""

    ON = "on"
    OFF = "off"
    AUTO = "auto"


def enum_values(enum_type: type[Enum]) -> tuple[str, ...]:
    """Return the plain string values of a choice enum, in declaration order."""
    return tuple(str(member.value) for member in enum_type)
