"""Shared type definitions for mlforge."""

from .cli import (
    CacheMode,
    MlTask,
    UnsignedInt,
    ValidFilePath,
    Verbosity,
    enum_values,
)

__all__ = [
    "CacheMode",
    "MlTask",
    "UnsignedInt",
    "ValidFilePath",
    "Verbosity",
    "enum_values",
]
