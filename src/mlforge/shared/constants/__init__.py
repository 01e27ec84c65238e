"""
mlforge Constants Module

This module provides centralized constants for the mlforge application.
All magic values and configuration constants are defined here to ensure
consistency across the codebase.
"""

from .cli import CLICommands, CLIDefaults, CLIHelp, CLIMessages, CLIOptions, NewDefaults
from .logging import LogConfig, LogLevels, LogOperations

__all__ = [
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "CLIOptions",
    "LogConfig",
    "LogLevels",
    "LogOperations",
    "NewDefaults",
]
