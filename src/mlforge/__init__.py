"""
mlforge - Train a model from a dataset and scaffold a runnable project.

The ``new`` command's option schema, per-option coercion and cross-option
validation live in ``mlforge.cli.common``.
"""

__version__ = "0.1.0"
