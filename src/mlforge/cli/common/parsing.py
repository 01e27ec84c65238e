"""
Multi-value decoding for list options.

Click hands a ``multiple=True`` option one raw token per flag occurrence.
``--ignore-columns`` additionally accepts comma-separated names inside a
single occurrence, so ``--ignore-columns A,B --ignore-columns C`` decodes to
``["A", "B", "C"]``. Encounter order is preserved.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import typer

from mlforge.shared.constants import CLIOptions, NewDefaults
from mlforge.shared.errors import (
    OptionError,
    create_empty_list_error,
    create_unknown_parse_error,
)

logger = logging.getLogger(__name__)


def split_list_token(token: str, separator: str = NewDefaults.LIST_SEPARATOR) -> list[str]:
    """Split one raw token, dropping empty and whitespace-only fragments.

    Example:
        >>> split_list_token("A,,B, ")
        ['A', 'B']
    """
    return [fragment for fragment in token.split(separator) if fragment.strip()]


def decode_ignore_columns(
    tokens: Sequence[Any],
    option: str = CLIOptions.IGNORE_COLUMNS,
) -> list[str]:
    """Decode the raw tokens bound to a comma-separated list option.

    Blank tokens are skipped, every other token is split on ``,`` and its
    non-empty fragments are appended in encounter order.

    Args:
        tokens: Raw tokens, one per flag occurrence
        option: Flag name used in error messages

    Returns:
        The non-empty, ordered list of values

    Raises:
        OptionError: EMPTY_LIST_AFTER_PARSING when nothing is left after
            splitting, UNKNOWN_PARSE_FAILURE when a token is not a string
    """
    values: list[str] = []
    for token in tokens:
        if not isinstance(token, str):
            raise create_unknown_parse_error(
                option,
                tokens,
                original_error=TypeError(
                    f"expected str token, got {type(token).__name__}",
                ),
            )
        if not token.strip():
            continue
        values.extend(split_list_token(token))

    if not values:
        raise create_empty_list_error(option, [str(token) for token in tokens])

    logger.debug("Decoded %s into %d value(s)", option, len(values))
    return values


def ignore_columns_callback(value: list[str] | None) -> list[str]:
    """Typer callback decoding ``--ignore-columns``.

    Returns an empty list when the option was not supplied. Decoder failures
    are raised as ``typer.BadParameter`` chained to the original
    ``OptionError``.
    """
    if not value:
        return []
    try:
        return decode_ignore_columns(value)
    except OptionError as e:
        raise typer.BadParameter(e.message) from e
