"""Enumerate candidate command lines for exhaustive parser checks.

The search space grows as ``len(alphabet) ** max_length``, so a small
alphabet of the characters the parser treats specially covers the
interesting interactions.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from argecho.exceptions import ArgEchoError

DEFAULT_ALPHABET: str = '\\a" \t'
"""Backslash, a plain letter, quote, space, and tab."""

DEFAULT_MAX_LENGTH: int = 6


def count_command_lines(alphabet: str, max_length: int) -> int:
    """Return how many lines :func:`iter_command_lines` will yield."""
    _validate(alphabet, max_length)
    size = len(set(alphabet))
    return sum(size ** length for length in range(1, max_length + 1))


def iter_command_lines(
    alphabet: str = DEFAULT_ALPHABET,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> Iterator[str]:
    """Yield every string over *alphabet* of length 1 to *max_length*.

    Shorter strings come first; duplicate characters in *alphabet* are
    ignored.

    Raises
    ------
    ArgEchoError
        If *alphabet* is empty or *max_length* is below 1.
    """
    _validate(alphabet, max_length)
    symbols = tuple(dict.fromkeys(alphabet))
    for length in range(1, max_length + 1):
        for combo in itertools.product(symbols, repeat=length):
            yield "".join(combo)


def _validate(alphabet: str, max_length: int) -> None:
    if not alphabet:
        raise ArgEchoError("The alphabet must contain at least one character.")
    if "\0" in alphabet:
        raise ArgEchoError(
            "The alphabet must not contain NUL.",
            hint="A command line is NUL-terminated and cannot contain one.",
        )
    if max_length < 1:
        raise ArgEchoError(f"max_length must be at least 1, got {max_length}.")
