"""Tests for command-line enumeration (core/permutations.py)."""

from __future__ import annotations

import pytest

from argecho.core.permutations import (
    DEFAULT_ALPHABET,
    DEFAULT_MAX_LENGTH,
    count_command_lines,
    iter_command_lines,
)
from argecho.exceptions import ArgEchoError


class TestIterCommandLines:
    def test_shorter_lines_first(self) -> None:
        assert list(iter_command_lines("ab", 2)) == ["a", "b", "aa", "ab", "ba", "bb"]

    def test_duplicate_symbols_ignored(self) -> None:
        assert list(iter_command_lines("aab", 1)) == ["a", "b"]

    def test_count_matches_iteration(self) -> None:
        assert count_command_lines("xyz", 3) == len(list(iter_command_lines("xyz", 3)))

    def test_default_space(self) -> None:
        assert DEFAULT_ALPHABET == '\\a" \t'
        assert DEFAULT_MAX_LENGTH == 6
        assert count_command_lines(DEFAULT_ALPHABET, DEFAULT_MAX_LENGTH) == 19530

    def test_lazy(self) -> None:
        lines = iter_command_lines(DEFAULT_ALPHABET, 30)
        assert next(lines) == "\\"


class TestValidation:
    def test_empty_alphabet(self) -> None:
        with pytest.raises(ArgEchoError, match="alphabet"):
            list(iter_command_lines("", 3))

    def test_nul_in_alphabet(self) -> None:
        with pytest.raises(ArgEchoError, match="NUL"):
            list(iter_command_lines("a\0", 3))

    @pytest.mark.parametrize("max_length", [0, -1])
    def test_max_length_below_one(self, max_length: int) -> None:
        with pytest.raises(ArgEchoError, match="max_length"):
            count_command_lines("ab", max_length)
