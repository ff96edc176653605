"""Tests for Windows command-line splitting (core/winparse.py).

The tables follow the modern MSVC runtime, including the examples from
Microsoft's documentation and David Deley's post-2008 rules
(https://daviddeley.com/autohotkey/parameters/parameters.htm#WINCRULESEX).
"""

from __future__ import annotations

import pytest

from argecho.core.winparse import (
    iter_arguments,
    null_separated_list,
    raw_remainder,
    split_command_line,
)


def _check(command_line: str, expected: list[str]) -> None:
    assert split_command_line(command_line) == expected


# ---------------------------------------------------------------------------
# Splitting tables
# ---------------------------------------------------------------------------

class TestSingleWords:
    @pytest.mark.parametrize(
        ("command_line", "expected"),
        [
            ("EXE one_word", ["EXE", "one_word"]),
            ("EXE a", ["EXE", "a"]),
            ("EXE 😅", ["EXE", "😅"]),
            ("EXE 😅🤦", ["EXE", "😅🤦"]),
        ],
    )
    def test_split(self, command_line: str, expected: list[str]) -> None:
        _check(command_line, expected)


class TestOfficialExamples:
    @pytest.mark.parametrize(
        ("command_line", "expected"),
        [
            (r'EXE "abc" d e', ["EXE", "abc", "d", "e"]),
            (r'EXE a\\\b d"e f"g h', ["EXE", r"a\\\b", "de fg", "h"]),
            (r'EXE a\\\"b c d', ["EXE", r'a\"b', "c", "d"]),
            (r'EXE a\\\\"b c" d e', ["EXE", r"a\\b c", "d", "e"]),
        ],
    )
    def test_split(self, command_line: str, expected: list[str]) -> None:
        _check(command_line, expected)


class TestWhitespace:
    @pytest.mark.parametrize(
        ("command_line", "expected"),
        [
            (" test", ["", "test"]),
            ("  test", ["", "test"]),
            (" test test2", ["", "test", "test2"]),
            (" test  test2", ["", "test", "test2"]),
            ("test test2 ", ["test", "test2"]),
            ("test  test2 ", ["test", "test2"]),
            ("test ", ["test"]),
            ("EXE\ta\t\tb", ["EXE", "a", "b"]),
        ],
    )
    def test_split(self, command_line: str, expected: list[str]) -> None:
        _check(command_line, expected)

    def test_empty_command_line_has_no_arguments(self) -> None:
        assert split_command_line("") == []

    def test_whitespace_only_has_empty_program_name(self) -> None:
        assert split_command_line("   ") == [""]


class TestQuotes:
    @pytest.mark.parametrize(
        ("command_line", "expected"),
        [
            (r'EXE "" ""', ["EXE", "", ""]),
            (r'EXE "" """', ["EXE", "", '"']),
            (
                r'EXE "this is """all""" in the same argument"',
                ["EXE", 'this is "all" in the same argument'],
            ),
            (r'EXE "a"""', ["EXE", 'a"']),
            (r'EXE "a"" a', ["EXE", 'a" a']),
            (r'EXE "unterminated quote', ["EXE", "unterminated quote"]),
        ],
    )
    def test_split(self, command_line: str, expected: list[str]) -> None:
        _check(command_line, expected)


class TestProgramName:
    """Quotes cannot be escaped in argument 0."""

    @pytest.mark.parametrize(
        ("command_line", "expected"),
        [
            (r'"EXE" check', ["EXE", "check"]),
            (r'"EXE check"', ["EXE check"]),
            (r'"EXE """for""" check', ["EXE for check"]),
            (r'"EXE \"for\" check', ["EXE \\for\\ check"]),
            (r'"EXE \" for \" check', ["EXE \\", "for", '"', "check"]),
            (r'E"X"E test', ["EXE", "test"]),
            (r'EX""E test', ["EXE", "test"]),
            (r'C:\Program Files\x.exe a', ["C:\\Program", "Files\\x.exe", "a"]),
        ],
    )
    def test_split(self, command_line: str, expected: list[str]) -> None:
        _check(command_line, expected)


class TestPost2008Rules:
    @pytest.mark.parametrize(
        ("command_line", "expected"),
        [
            ("EXE CallMeIshmael", ["EXE", "CallMeIshmael"]),
            (r'EXE "Call Me Ishmael"', ["EXE", "Call Me Ishmael"]),
            (r'EXE Cal"l Me I"shmael', ["EXE", "Call Me Ishmael"]),
            (r'EXE CallMe\"Ishmael', ["EXE", 'CallMe"Ishmael']),
            (r'EXE "CallMe\"Ishmael"', ["EXE", 'CallMe"Ishmael']),
            (r'EXE "Call Me Ishmael\\"', ["EXE", "Call Me Ishmael\\"]),
            (r'EXE "CallMe\\\"Ishmael"', ["EXE", r'CallMe\"Ishmael']),
            (r'EXE a\\\b', ["EXE", r"a\\\b"]),
            (r'EXE "a\\\b"', ["EXE", r"a\\\b"]),
            (r'EXE "\"Call Me Ishmael\""', ["EXE", '"Call Me Ishmael"']),
            (r'EXE "C:\TEST A\\"', ["EXE", "C:\\TEST A\\"]),
            (r'EXE "\"C:\TEST A\\\""', ["EXE", '"C:\\TEST A\\"']),
            (r'EXE "a b c"  d  e', ["EXE", "a b c", "d", "e"]),
            (r'EXE "ab\"c"  "\\"  d', ["EXE", 'ab"c', "\\", "d"]),
            (r'EXE "a b c"""', ["EXE", 'a b c"']),
            (r'EXE """CallMeIshmael"""  b  c', ["EXE", '"CallMeIshmael"', "b", "c"]),
            (r'EXE """Call Me Ishmael"""', ["EXE", '"Call Me Ishmael"']),
            (
                r'EXE """"Call Me Ishmael"" b c',
                ["EXE", '"Call', "Me", "Ishmael", "b", "c"],
            ),
        ],
    )
    def test_split(self, command_line: str, expected: list[str]) -> None:
        _check(command_line, expected)


# ---------------------------------------------------------------------------
# Argument metadata
# ---------------------------------------------------------------------------

class TestIterArguments:
    def test_offsets_cover_raw_tokens(self) -> None:
        command_line = 'EXE  "a b"  c'
        args = list(iter_arguments(command_line))
        assert [command_line[a.start:a.end] for a in args] == ["EXE", '"a b"', "c"]

    def test_only_first_is_program_name(self) -> None:
        flags = [a.is_program_name for a in iter_arguments("EXE a b")]
        assert flags == [True, False, False]

    def test_raw_remainder_keeps_quotes(self) -> None:
        args = list(iter_arguments('EXE -- "a b" \\"c'))
        assert args[2].raw_remainder == '"a b" \\"c'


class TestHelpers:
    def test_null_separated_list(self) -> None:
        assert null_separated_list('EXE "" b') == "EXE\0\0b"

    def test_null_separated_list_empty(self) -> None:
        assert null_separated_list("") == ""

    def test_raw_remainder_by_index(self) -> None:
        assert raw_remainder('EXE -- "a b" c', 2) == '"a b" c'

    def test_raw_remainder_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            raw_remainder("EXE a", 2)

    def test_raw_remainder_negative_index(self) -> None:
        with pytest.raises(IndexError):
            raw_remainder("EXE a", -1)
