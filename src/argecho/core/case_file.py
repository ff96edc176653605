"""Read recorded reporter output and check the parser against it.

A recording is the reporter's output for many invocations, concatenated:
each case is a raw command line, an argument count, and that many
arguments.  Every function here is pure; the CLI layer does the file
I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from argecho.core.models import CaseMismatch, RecordedCase, SeparatorMode
from argecho.core.winparse import split_command_line
from argecho.exceptions import CaseFileError


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def split_records(text: str, mode: SeparatorMode) -> list[str]:
    """Split *text* into records, dropping the final terminator.

    Line mode accepts both ``\\n`` and ``\\r\\n`` terminators.
    """
    separator = "\0" if mode is SeparatorMode.NULL else "\n"
    records = text.split(separator)
    if records and records[-1] == "":
        records.pop()
    if mode is SeparatorMode.LINE:
        records = [r[:-1] if r.endswith("\r") else r for r in records]
    return records


def _parse_count(raw: str, case_index: int) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise CaseFileError(
            f"Case {case_index}: expected an argument count, found {raw!r}.",
            hint="Check that the recording used the same separator mode.",
        )
    return int(raw)


def read_cases(text: str, mode: SeparatorMode = SeparatorMode.LINE) -> list[RecordedCase]:
    """Parse a recording into :class:`RecordedCase` objects.

    Raises
    ------
    CaseFileError
        If a count is not a decimal number or the last case is truncated.
    """
    records = split_records(text, mode)
    cases: list[RecordedCase] = []
    index = 0
    while index < len(records):
        case_index = len(cases)
        command_line = records[index]
        if index + 1 >= len(records):
            raise CaseFileError(f"Case {case_index}: missing argument count.")
        count = _parse_count(records[index + 1], case_index)
        start = index + 2
        arguments = records[start:start + count]
        if len(arguments) < count:
            raise CaseFileError(
                f"Case {case_index}: expected {count} arguments, "
                f"found {len(arguments)}.",
            )
        cases.append(RecordedCase(command_line=command_line, arguments=tuple(arguments)))
        index = start + count
    return cases


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

def verify_cases(
    cases: Iterable[RecordedCase],
    *,
    max_length: int | None = None,
) -> list[CaseMismatch]:
    """Return every case whose recorded arguments the parser does not reproduce.

    Cases whose command line is longer than *max_length* are skipped.
    """
    mismatches: list[CaseMismatch] = []
    for case in cases:
        if max_length is not None and len(case.command_line) > max_length:
            continue
        parsed = tuple(split_command_line(case.command_line))
        if parsed != case.arguments:
            mismatches.append(CaseMismatch(case=case, parsed=parsed))
    return mismatches


# ---------------------------------------------------------------------------
# Test-case emission
# ---------------------------------------------------------------------------

def _is_plain_printable(text: str) -> bool:
    return all(char.isprintable() for char in text)


def python_literal(text: str) -> str:
    """Render *text* as a Python string literal a human can read.

    Raw literals are used when the text holds backslashes, so Windows
    paths and escape sequences appear exactly as typed.
    """
    if "\\" in text and not text.endswith("\\") and _is_plain_printable(text):
        if '"' not in text:
            return f'r"{text}"'
        if "'" not in text:
            return f"r'{text}'"
    if '"' in text and "'" not in text:
        return repr(text)
    if '"' not in text:
        # Neither quote needs escaping inside double quotes here.
        return '"' + repr(text)[1:-1] + '"'
    return repr(text)


def format_case(case: RecordedCase) -> str:
    """Render *case* as a ``(command_line, [arguments]),`` tuple line."""
    arguments = ", ".join(python_literal(arg) for arg in case.arguments)
    return f"({python_literal(case.command_line)}, [{arguments}]),"


def format_cases(cases: Sequence[RecordedCase]) -> list[str]:
    """Render every case of a recording with :func:`format_case`."""
    return [format_case(case) for case in cases]
