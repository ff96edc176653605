"""Core layer — pure models, serialisation and parsing.

Rules
-----
* No ``print()`` calls.
* No filesystem, process or network I/O; the reporter writes only to
  the stream it is handed.
* No imports from ``cli`` or ``infra``.
"""

from argecho.core.case_file import format_case, format_cases, read_cases, verify_cases
from argecho.core.models import (
    CaseMismatch,
    InvocationContext,
    ParsedArgument,
    RecordedCase,
    SeparatorMode,
)
from argecho.core.protocols import BinarySink, RawCommandLineSource
from argecho.core.reporter import ArgumentReporter
from argecho.core.winparse import iter_arguments, split_command_line

__all__: list[str] = [
    "ArgumentReporter",
    "BinarySink",
    "CaseMismatch",
    "InvocationContext",
    "ParsedArgument",
    "RawCommandLineSource",
    "RecordedCase",
    "SeparatorMode",
    "format_case",
    "format_cases",
    "iter_arguments",
    "read_cases",
    "split_command_line",
    "verify_cases",
]
