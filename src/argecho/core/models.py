"""Domain models for argecho.

All models are **frozen** dataclasses — immutable value objects with no
I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from argecho.exceptions import InvalidInvocationError


# ---------------------------------------------------------------------------
# Separator mode
# ---------------------------------------------------------------------------

class SeparatorMode(enum.Enum):
    """How reporter records are terminated."""

    LINE = "line"
    """Platform line terminator; human readable."""

    NULL = "null"
    """A single ``\\0`` byte; safe for arguments with embedded newlines."""


# ---------------------------------------------------------------------------
# Invocation context
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Snapshot of how the current process was invoked.

    Captured once at startup and handed to the reporter explicitly, so
    tests can inject synthetic invocations instead of spawning a
    process.
    """

    raw_command_line: str
    """The unparsed command line as the parent process assembled it."""

    arguments: tuple[str, ...]
    """The OS-parsed argument vector; element 0 is the program name."""

    exact: bool = True
    """``False`` when the raw line is a reconstruction of *arguments*."""

    def __post_init__(self) -> None:
        if not self.arguments:
            raise InvalidInvocationError(
                "The argument vector is empty; argument 0 must be present.",
            )
        for field_name, value in (
            ("raw command line", self.raw_command_line),
            *((f"argument {i}", arg) for i, arg in enumerate(self.arguments)),
        ):
            if "\0" in value:
                raise InvalidInvocationError(
                    f"The {field_name} contains a NUL character.",
                )

    @property
    def argument_count(self) -> int:
        return len(self.arguments)

    @property
    def program_name(self) -> str:
        return self.arguments[0]


# ---------------------------------------------------------------------------
# Parser output
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedArgument:
    """One argument produced by splitting a Windows command line."""

    value: str
    """The argument after quote and backslash processing."""

    start: int
    """Offset of the argument's first character in the command line."""

    end: int
    """Offset just past the argument's last character."""

    is_program_name: bool
    """Whether this is argument 0, which follows simpler quoting rules."""

    raw_remainder: str
    """The unparsed rest of the command line, starting at :attr:`start`."""


# ---------------------------------------------------------------------------
# Recordings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RecordedCase:
    """A raw command line and the argument vector a reporter printed for it."""

    command_line: str
    arguments: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CaseMismatch:
    """A recorded case the parser disagrees with."""

    case: RecordedCase
    parsed: tuple[str, ...]
    """What :func:`~argecho.core.winparse.split_command_line` produced."""
