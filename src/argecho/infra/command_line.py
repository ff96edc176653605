"""Infrastructure: read this process's command line from the host.

Windows keeps the raw string the parent passed to ``CreateProcessW``
and exposes it through ``GetCommandLineW``.  POSIX systems only ever
see the pre-split vector, so there the raw line is reconstructed by
joining the vector with single spaces and flagged as inexact.

The reporter runs inside a Python interpreter, so the process command
line starts with the interpreter and its own options (``python -m``).
Those leading arguments are dropped from both the vector and the raw
line: argument 0 is the program, as it would be for a native binary.

Rules
-----
* ``ctypes`` is touched only inside :class:`Win32CommandLineSource`.
* Every ``OSError``/``AttributeError`` from the host maps to
  :class:`~argecho.exceptions.EnvironmentUnavailableError`.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from argecho.core.models import InvocationContext
from argecho.core.protocols import RawCommandLineSource
from argecho.core.winparse import raw_remainder
from argecho.exceptions import EnvironmentUnavailableError


# ---------------------------------------------------------------------------
# Parsed vector
# ---------------------------------------------------------------------------

def _process_arguments() -> tuple[str, ...]:
    return tuple(getattr(sys, "orig_argv", None) or sys.argv)


def interpreter_prefix_length() -> int:
    """Return how many leading process arguments belong to the interpreter.

    ``sys.orig_argv`` is the full process vector; ``sys.argv`` is what
    the program sees.  Both end with the same caller arguments, so the
    difference in length is the interpreter path plus its options.
    """
    return max(len(_process_arguments()) - len(sys.argv), 0)


def current_arguments() -> tuple[str, ...]:
    """Return the program's argument vector, argument 0 first.

    The vector is taken from ``sys.orig_argv`` so that argument 0 is
    spelled as it appears on the command line (``argecho`` for
    ``python -m argecho``, the script path for console scripts) rather
    than the resolved path ``sys.argv[0]`` holds.
    """
    arguments = _process_arguments()[interpreter_prefix_length():]
    if not arguments:
        raise EnvironmentUnavailableError(
            "The process was started without an argument vector.",
        )
    return arguments


# ---------------------------------------------------------------------------
# Raw command-line sources
# ---------------------------------------------------------------------------

class Win32CommandLineSource:
    """:class:`RawCommandLineSource` backed by ``GetCommandLineW``.

    Returns the whole process line, interpreter included.
    """

    exact: bool = True

    def read(self) -> str:
        try:
            import ctypes

            get_command_line = ctypes.windll.kernel32.GetCommandLineW  # type: ignore[attr-defined]
            get_command_line.argtypes = []
            get_command_line.restype = ctypes.c_wchar_p
            command_line = get_command_line()
        except (AttributeError, ImportError, OSError) as exc:
            raise EnvironmentUnavailableError(
                f"GetCommandLineW is not available: {exc}",
                hint="The native raw command line only exists on Windows.",
            ) from exc
        if command_line is None:
            raise EnvironmentUnavailableError("GetCommandLineW returned NULL.")
        return command_line


class JoinedArgvSource:
    """:class:`RawCommandLineSource` that rebuilds the line from the vector.

    The result is lossy: quoting and runs of whitespace in the original
    invocation cannot be recovered, so :attr:`exact` is ``False``.
    It is built from the program's vector and so has no interpreter
    prefix to drop.
    """

    exact: bool = False

    def __init__(self, arguments: Sequence[str] | None = None) -> None:
        self._arguments: tuple[str, ...] | None = (
            tuple(arguments) if arguments is not None else None
        )

    def read(self) -> str:
        arguments = self._arguments
        if arguments is None:
            arguments = current_arguments()
        return " ".join(arguments)


def default_command_line_source(platform: str | None = None) -> RawCommandLineSource:
    """Pick the best source for *platform* (defaults to ``sys.platform``)."""
    if (platform or sys.platform) == "win32":
        return Win32CommandLineSource()
    return JoinedArgvSource()


def strip_interpreter(command_line: str, skip: int) -> str:
    """Drop the first *skip* arguments from a raw process line.

    Raises
    ------
    EnvironmentUnavailableError
        When the line has fewer arguments than the interpreter consumed.
    """
    if skip == 0:
        return command_line
    try:
        return raw_remainder(command_line, skip)
    except IndexError as exc:
        raise EnvironmentUnavailableError(
            f"The raw command line has fewer than {skip + 1} arguments.",
            hint="The host and the interpreter disagree on the argument vector.",
        ) from exc


# ---------------------------------------------------------------------------
# Invocation snapshot
# ---------------------------------------------------------------------------

def capture_invocation(
    source: RawCommandLineSource | None = None,
) -> InvocationContext:
    """Read the raw line and vector once and freeze them together.

    Exact sources report the whole process line; the interpreter's
    leading arguments are cut from it so it matches the vector.

    Raises
    ------
    EnvironmentUnavailableError
        If either piece of process state cannot be read.
    """
    if source is None:
        source = default_command_line_source()
    raw_command_line = source.read()
    if source.exact:
        raw_command_line = strip_interpreter(raw_command_line, interpreter_prefix_length())
    return InvocationContext(
        raw_command_line=raw_command_line,
        arguments=current_arguments(),
        exact=source.exact,
    )
