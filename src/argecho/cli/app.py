"""Reporter entry points and the shared CLI error boundary.

The reporter must print *every* argument it was given, so it parses no
options at all: the separator mode is fixed by the entry point.

* ``argecho``  / ``python -m argecho`` — line-separated records
* ``argecho0``                        — NUL-terminated records

Architecture notes
------------------
* No business logic lives here — rendering is delegated to
  :class:`~argecho.core.reporter.ArgumentReporter` and process state is
  read by :mod:`argecho.infra.command_line`.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from typing import NoReturn

from argecho.cli import exit_codes
from argecho.cli.console import console, escape_markup
from argecho.core.models import InvocationContext, SeparatorMode
from argecho.core.protocols import BinarySink
from argecho.core.reporter import ArgumentReporter
from argecho.exceptions import ArgEchoError, OutputWriteError
from argecho.infra.command_line import capture_invocation


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------

def stdout_sink() -> BinarySink:
    """Return the binary buffer behind ``sys.stdout``.

    Raises
    ------
    OutputWriteError
        When the process has no usable standard output (e.g. ``pythonw``).
    """
    stream = sys.stdout
    buffer = getattr(stream, "buffer", None) if stream is not None else None
    if buffer is None:
        raise OutputWriteError("Standard output is not available.")
    return buffer


def main(
    context: InvocationContext | None = None,
    *,
    mode: SeparatorMode = SeparatorMode.LINE,
    sink: BinarySink | None = None,
) -> int:
    """Report how this process's command line was split.

    Parameters
    ----------
    context:
        The invocation to report.  When ``None`` (default), the current
        process is captured.  Accepting *context* enables deterministic
        testing without spawning a process.
    mode:
        Record separator.
    sink:
        Destination stream; defaults to the standard output buffer.

    Returns
    -------
    int
        OS process exit code.
    """
    if context is None:
        context = capture_invocation()
    if sink is None:
        sink = stdout_sink()
    ArgumentReporter(mode).report(context, sink)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _detach_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail."""
    if sys.stdout is None:
        return
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        try:
            os.dup2(devnull, sys.stdout.fileno())
        finally:
            os.close(devnull)
    except (OSError, ValueError):
        # No file descriptor behind stdout; nothing left to protect.
        return


def run_with_boundary(entry: Callable[[], int]) -> NoReturn:
    """Run *entry* and exit the process with its result.

    Guarantees the process never exits with a raw stack trace during
    normal usage.
    """
    try:
        code = entry()
        sys.exit(code)
    except ArgEchoError as exc:
        if isinstance(exc, OutputWriteError):
            _detach_stdout()
        console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)


def cli() -> NoReturn:
    """Console-script entry point for line-separated output."""
    run_with_boundary(lambda: main(mode=SeparatorMode.LINE))


def cli_null() -> NoReturn:
    """Console-script entry point for NUL-terminated output."""
    run_with_boundary(lambda: main(mode=SeparatorMode.NULL))
