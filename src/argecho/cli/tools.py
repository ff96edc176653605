"""``argecho-tools`` — checking the Windows parser against real reporters.

Sub-commands
------------
* ``split CMDLINE``      — show the parser's split in reporter format
* ``record``             — launch a reporter per command line (Windows)
* ``verify FILE``        — compare the parser with a recording
* ``emit FILE``          — print a recording as Python test literals
* ``permutations``       — list candidate command lines
* ``doctor``             — environment diagnostics

Data goes to stdout; messages, tables and progress go to stderr.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import NoReturn

from argecho.cli import exit_codes
from argecho.cli.app import run_with_boundary, stdout_sink
from argecho.cli.console import console, rich_available
from argecho.core.case_file import format_cases, read_cases, verify_cases
from argecho.core.models import CaseMismatch, SeparatorMode
from argecho.core.permutations import (
    DEFAULT_ALPHABET,
    DEFAULT_MAX_LENGTH,
    count_command_lines,
    iter_command_lines,
)
from argecho.core.protocols import BinarySink
from argecho.core.reporter import render_records
from argecho.core.winparse import split_command_line
from argecho.exceptions import CaseFileError, OutputWriteError
from argecho.infra.launcher import ReporterLauncher
from argecho.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_mode_flag(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "-0",
        "--null",
        action="store_true",
        help=help_text,
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the ``argecho-tools`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="argecho-tools",
        description="Check the Windows command-line parser against real reporters.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    split = commands.add_parser("split", help="Split a raw command line.")
    split.add_argument("command_line", help="Raw command line, quoted for your shell.")
    _add_mode_flag(split, "Terminate records with NUL instead of newlines.")

    record = commands.add_parser(
        "record",
        help="Run a reporter for many command lines and save its output.",
    )
    record.add_argument(
        "--executable",
        required=True,
        type=Path,
        help="Reporter program to launch (argument 0 is taken from each line).",
    )
    source = record.add_mutually_exclusive_group()
    source.add_argument(
        "--from",
        dest="lines_file",
        type=Path,
        default=None,
        help="File with one command line per line.",
    )
    source.add_argument(
        "--max-length",
        type=int,
        default=DEFAULT_MAX_LENGTH,
        help=f"Longest generated command line (default: {DEFAULT_MAX_LENGTH}).",
    )
    record.add_argument(
        "--alphabet",
        default=None,
        help="Characters to build command lines from (default: backslash, a, quote, space, tab).",
    )
    record.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the recording here instead of stdout.",
    )
    record.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Seconds to wait for each reporter (default: 10).",
    )

    verify = commands.add_parser("verify", help="Check the parser against a recording.")
    verify.add_argument("recording", type=Path)
    _add_mode_flag(verify, "The recording uses NUL-terminated records.")
    verify.add_argument(
        "--max-length",
        type=int,
        default=None,
        help="Skip cases whose command line is longer than this.",
    )

    emit = commands.add_parser("emit", help="Print a recording as Python test literals.")
    emit.add_argument("recording", type=Path)
    _add_mode_flag(emit, "The recording uses NUL-terminated records.")

    permutations = commands.add_parser("permutations", help="List candidate command lines.")
    permutations.add_argument("--max-length", type=int, default=DEFAULT_MAX_LENGTH)
    permutations.add_argument("--alphabet", default=DEFAULT_ALPHABET)
    _add_mode_flag(permutations, "Terminate lines with NUL instead of newlines.")

    commands.add_parser("doctor", help="Show environment diagnostics.")
    return parser


def _mode(args: argparse.Namespace) -> SeparatorMode:
    return SeparatorMode.NULL if args.null else SeparatorMode.LINE


# ---------------------------------------------------------------------------
# I/O helpers
# ---------------------------------------------------------------------------

def _write(sink: BinarySink, data: bytes) -> None:
    try:
        sink.write(data)
    except (OSError, ValueError) as exc:
        raise OutputWriteError(f"Could not write output: {exc}") from exc


def _write_text_lines(lines: Iterable[str], mode: SeparatorMode) -> None:
    sink = stdout_sink()
    for line in lines:
        _write(sink, render_records([line], mode))
    sink.flush()


def _read_recording(path: Path) -> str:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise CaseFileError(f"Cannot read recording {path}: {exc}") from exc
    return data.decode("utf-8", errors="surrogateescape")


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_split(args: argparse.Namespace) -> int:
    arguments = split_command_line(args.command_line)
    records = [args.command_line, str(len(arguments)), *arguments]
    sink = stdout_sink()
    _write(sink, render_records(records, _mode(args)))
    sink.flush()
    return exit_codes.SUCCESS


def _command_lines_for_record(
    args: argparse.Namespace,
) -> tuple[Iterable[str], int | None]:
    if args.lines_file is not None:
        try:
            text = args.lines_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise CaseFileError(f"Cannot read {args.lines_file}: {exc}") from exc
        # str.splitlines would also break on form feeds and other controls.
        lines = [line.removesuffix("\r") for line in text.split("\n")]
        lines = [line for line in lines if line]
        return lines, len(lines)
    alphabet = args.alphabet if args.alphabet is not None else DEFAULT_ALPHABET
    total = count_command_lines(alphabet, args.max_length)
    return iter_command_lines(alphabet, args.max_length), total


def _handle_record(args: argparse.Namespace) -> int:
    from argecho.cli.progress import make_progress

    launcher = ReporterLauncher(args.executable, timeout=args.timeout)
    command_lines, total = _command_lines_for_record(args)

    output = None
    if args.output is not None:
        try:
            output = args.output.open("wb")
        except OSError as exc:
            raise OutputWriteError(f"Cannot open {args.output}: {exc}") from exc
    sink: BinarySink = output if output is not None else stdout_sink()

    recorded = 0
    try:
        with make_progress(total) as progress:
            for command_line in command_lines:
                _write(sink, launcher.run(command_line))
                recorded += 1
                progress.advance()
        sink.flush()
    finally:
        if output is not None:
            output.close()

    console.print(f"[green]Recorded {recorded} command lines.[/green]")
    return exit_codes.SUCCESS


def _render_mismatches(mismatches: Sequence[CaseMismatch]) -> None:
    if rich_available():
        from rich.markup import escape
        from rich.table import Table

        table = Table(
            title="Parser mismatches",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Command line", style="bold")
        table.add_column("Recorded")
        table.add_column("Parsed")
        for mismatch in mismatches:
            table.add_row(
                escape(repr(mismatch.case.command_line)),
                escape(repr(list(mismatch.case.arguments))),
                escape(repr(list(mismatch.parsed))),
            )
        console.print(table)
        return

    for mismatch in mismatches:
        print(f"command line: {mismatch.case.command_line!r}", file=sys.stderr)
        print(f"    recorded: {list(mismatch.case.arguments)!r}", file=sys.stderr)
        print(f"      parsed: {list(mismatch.parsed)!r}", file=sys.stderr)


def _handle_verify(args: argparse.Namespace) -> int:
    cases = read_cases(_read_recording(args.recording), _mode(args))
    mismatches = verify_cases(cases, max_length=args.max_length)
    if mismatches:
        _render_mismatches(mismatches)
        console.print(
            f"[bold red]{len(mismatches)} of {len(cases)} cases disagree "
            "with the parser.[/bold red]"
        )
        return exit_codes.GENERAL_ERROR
    console.print(f"[bold green]All {len(cases)} cases match.[/bold green]")
    return exit_codes.SUCCESS


def _handle_emit(args: argparse.Namespace) -> int:
    cases = read_cases(_read_recording(args.recording), _mode(args))
    _write_text_lines(format_cases(cases), SeparatorMode.LINE)
    return exit_codes.SUCCESS


def _handle_permutations(args: argparse.Namespace) -> int:
    _write_text_lines(iter_command_lines(args.alphabet, args.max_length), _mode(args))
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    from argecho.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run ``argecho-tools``.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS
    if args.command == "split":
        return _handle_split(args)
    if args.command == "record":
        if args.lines_file is not None and args.alphabet is not None:
            parser.error("argument --alphabet: not allowed with argument --from")
        return _handle_record(args)
    if args.command == "verify":
        return _handle_verify(args)
    if args.command == "emit":
        return _handle_emit(args)
    if args.command == "permutations":
        return _handle_permutations(args)
    return _handle_doctor()


def tools_cli() -> NoReturn:
    """Console-script entry point for ``argecho-tools``."""
    run_with_boundary(main)
