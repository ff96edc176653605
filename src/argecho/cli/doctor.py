"""``argecho-tools doctor`` — environment diagnostics command.

Shows whether this host can report a genuine raw command line, and how
arguments will be encoded on output.  Rendered as a Rich table, with a
plain-text fallback when Rich is not installed.
"""

from __future__ import annotations

import platform
import sys

from argecho.cli import exit_codes
from argecho.cli.console import console, rich_available
from argecho.exceptions import EnvironmentUnavailableError
from argecho.infra.command_line import default_command_line_source
from argecho.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _argecho_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the argecho version row."""
    return "argecho", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _command_line_source_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the raw command-line source row."""
    source = default_command_line_source()
    if not source.exact:
        return "Raw line", "reconstructed from argv", "[yellow]WARN[/yellow]"
    try:
        source.read()
    except EnvironmentUnavailableError:
        return "Raw line", "GetCommandLineW unavailable", "[red]FAIL[/red]"
    return "Raw line", "GetCommandLineW", "[green]OK[/green]"


def _encoding_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the output encoding row."""
    value = f"{sys.getfilesystemencoding()} ({sys.getfilesystemencodeerrors()})"
    return "Encoding", value, "[green]OK[/green]"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Rich row."""
    if not rich_available():
        return "rich", "NOT INSTALLED", "[yellow]WARN[/yellow]"
    try:
        from importlib.metadata import version

        return "rich", version("rich"), "[green]OK[/green]"
    except ImportError:
        return "rich", "unknown", "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nargecho doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = [
        _argecho_version_check(),
        _python_version_check(),
        _os_check(),
        _command_line_source_check(),
        _encoding_check(),
        _rich_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)
    reconstructed = any(
        label == "Raw line" and "WARN" in status for label, _, status in checks
    )

    use_rich = rich_available()
    if use_rich:
        from rich.table import Table

        table = Table(
            title="argecho doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if reconstructed:
        note = (
            "This platform exposes no raw command line; the first block is the "
            "argument vector joined with single spaces."
        )
        console.print(f"[yellow]{note}[/yellow]" if use_rich else note)

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]" if use_rich else "Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]" if use_rich else "All checks passed.")
    return exit_codes.SUCCESS
