"""CLI console helpers with optional Rich support.

This module avoids module-level imports of Rich so that the reporter
itself, which never renders anything on success, keeps working when
Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from argecho.exceptions import EnvironmentUnavailableError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``EnvironmentUnavailableError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentUnavailableError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def rich_available() -> bool:
    """Return ``True`` when Rich tables can be rendered."""
    try:
        from rich.table import Table  # noqa: F401
    except ModuleNotFoundError:
        return False
    return True


def escape_markup(text: str) -> str:
    """Escape Rich markup in *text*; unchanged when Rich is missing."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentUnavailableError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()
