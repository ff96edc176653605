"""Rich progress display for ``argecho-tools record``.

Recording an exhaustive permutation set launches thousands of reporter
processes, so the recorder advances a Rich
:class:`~rich.progress.Progress` bar once per child.

Design
------
* :class:`RecordingProgress` manages a Rich Progress context.
* :meth:`advance` is called after every child exits.
* Shutdown-safe: calls after :meth:`stop` are ignored.
* No ``print()`` — Rich handles all rendering, on stderr, so a
  recording written to stdout stays clean.
"""

from __future__ import annotations

from typing import Any

from argecho.cli.console import get_rich_console
from argecho.exceptions import EnvironmentUnavailableError


class RecordingProgress:
    """Progress bar over a known number of reporter launches.

    Usage::

        with RecordingProgress(total=len(lines)) as progress:
            for line in lines:
                launcher.run(line)
                progress.advance()
    """

    def __init__(self, total: int | None, description: str = "Recording") -> None:
        try:
            from rich.progress import (
                BarColumn,
                MofNCompleteColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TimeRemainingColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentUnavailableError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            console=get_rich_console(),
            transient=False,
        )
        self._total: int | None = total
        self._description: str = description
        self._task_id: Any = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RecordingProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._task_id = self._progress.add_task(self._description, total=self._total)
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    def advance(self, step: int = 1) -> None:
        if not self._started:
            return
        self._progress.update(self._task_id, advance=step)


class NullProgress:
    """Stand-in used when Rich is not installed; renders nothing."""

    def __enter__(self) -> NullProgress:
        return self

    def __exit__(self, *_args: object) -> None:
        return None

    def advance(self, step: int = 1) -> None:
        return None


def make_progress(total: int | None) -> RecordingProgress | NullProgress:
    """Return a Rich progress bar, or a silent one without Rich."""
    try:
        return RecordingProgress(total)
    except EnvironmentUnavailableError:
        return NullProgress()
