"""Infrastructure: run a reporter with a hand-written raw command line.

On Windows, :func:`subprocess.run` given a *string* passes it to
``CreateProcessW`` untouched, and ``executable=`` becomes the
application name, so argument 0 can be anything the caller likes.  No
other platform accepts a raw command line, so the launcher refuses to
run there.

Every ``subprocess`` exception is caught here and re-raised as
:class:`~argecho.exceptions.LauncherError`.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from argecho.exceptions import EnvironmentUnavailableError, LauncherError


class ReporterLauncher:
    """Spawns one reporter process per command line and captures stdout.

    Parameters
    ----------
    executable:
        Path to a reporter program (for example the ``argecho``
        console-script launcher).
    timeout:
        Seconds to wait for each child before giving up.
    """

    def __init__(self, executable: Path | str, *, timeout: float = 10.0) -> None:
        self._executable: Path = Path(executable)
        self._timeout: float = timeout

    @property
    def executable(self) -> Path:
        return self._executable

    def run(self, command_line: str) -> bytes:
        """Run the reporter with *command_line* and return its stdout.

        The child is waited for before returning, so outputs from
        successive calls never interleave.

        Raises
        ------
        EnvironmentUnavailableError
            When not running on Windows.
        LauncherError
            When the child cannot start, times out, or exits non-zero.
        """
        if sys.platform != "win32":
            raise EnvironmentUnavailableError(
                "Raw command lines can only be passed to a child on Windows.",
                hint="Record on Windows, then verify the recording anywhere.",
            )
        if "\0" in command_line:
            raise LauncherError("A command line cannot contain NUL.")

        try:
            completed = subprocess.run(
                command_line,
                executable=str(self._executable),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise LauncherError(
                f"Reporter timed out after {self._timeout}s for {command_line!r}.",
            ) from exc
        except OSError as exc:
            raise LauncherError(
                f"Could not start {self._executable}: {exc}",
                hint="Pass the full path of a reporter executable.",
            ) from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise LauncherError(
                f"Reporter exited with status {completed.returncode} "
                f"for {command_line!r}.",
                hint=stderr or None,
            )
        return completed.stdout
