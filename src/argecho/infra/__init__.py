"""Infrastructure layer — interaction with the host process and OS.

Every raw OS, ``ctypes`` or ``subprocess`` exception must be caught here
and re-raised as an :class:`~argecho.exceptions.ArgEchoError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from argecho.infra.command_line import (
    JoinedArgvSource,
    Win32CommandLineSource,
    capture_invocation,
    current_arguments,
    default_command_line_source,
)
from argecho.infra.launcher import ReporterLauncher

__all__: list[str] = [
    "JoinedArgvSource",
    "ReporterLauncher",
    "Win32CommandLineSource",
    "capture_invocation",
    "current_arguments",
    "default_command_line_source",
]
