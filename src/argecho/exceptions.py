"""Custom exception hierarchy for argecho.

All exceptions that cross layer boundaries must inherit from
:class:`ArgEchoError`.  Raw OS, ``ctypes`` and ``subprocess`` exceptions
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
ArgEchoError
├── EnvironmentUnavailableError
├── OutputWriteError
├── InvalidInvocationError
├── CaseFileError
└── LauncherError
"""

from __future__ import annotations


class ArgEchoError(Exception):
    """Base exception for all argecho errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Process environment ---------------------------------------------------

class EnvironmentUnavailableError(ArgEchoError):
    """Raised when the raw command line or argument vector cannot be read."""


class InvalidInvocationError(ArgEchoError):
    """Raised when an invocation context violates its invariants."""


# --- Output ----------------------------------------------------------------

class OutputWriteError(ArgEchoError):
    """Raised when the destination stream rejects a write."""


# --- Tooling ---------------------------------------------------------------

class CaseFileError(ArgEchoError):
    """Raised when a recording of reporter output cannot be parsed."""


class LauncherError(ArgEchoError):
    """Raised when a reporter child process cannot be run to completion."""
