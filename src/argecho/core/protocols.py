"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from typing import Protocol


class RawCommandLineSource(Protocol):
    """Contract for fetching the unparsed command line of this process.

    Any object with a matching :meth:`read` method and :attr:`exact`
    attribute satisfies this protocol structurally.
    """

    exact: bool
    """``True`` when :meth:`read` returns the string the OS received.

    Sources that rebuild the line from the parsed vector set this to
    ``False``; the raw/parsed round trip only holds for exact sources.
    """

    def read(self) -> str:
        """Return the raw command line.

        Raises
        ------
        EnvironmentUnavailableError
            When the host refuses to provide the command line.
        """
        ...  # pragma: no cover


class BinarySink(Protocol):
    """The subset of a binary stream the reporter writes to."""

    def write(self, data: bytes, /) -> int | None:
        ...  # pragma: no cover

    def flush(self) -> None:
        ...  # pragma: no cover
