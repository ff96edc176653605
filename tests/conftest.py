"""Shared pytest fixtures and configuration for the argecho test suite.

Guidelines
----------
* No real process spawning — ``subprocess`` and ``ctypes`` are mocked
  at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state; invocations are injected as
  :class:`~argecho.core.models.InvocationContext` objects.
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest

from argecho.core.models import InvocationContext
from argecho.core.winparse import split_command_line


@pytest.fixture
def sep() -> bytes:
    """The line-mode record terminator on this platform."""
    return os.linesep.encode("ascii")


@pytest.fixture
def windows_context() -> Callable[[str], InvocationContext]:
    """Factory: a context whose vector is what Windows parses from the raw line."""

    def _make(raw_command_line: str) -> InvocationContext:
        return InvocationContext(
            raw_command_line=raw_command_line,
            arguments=tuple(split_command_line(raw_command_line)),
        )

    return _make
