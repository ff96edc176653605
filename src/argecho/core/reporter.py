"""The argument reporter — serialises an invocation in three blocks.

Output, in order:

1. the raw command line,
2. the decimal argument count,
3. every parsed argument in original order,

each record terminated by the platform line terminator or by a single
NUL byte.  Records are written verbatim: no quoting, no escaping.

Text is encoded with :func:`os.fsencode` so that arguments the OS
delivered as undecodable bytes (carried in ``str`` as lone surrogates)
go back out byte-identical.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

from argecho.core.models import InvocationContext, SeparatorMode
from argecho.core.protocols import BinarySink
from argecho.exceptions import OutputWriteError


def record_terminator(mode: SeparatorMode) -> bytes:
    """Return the bytes that end every record in *mode*."""
    if mode is SeparatorMode.NULL:
        return b"\0"
    return os.linesep.encode("ascii")


def iter_records(context: InvocationContext) -> Iterator[str]:
    """Yield the textual records for *context*, unterminated."""
    yield context.raw_command_line
    yield str(context.argument_count)
    yield from context.arguments


def encode_record(text: str) -> bytes:
    """Encode one record the way the OS handed it to us.

    Raises
    ------
    OutputWriteError
        When *text* cannot be represented in the file system encoding.
    """
    try:
        return os.fsencode(text)
    except UnicodeEncodeError as exc:
        raise OutputWriteError(
            f"Cannot encode record for output: {exc}",
            hint="Set PYTHONUTF8=1 or use a UTF-8 locale.",
        ) from exc


def render_records(records: Iterable[str], mode: SeparatorMode) -> bytes:
    """Encode and terminate each of *records*, concatenated."""
    terminator = record_terminator(mode)
    return b"".join(encode_record(record) + terminator for record in records)


class ArgumentReporter:
    """Writes an :class:`InvocationContext` to a binary stream.

    Parameters
    ----------
    mode:
        Record separator; fixed for the lifetime of the reporter.
    """

    def __init__(self, mode: SeparatorMode = SeparatorMode.LINE) -> None:
        self._mode: SeparatorMode = mode

    @property
    def mode(self) -> SeparatorMode:
        return self._mode

    def render(self, context: InvocationContext) -> bytes:
        """Return the complete output for *context* as bytes."""
        return render_records(iter_records(context), self._mode)

    def report(self, context: InvocationContext, sink: BinarySink) -> None:
        """Render *context* and write it to *sink* in one pass.

        Raises
        ------
        OutputWriteError
            When the sink rejects the write or the flush.
        """
        payload = self.render(context)
        try:
            sink.write(payload)
            sink.flush()
        except (OSError, ValueError) as exc:
            # ValueError: write to a closed file.
            raise OutputWriteError(
                f"Could not write to standard output: {exc}",
            ) from exc
