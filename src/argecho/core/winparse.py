"""Windows command-line splitting, following the modern MSVC C runtime.

Windows hands a program one string; the C runtime turns it into
``argv``.  Every function here is a **pure** transformation of that
string, so the reporter's raw line can be checked against the vector it
printed.

Rules
-----
* Arguments are separated by runs of spaces and tabs outside quotes.
* Leading whitespace makes argument 0 empty; trailing whitespace does
  not start another argument; an empty line has no arguments at all.
* Argument 0 (the program name): ``"`` only toggles quote mode and
  backslashes are always literal.
* Every later argument:

  - ``2n`` backslashes then ``"`` → ``n`` backslashes, quote toggles;
  - ``2n+1`` backslashes then ``"`` → ``n`` backslashes and a literal ``"``;
  - backslashes not followed by ``"`` are literal;
  - ``""`` inside quote mode → a literal ``"``, still in quote mode.
"""

from __future__ import annotations

from collections.abc import Iterator

from argecho.core.models import ParsedArgument

SPACE = " "
TAB = "\t"
QUOTE = '"'
BACKSLASH = "\\"

_WHITESPACE = (SPACE, TAB)


class _Cursor:
    """Position within a command line."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self) -> str | None:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def count_run(self, char: str) -> int:
        """Count consecutive *char* from the current position."""
        end = self.pos
        while end < len(self.text) and self.text[end] == char:
            end += 1
        return end - self.pos

    def skip_whitespace(self) -> None:
        while self.peek() in _WHITESPACE:
            self.pos += 1


# ---------------------------------------------------------------------------
# Single-argument scanners
# ---------------------------------------------------------------------------

def _scan_program_name(cursor: _Cursor) -> str:
    chars: list[str] = []
    in_quotes = False
    while (char := cursor.peek()) is not None:
        if char in _WHITESPACE and not in_quotes:
            break
        cursor.pos += 1
        if char == QUOTE:
            in_quotes = not in_quotes
        else:
            chars.append(char)
    return "".join(chars)


def _scan_argument(cursor: _Cursor) -> str:
    chars: list[str] = []
    in_quotes = False
    while (char := cursor.peek()) is not None:
        if char in _WHITESPACE and not in_quotes:
            break

        if char == BACKSLASH:
            slashes = cursor.count_run(BACKSLASH)
            cursor.pos += slashes
            if cursor.peek() != QUOTE:
                chars.append(BACKSLASH * slashes)
                continue
            chars.append(BACKSLASH * (slashes // 2))
            if slashes % 2:
                chars.append(QUOTE)
                cursor.pos += 1
            # An even run leaves the quote to toggle quote mode below.
            continue

        cursor.pos += 1
        if char == QUOTE:
            if in_quotes and cursor.peek() == QUOTE:
                chars.append(QUOTE)
                cursor.pos += 1
            else:
                in_quotes = not in_quotes
        else:
            chars.append(char)
    return "".join(chars)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def iter_arguments(command_line: str) -> Iterator[ParsedArgument]:
    """Yield every argument of *command_line*, program name first."""
    cursor = _Cursor(command_line)
    is_program_name = True
    while cursor.peek() is not None:
        start = cursor.pos
        if is_program_name:
            value = _scan_program_name(cursor)
        else:
            value = _scan_argument(cursor)
        yield ParsedArgument(
            value=value,
            start=start,
            end=cursor.pos,
            is_program_name=is_program_name,
            raw_remainder=command_line[start:],
        )
        cursor.skip_whitespace()
        is_program_name = False


def split_command_line(command_line: str) -> list[str]:
    """Split *command_line* into the ``argv`` the C runtime would build.

    >>> split_command_line('EXE "a b" c\\\\"d')
    ['EXE', 'a b', 'c"d']
    """
    return [arg.value for arg in iter_arguments(command_line)]


def null_separated_list(command_line: str) -> str:
    """Return every argument of *command_line* joined by ``\\0``."""
    return "\0".join(split_command_line(command_line))


def raw_remainder(command_line: str, index: int) -> str:
    """Return the unparsed rest of *command_line* from argument *index*.

    Useful for passing the tail of a command line on to another program
    without re-quoting it.

    Raises
    ------
    IndexError
        When *command_line* has no argument *index*.
    """
    if index < 0:
        raise IndexError(f"argument index must not be negative: {index}")
    for position, argument in enumerate(iter_arguments(command_line)):
        if position == index:
            return argument.raw_remainder
    raise IndexError(f"command line has no argument {index}")
