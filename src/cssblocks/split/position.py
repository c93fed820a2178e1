# topmark:header:start
#
#   project      : CSSBlocks
#   file         : position.py
#   file_relpath : src/cssblocks/split/position.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Conversions between character offsets and (line, column) positions.

Lines are 1-based and columns are 0-based, matching the source map object
model. Two flavours are provided:

- `PositionIndex` indexes an immutable text once (line start table) and
  answers lookups in ``O(log lines)``.
- `TextCursor` tracks the end position of a growing buffer; appending text
  only scans the appended delta.

Line breaks follow CSS preprocessing: ``\\r\\n``, ``\\r``, ``\\f`` and ``\\n`` each
end one line.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

_LINE_BREAK = re.compile(r"\r\n|[\r\f]")


@dataclass(frozen=True, slots=True)
class Position:
    """A (line, column) pair: 1-based line, 0-based column."""

    line: int
    column: int


START: Position = Position(line=1, column=0)


def normalize_newlines(text: str) -> str:
    """Replace every CSS line break in ``text`` with ``\\n``."""
    if "\r" not in text and "\f" not in text:
        return text
    return _LINE_BREAK.sub("\n", text)


def advance(position: Position, text: str) -> Position:
    """Return the position reached after writing ``text`` at ``position``.

    Args:
        position (Position): Position of the first character of ``text``.
        text (str): The text written.

    Returns:
        Position: Where the next character would be written.
    """
    text = normalize_newlines(text)
    newlines = text.count("\n")
    if newlines == 0:
        return Position(position.line, position.column + len(text))
    return Position(position.line + newlines, len(text) - text.rfind("\n") - 1)


def offset_to_line_column(buffer: str, offset: int) -> Position:
    """Convert ``offset`` into ``buffer`` to a position.

    ``offset`` may equal ``len(buffer)``: the result is then the position the
    next written character would occupy. An empty buffer yields line 1,
    column 0.

    Raises:
        IndexError: If ``offset`` is negative or past the end of ``buffer``.
    """
    if offset < 0 or offset > len(buffer):
        raise IndexError(f"offset {offset} out of range for buffer of length {len(buffer)}")
    return advance(START, buffer[:offset])


class PositionIndex:
    """Line-start table over an immutable text."""

    def __init__(self, text: str) -> None:
        self._length = len(text)
        starts = [0]
        pos = text.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        self._line_starts: list[int] = starts

    @property
    def line_count(self) -> int:
        """Number of lines (a trailing newline opens one more, empty line)."""
        return len(self._line_starts)

    def position_of(self, offset: int) -> Position:
        """Return the position of ``offset`` (``0 <= offset <= len(text)``)."""
        if offset < 0 or offset > self._length:
            raise IndexError(f"offset {offset} out of range for text of length {self._length}")
        line_idx = bisect_right(self._line_starts, offset) - 1
        return Position(line_idx + 1, offset - self._line_starts[line_idx])

    def offset_of(self, line: int, column: int) -> int:
        """Return the offset of a (1-based line, 0-based column) position.

        Raises:
            IndexError: If the position lies outside the text.
        """
        if line < 1 or line > len(self._line_starts):
            raise IndexError(f"line {line} out of range (1..{len(self._line_starts)})")
        start = self._line_starts[line - 1]
        end = self._line_starts[line] - 1 if line < len(self._line_starts) else self._length
        if column < 0 or start + column > end:
            raise IndexError(f"column {column} out of range on line {line}")
        return start + column


class TextCursor:
    """End-of-buffer position of an append-only buffer.

    The cursor is advanced with the text being appended; it never rescans
    what was already written.
    """

    __slots__ = ("_length", "_position")

    def __init__(self) -> None:
        self._length = 0
        self._position = START

    @property
    def length(self) -> int:
        """Number of characters appended so far."""
        return self._length

    @property
    def position(self) -> Position:
        """Position at which the next appended character will be written."""
        return self._position

    def feed(self, text: str) -> Position:
        """Advance past ``text`` and return the position it starts at."""
        before = self._position
        self._position = advance(before, text)
        self._length += len(text)
        return before
