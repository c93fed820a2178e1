# topmark:header:start
#
#   project      : CSSBlocks
#   file         : document.py
#   file_relpath : src/cssblocks/split/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input document: stylesheet text plus its optional original source map."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field

from cssblocks.sourcemap import SourceMapConsumer
from cssblocks.split.position import Position, PositionIndex
from cssblocks.split.rules import normalize_text


def _collapsed_breaks(raw: str) -> list[int]:
    """Return the normalized offsets of every ``\\r\\n`` pair in ``raw``.

    ``\\r\\n`` is the only preprocessing step that changes the text length.
    """
    offsets: list[int] = []
    pos = raw.find("\r\n")
    while pos != -1:
        offsets.append(pos - len(offsets))
        pos = raw.find("\r\n", pos + 2)
    return offsets


@dataclass(frozen=True)
class Document:
    """An immutable stylesheet to split.

    Positions and rule spans are computed on ``text``, the preprocessed form
    tinycss2 parses. Rule text is copied from ``raw`` so the output keeps the
    input's exact characters.

    Attributes:
        name (str): Document name (e.g. ``dist/main.css``); its directory is
            reused for the blocks split out of it.
        text (str): Stylesheet text with newlines normalized to ``\\n`` and NUL
            replaced by U+FFFD.
        original_map (SourceMapConsumer | None): Map from the stylesheet back
            to the pre-processing sources, when available.
        raw (str | None): The stylesheet as read; None when ``text`` is the raw input.
    """

    name: str
    text: str
    original_map: SourceMapConsumer | None = None
    raw: str | None = None
    _index: PositionIndex = field(init=False, repr=False, compare=False)
    _breaks: list[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", PositionIndex(self.text))
        object.__setattr__(self, "_breaks", _collapsed_breaks(self.raw or ""))

    @classmethod
    def create(
        cls,
        name: str,
        text: str,
        source_map: str | bytes | SourceMapConsumer | None = None,
    ) -> Document:
        """Build a document from raw text and an optional map (JSON or decoded).

        Raises:
            SourceMapDecodeError: If ``source_map`` is JSON that cannot be decoded.
        """
        if isinstance(source_map, (str, bytes)):
            source_map = SourceMapConsumer.from_json(source_map)
        normalized = normalize_text(text)
        return cls(
            name=name,
            text=normalized,
            original_map=source_map,
            raw=text if normalized != text else None,
        )

    def position_of(self, offset: int) -> Position:
        """Return the (line, column) of a character offset in ``text``."""
        return self._index.position_of(offset)

    def raw_offset(self, offset: int) -> int:
        """Translate an offset in ``text`` to the matching offset in the raw input.

        An offset on a normalized ``\\n`` that stood for ``\\r\\n`` lands on the ``\\r``.
        """
        return offset + bisect_left(self._breaks, offset)

    def slice(self, start: int, end: int) -> str:
        """Return the exact original substring for the ``text`` span ``[start, end)``."""
        if self.raw is None:
            return self.text[start:end]
        return self.raw[self.raw_offset(start) : self.raw_offset(end)]
