# topmark:header:start
#
#   project      : CSSBlocks
#   file         : block.py
#   file_relpath : src/cssblocks/split/block.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output blocks: accumulated text plus the mappings that describe it.

The buffer is append-only. A `TextCursor` follows its end, so the position
handed back by `Block.append` is the position of the first appended
character inside *this* block, however often the same text was written
before.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cssblocks.config.logging import get_logger
from cssblocks.split.position import Position, TextCursor, advance

if TYPE_CHECKING:
    from cssblocks.config.logging import CssBlocksLogger
    from cssblocks.sourcemap import SourceMapConsumer

logger: CssBlocksLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MappingEntry:
    """One generated -> original correspondence inside a block.

    Lines are 1-based, columns 0-based.
    """

    generated_line: int
    generated_column: int
    source: str
    original_line: int
    original_column: int


class Block:
    """One output stylesheet under construction.

    Attributes:
        name (str): Block identity (a basename such as ``departures.css``).
        marker_name (str): Name used by ``start:``/``end:`` markers to refer to
            this block; equal to ``name`` unless blocks are split per occurrence.
        output_name (str): Path-like output name (the document's directory
            joined with ``name``).
        is_document (bool): True for the block holding the document's own content.
    """

    def __init__(
        self,
        name: str,
        *,
        output_name: str | None = None,
        marker_name: str | None = None,
        is_document: bool = False,
    ) -> None:
        self.name = name
        self.marker_name = marker_name or name
        self.output_name = output_name or name
        self.is_document = is_document
        self._chunks: list[str] = []
        self._cursor = TextCursor()
        self._mappings: list[MappingEntry] = []
        self._sources: dict[str, None] = {}
        self._source_contents: dict[str, str] = {}

    def __repr__(self) -> str:
        return f"Block(name={self.name!r}, length={self._cursor.length})"

    @property
    def text(self) -> str:
        """Accumulated output text."""
        return "".join(self._chunks)

    @property
    def length(self) -> int:
        """Length of the accumulated text."""
        return self._cursor.length

    @property
    def end_position(self) -> Position:
        """Position at which the next appended character will land."""
        return self._cursor.position

    @property
    def mappings(self) -> tuple[MappingEntry, ...]:
        """Recorded mappings in append order."""
        return tuple(self._mappings)

    @property
    def referenced_sources(self) -> tuple[str, ...]:
        """Original sources referenced by this block's mappings, first reference first."""
        return tuple(self._sources)

    @property
    def source_contents(self) -> dict[str, str]:
        """Embedded original contents keyed by source."""
        return dict(self._source_contents)

    def append(self, text: str) -> Position:
        """Append ``text`` and return the position of its first character."""
        if text:
            self._chunks.append(text)
        return self._cursor.feed(text)

    def position_within(self, start: Position, text: str, offset: int) -> Position:
        """Return the position of ``text[offset]`` when ``text`` was appended at ``start``."""
        return advance(start, text[:offset])

    def add_mapping(self, entry: MappingEntry) -> None:
        """Record a mapping and mark its source as referenced."""
        self._mappings.append(entry)
        self._sources.setdefault(entry.source, None)

    def embed_sources(self, original_map: SourceMapConsumer) -> None:
        """Copy the original content of every referenced source from ``original_map``."""
        for source in self._sources:
            content = original_map.source_content_for(source)
            if content is not None:
                self._source_contents[source] = content
            else:
                logger.debug("No embedded content for source %r in %s", source, self.name)
