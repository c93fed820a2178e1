# topmark:header:start
#
#   project      : CSSBlocks
#   file         : generator.py
#   file_relpath : src/cssblocks/sourcemap/generator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Write-side of the source map codec."""

from __future__ import annotations

import json
from typing import Any

from cssblocks.sourcemap import vlq
from cssblocks.sourcemap.model import SourceMapping


def _sort_key(m: SourceMapping) -> tuple[int, int, str, int, int]:
    return (
        m.generated_line,
        m.generated_column,
        m.source or "",
        m.original_line or 0,
        m.original_column or 0,
    )


class SourceMapGenerator:
    """Accumulates mappings and source contents, then encodes a v3 map.

    Sources are listed in the order they are first referenced by a mapping.
    Mappings are encoded sorted by generated position; exact duplicates are
    written once.
    """

    def __init__(self, *, file: str | None = None, source_root: str | None = None) -> None:
        self.file = file
        self.source_root = source_root
        self._mappings: list[SourceMapping] = []
        self._sources: dict[str, int] = {}
        self._names: dict[str, int] = {}
        self._contents: dict[str, str | None] = {}

    @property
    def sources(self) -> tuple[str, ...]:
        """Referenced sources in first-reference order."""
        return tuple(self._sources)

    @property
    def mappings(self) -> tuple[SourceMapping, ...]:
        """Recorded mappings in insertion order."""
        return tuple(self._mappings)

    def add_mapping(
        self,
        *,
        generated_line: int,
        generated_column: int,
        source: str,
        original_line: int,
        original_column: int,
        name: str | None = None,
    ) -> None:
        """Record one generated -> original correspondence.

        Raises:
            ValueError: If a line is below 1 or a column is negative.
        """
        if generated_line < 1 or original_line < 1:
            raise ValueError("Source map lines are 1-based")
        if generated_column < 0 or original_column < 0:
            raise ValueError("Source map columns must not be negative")
        self._sources.setdefault(source, len(self._sources))
        if name is not None:
            self._names.setdefault(name, len(self._names))
        self._mappings.append(
            SourceMapping(
                generated_line=generated_line,
                generated_column=generated_column,
                source=source,
                original_line=original_line,
                original_column=original_column,
                name=name,
            )
        )

    def set_source_content(self, source: str, content: str | None) -> None:
        """Embed (or with None, drop) the original content of ``source``."""
        if content is None:
            self._contents.pop(source, None)
        else:
            self._contents[source] = content

    def encode_mappings(self) -> str:
        """Return the VLQ ``mappings`` string."""
        out: list[str] = []
        prev_line = 1
        prev_column = prev_source = prev_original_line = prev_original_column = prev_name = 0
        previous: SourceMapping | None = None

        for m in sorted(self._mappings, key=_sort_key):
            if m == previous:
                continue
            if m.generated_line != prev_line:
                out.append(";" * (m.generated_line - prev_line))
                prev_line = m.generated_line
                prev_column = 0
            elif previous is not None:
                out.append(",")
            previous = m

            values = [m.generated_column - prev_column]
            prev_column = m.generated_column
            if m.source is not None:
                source_idx = self._sources[m.source]
                # original lines are stored 0-based on the wire
                original_line = (m.original_line or 1) - 1
                original_column = m.original_column or 0
                values += [
                    source_idx - prev_source,
                    original_line - prev_original_line,
                    original_column - prev_original_column,
                ]
                prev_source = source_idx
                prev_original_line = original_line
                prev_original_column = original_column
                if m.name is not None:
                    name_idx = self._names[m.name]
                    values.append(name_idx - prev_name)
                    prev_name = name_idx
            out.append(vlq.encode_values(values))
        return "".join(out)

    def to_dict(self) -> dict[str, Any]:
        """Return the map as a JSON-ready dict."""
        data: dict[str, Any] = {"version": 3}
        if self.file is not None:
            data["file"] = self.file
        if self.source_root is not None:
            data["sourceRoot"] = self.source_root
        data["sources"] = list(self._sources)
        if self._contents:
            data["sourcesContent"] = [self._contents.get(s) for s in self._sources]
        data["names"] = list(self._names)
        data["mappings"] = self.encode_mappings()
        return data

    def to_json(self) -> str:
        """Return the map as compact JSON text."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
