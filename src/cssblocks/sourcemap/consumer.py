# topmark:header:start
#
#   project      : CSSBlocks
#   file         : consumer.py
#   file_relpath : src/cssblocks/sourcemap/consumer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read-side of the source map codec.

`SourceMapConsumer` decodes a Source Map v3 document and answers the two
lookups the splitter and its tests need:

- `SourceMapConsumer.original_position_for`: generated -> original.
- `SourceMapConsumer.generated_position_for`: original -> generated.

Both default to a greatest-lower-bound search confined to one line, which
is how the Mozilla ``source-map`` consumer behaves.
"""

from __future__ import annotations

import json
from bisect import bisect_left, bisect_right
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from cssblocks.config.logging import get_logger
from cssblocks.errors import SourceMapDecodeError
from cssblocks.sourcemap import vlq
from cssblocks.sourcemap.model import Bias, GeneratedPosition, OriginalPosition, SourceMapping

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cssblocks.config.logging import CssBlocksLogger

logger: CssBlocksLogger = get_logger(__name__)

SUPPORTED_VERSION = 3


def _join_source_root(root: str | None, source: str) -> str:
    if not root or "://" in source or source.startswith("/"):
        return source
    return f"{root.rstrip('/')}/{source}"


def decode_mappings(
    mappings: str,
    sources: Sequence[str],
    names: Sequence[str] = (),
) -> list[SourceMapping]:
    """Decode a ``mappings`` string into `SourceMapping` records.

    Args:
        mappings (str): The VLQ-encoded ``mappings`` field.
        sources (Sequence[str]): Source names, indexed by the source field.
        names (Sequence[str]): Symbol names, indexed by the name field.

    Returns:
        list[SourceMapping]: Segments in generated order.

    Raises:
        SourceMapDecodeError: If a segment is malformed or references an
            unknown source or name.
    """
    result: list[SourceMapping] = []
    source_idx = original_line = original_column = name_idx = 0

    for line_no, line in enumerate(mappings.split(";"), start=1):
        generated_column = 0
        for segment in line.split(","):
            if not segment:
                continue
            values = vlq.decode(segment)
            if len(values) not in (1, 4, 5):
                raise SourceMapDecodeError(
                    f"Segment {segment!r} on line {line_no} has {len(values)} field(s)"
                )
            generated_column += values[0]
            if len(values) == 1:
                result.append(SourceMapping(line_no, generated_column))
                continue

            source_idx += values[1]
            original_line += values[2]
            original_column += values[3]
            if not 0 <= source_idx < len(sources):
                raise SourceMapDecodeError(f"Source index {source_idx} out of range")
            name: str | None = None
            if len(values) == 5:
                name_idx += values[4]
                if not 0 <= name_idx < len(names):
                    raise SourceMapDecodeError(f"Name index {name_idx} out of range")
                name = names[name_idx]
            result.append(
                SourceMapping(
                    generated_line=line_no,
                    generated_column=generated_column,
                    source=sources[source_idx],
                    original_line=original_line + 1,
                    original_column=original_column,
                    name=name,
                )
            )
    return result


def _search(keys: list[int], target: int, bias: Bias) -> int | None:
    if bias is Bias.GREATEST_LOWER_BOUND:
        idx = bisect_right(keys, target) - 1
        return idx if idx >= 0 else None
    idx = bisect_left(keys, target)
    return idx if idx < len(keys) else None


class SourceMapConsumer:
    """Decoded, immutable view of a source map.

    Attributes:
        file (str | None): The ``file`` field.
        sources (tuple[str, ...]): Source names with ``sourceRoot`` applied.
        names (tuple[str, ...]): Symbol names.
    """

    def __init__(
        self,
        *,
        sources: Sequence[str],
        mappings: Sequence[SourceMapping],
        sources_content: Sequence[str | None] = (),
        names: Sequence[str] = (),
        file: str | None = None,
    ) -> None:
        self.file = file
        self.sources: tuple[str, ...] = tuple(sources)
        self.names: tuple[str, ...] = tuple(names)
        self._contents: dict[str, str | None] = {
            source: (sources_content[i] if i < len(sources_content) else None)
            for i, source in enumerate(self.sources)
        }
        self._mappings: tuple[SourceMapping, ...] = tuple(mappings)

        by_generated: defaultdict[int, list[SourceMapping]] = defaultdict(list)
        by_original: defaultdict[tuple[str, int], list[SourceMapping]] = defaultdict(list)
        for m in self._mappings:
            by_generated[m.generated_line].append(m)
            if m.source is not None and m.original_line is not None:
                by_original[(m.source, m.original_line)].append(m)
        for bucket in by_generated.values():
            bucket.sort(key=lambda m: m.generated_column)
        for bucket in by_original.values():
            bucket.sort(
                key=lambda m: (m.original_column or 0, m.generated_line, m.generated_column)
            )
        self._by_generated = dict(by_generated)
        self._by_original = dict(by_original)
        # Bisect keys per bucket, built once
        self._generated_columns: dict[int, list[int]] = {
            line: [m.generated_column for m in bucket]
            for line, bucket in self._by_generated.items()
        }
        self._original_columns: dict[tuple[str, int], list[int]] = {
            key: [m.original_column or 0 for m in bucket]
            for key, bucket in self._by_original.items()
        }

    @classmethod
    def from_dict(cls, data: Any) -> SourceMapConsumer:
        """Build a consumer from an already-parsed JSON object.

        Raises:
            SourceMapDecodeError: If the object is not a usable v3 source map.
        """
        if not isinstance(data, dict):
            raise SourceMapDecodeError("Source map must be a JSON object")
        if "sections" in data:
            raise SourceMapDecodeError("Indexed source maps (with 'sections') are not supported")
        if data.get("version") != SUPPORTED_VERSION:
            raise SourceMapDecodeError(f"Unsupported source map version: {data.get('version')!r}")

        raw_sources = data.get("sources") or []
        mappings = data.get("mappings", "")
        if not isinstance(raw_sources, list) or not isinstance(mappings, str):
            raise SourceMapDecodeError("Source map 'sources' or 'mappings' has the wrong type")
        root = data.get("sourceRoot")
        sources = [_join_source_root(root, str(s)) for s in raw_sources]
        names = [str(n) for n in data.get("names") or []]
        contents = data.get("sourcesContent") or []

        return cls(
            sources=sources,
            mappings=decode_mappings(mappings, sources, names),
            sources_content=[c if isinstance(c, str) else None for c in contents],
            names=names,
            file=data.get("file"),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> SourceMapConsumer:
        """Parse and decode a JSON source map document.

        Raises:
            SourceMapDecodeError: If the text is not valid JSON or not a usable map.
        """
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise SourceMapDecodeError(f"Source map is not valid JSON: {exc}") from exc
        consumer = cls.from_dict(data)
        logger.debug(
            "Decoded source map: %d source(s), %d mapping(s)",
            len(consumer.sources),
            len(consumer._mappings),
        )
        return consumer

    @property
    def mappings(self) -> tuple[SourceMapping, ...]:
        """All decoded segments in generated order."""
        return self._mappings

    @property
    def has_mappings(self) -> bool:
        """Return True if at least one segment carries an original position."""
        return bool(self._by_original)

    def source_content_for(self, source: str) -> str | None:
        """Return the embedded content of ``source``, or None when absent."""
        return self._contents.get(source)

    def original_position_for(
        self,
        line: int,
        column: int,
        *,
        bias: Bias = Bias.GREATEST_LOWER_BOUND,
    ) -> OriginalPosition | None:
        """Return the original position of a generated (line, column).

        Only segments on the same generated line are considered.
        """
        bucket = self._by_generated.get(line)
        if not bucket:
            return None
        idx = _search(self._generated_columns[line], column, bias)
        if idx is None:
            return None
        m = bucket[idx]
        if m.source is None or m.original_line is None or m.original_column is None:
            return None
        return OriginalPosition(m.source, m.original_line, m.original_column, m.name)

    def generated_position_for(
        self,
        source: str,
        line: int,
        column: int,
        *,
        bias: Bias = Bias.GREATEST_LOWER_BOUND,
    ) -> GeneratedPosition | None:
        """Return the generated position of an original (source, line, column).

        Only segments of the same source and original line are considered.
        """
        bucket = self._by_original.get((source, line))
        if not bucket:
            return None
        idx = _search(self._original_columns[(source, line)], column, bias)
        if idx is None:
            return None
        m = bucket[idx]
        return GeneratedPosition(m.generated_line, m.generated_column)
