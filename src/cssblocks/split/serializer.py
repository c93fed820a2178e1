# topmark:header:start
#
#   project      : CSSBlocks
#   file         : serializer.py
#   file_relpath : src/cssblocks/split/serializer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render finished blocks into output text and Source Map v3 documents."""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cssblocks.constants import MAP_SUFFIX
from cssblocks.naming import format_filename
from cssblocks.sourcemap import SourceMapGenerator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cssblocks.naming import ContentHasher
    from cssblocks.split.block import Block, MappingEntry


@dataclass(frozen=True)
class RenderedBlock:
    """A finished output stylesheet.

    Attributes:
        name (str): Block name before templating (``departures.css``).
        output_name (str): Resolved output name, directory included.
        text (str): Output text, with the map pragma when a map exists.
        mappings (tuple[MappingEntry, ...]): Mappings in append order.
        source_map (dict[str, Any] | None): Encoded map, or None when no map is produced.
        is_document (bool): True for the block holding the document's own content.
    """

    name: str
    output_name: str
    text: str
    mappings: tuple[MappingEntry, ...] = ()
    source_map: dict[str, Any] | None = None
    is_document: bool = False

    @property
    def identity(self) -> str:
        """Basename of the output name; the pragma refers to ``<identity>.map``."""
        return posixpath.basename(self.output_name)

    @property
    def map_name(self) -> str:
        """Output name of the map artifact."""
        return self.output_name + MAP_SUFFIX

    @property
    def map_json(self) -> str | None:
        """The map as compact JSON text, if any."""
        if self.source_map is None:
            return None
        return json.dumps(self.source_map, separators=(",", ":"), ensure_ascii=False)

    def artifacts(self) -> dict[str, str]:
        """Return ``{output_name: text}`` plus ``{map_name: map_json}`` when mapped."""
        out = {self.output_name: self.text}
        map_json = self.map_json
        if map_json is not None:
            out[self.map_name] = map_json
        return out


def map_pragma(identity: str) -> str:
    """Return the trailing comment pointing at ``<identity>.map``."""
    return f"/*# sourceMappingURL={identity}{MAP_SUFFIX}*/\n"


def resolve_output_name(
    block: Block,
    filename_template: str | None,
    hasher: ContentHasher | None,
) -> str:
    """Return the output name of ``block`` after applying the filename template.

    The document's own block keeps its name. The ``[contenthash]`` digest
    covers the block's accumulated text, without the trailing pragma.
    """
    if block.is_document or not filename_template:
        return block.output_name
    directory = posixpath.dirname(block.output_name)
    filename = format_filename(filename_template, block.name, block.text, hasher)
    return posixpath.join(directory, filename) if directory else filename


def render_block(
    block: Block,
    *,
    with_map: bool,
    filename_template: str | None = None,
    hasher: ContentHasher | None = None,
) -> RenderedBlock:
    """Render one block's text and, when ``with_map`` is set, its map."""
    output_name = resolve_output_name(block, filename_template, hasher)
    identity = posixpath.basename(output_name)

    text = block.text + "\n"
    source_map: dict[str, Any] | None = None
    if with_map:
        text += map_pragma(identity)
        generator = SourceMapGenerator(file=output_name)
        for entry in block.mappings:
            generator.add_mapping(
                generated_line=entry.generated_line,
                generated_column=entry.generated_column,
                source=entry.source,
                original_line=entry.original_line,
                original_column=entry.original_column,
            )
        for source, content in block.source_contents.items():
            generator.set_source_content(source, content)
        source_map = generator.to_dict()

    return RenderedBlock(
        name=block.name,
        output_name=output_name,
        text=text,
        mappings=block.mappings,
        source_map=source_map,
        is_document=block.is_document,
    )


def render_blocks(
    blocks: Iterable[Block],
    *,
    with_maps: bool,
    filename_template: str | None = None,
    hasher: ContentHasher | None = None,
) -> list[RenderedBlock]:
    """Render ``blocks`` in the order given (registry order)."""
    return [
        render_block(b, with_map=with_maps, filename_template=filename_template, hasher=hasher)
        for b in blocks
    ]
