# topmark:header:start
#
#   project      : CSSBlocks
#   file         : registry.py
#   file_relpath : src/cssblocks/split/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Block registry and nesting stack.

`BlockRegistry` owns every `Block` of one splitting run, in first-reference
order. `BlockStack` only holds references to registered blocks and
expresses which one is active. Both are built fresh per document.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from cssblocks.config.logging import get_logger
from cssblocks.config.types import ReopenPolicy
from cssblocks.constants import CSS_SUFFIX
from cssblocks.errors import BlockMismatchError, UnclosedBlockError
from cssblocks.split.block import Block

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cssblocks.config.logging import CssBlocksLogger

logger: CssBlocksLogger = get_logger(__name__)


def occurrence_name(name: str, occurrence: int) -> str:
    """Return the block name for the ``occurrence``-th opening of ``name`` (1-based)."""
    if occurrence <= 1:
        return name
    stem = name[: -len(CSS_SUFFIX)] if name.endswith(CSS_SUFFIX) else name
    return f"{stem}-{occurrence}{CSS_SUFFIX}"


class BlockRegistry:
    """Owner of all blocks created while splitting one document."""

    def __init__(self, document_name: str, *, reopen: ReopenPolicy = ReopenPolicy.APPEND) -> None:
        self.reopen = reopen
        self._directory = posixpath.dirname(document_name)
        self._blocks: dict[str, Block] = {}
        self._openings: dict[str, int] = {}

        identity = posixpath.basename(document_name) or document_name
        self.document_block = Block(identity, output_name=document_name, is_document=True)
        self._blocks[identity] = self.document_block

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks.values())

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, name: object) -> bool:
        return name in self._blocks

    def get(self, name: str) -> Block | None:
        """Return the block registered as ``name``, if any."""
        return self._blocks.get(name)

    def get_or_create(self, name: str, *, marker_name: str | None = None) -> Block:
        """Return the block registered as ``name``, creating it on first reference."""
        block = self._blocks.get(name)
        if block is None:
            output_name = posixpath.join(self._directory, name) if self._directory else name
            block = Block(name, output_name=output_name, marker_name=marker_name)
            self._blocks[name] = block
            logger.debug("Registered block %s (%s)", name, output_name)
        return block

    def resolve_opening(self, name: str) -> Block:
        """Return the block a ``start:`` marker for ``name`` opens, honoring the reopen policy."""
        count = self._openings.get(name, 0) + 1
        self._openings[name] = count
        if self.reopen is ReopenPolicy.APPEND:
            return self.get_or_create(name)
        candidate = occurrence_name(name, count)
        while candidate in self._blocks and self._blocks[candidate].marker_name != name:
            count += 1
            candidate = occurrence_name(name, count)
        self._openings[name] = count
        return self.get_or_create(candidate, marker_name=name)


class BlockStack:
    """Currently open blocks; the document block sits at the bottom and is never popped."""

    def __init__(self, registry: BlockRegistry) -> None:
        self.registry = registry
        self._stack: list[Block] = [registry.document_block]

    @property
    def active(self) -> Block:
        """The block receiving content."""
        return self._stack[-1]

    @property
    def depth(self) -> int:
        """Number of entries on the stack, document block included."""
        return len(self._stack)

    def open(self, name: str) -> Block:
        """Open (or reopen) ``name`` and make it the active block."""
        block = self.registry.resolve_opening(name)
        self._stack.append(block)
        logger.debug("Opened block %s (depth %d)", block.name, self.depth)
        return block

    def close(self, name: str, *, line: int | None = None) -> Block:
        """Close the active block, which must be the one ``name`` refers to.

        The document block can never be closed by a marker.

        Raises:
            BlockMismatchError: If ``name`` does not match the active block. The
                stack is left untouched.
        """
        active = self.active
        if self.depth == 1 or active.marker_name != name:
            raise BlockMismatchError(active.marker_name, name, line)
        self._stack.pop()
        logger.debug("Closed block %s, active is now %s", active.name, self.active.name)
        return active

    def unclosed(self) -> list[UnclosedBlockError]:
        """Return one error per block still open, innermost first."""
        return [UnclosedBlockError(block.marker_name) for block in reversed(self._stack[1:])]
