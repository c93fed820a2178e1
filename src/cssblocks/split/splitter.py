# topmark:header:start
#
#   project      : CSSBlocks
#   file         : splitter.py
#   file_relpath : src/cssblocks/split/splitter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Split one stylesheet into blocks and translate its source map.

The walk is a single forward pass over the top-level rule stream:

1. ``start:``/``end:`` comments drive the block stack and produce no text;
2. stale ``sourceMappingURL`` comments are dropped;
3. every other rule is copied verbatim from the raw input into the active
   block. When mapping is on, the rule's start offset is looked up in the
   original map and recorded against the block position the rule was
   written at. Rules nested in a ``@media`` block get their own entries at
   their own offsets.

Structural errors are recorded on the result's `DiagnosticLog`; the walk
never stops for them. A parse failure stops the document before any block
is produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cssblocks.config import MutableConfig
from cssblocks.config.logging import get_logger
from cssblocks.config.types import ReopenPolicy
from cssblocks.diagnostic import DiagnosticCode, DiagnosticLevel, DiagnosticLog
from cssblocks.errors import (
    BlockMismatchError,
    InvalidSourceMapWarning,
    ParseError,
    SourceMapDecodeError,
)
from cssblocks.naming import ContentHasher
from cssblocks.split.block import MappingEntry
from cssblocks.split.delimiters import CommentKind, classify_comment
from cssblocks.split.document import Document
from cssblocks.split.registry import BlockRegistry, BlockStack
from cssblocks.split.rules import parse_rule_stream
from cssblocks.split.serializer import RenderedBlock, render_blocks

if TYPE_CHECKING:
    from cssblocks.config import Config
    from cssblocks.config.logging import CssBlocksLogger
    from cssblocks.sourcemap import SourceMapConsumer
    from cssblocks.split.block import Block
    from cssblocks.split.position import Position
    from cssblocks.split.rules import Rule

logger: CssBlocksLogger = get_logger(__name__)


@dataclass
class SplitResult:
    """Outcome of splitting one document.

    Attributes:
        document_name (str): Name of the input document.
        blocks (list[RenderedBlock]): Rendered blocks in registry order; empty
            when the document failed to parse.
        diagnostics (DiagnosticLog): Everything reported while splitting.
        parse_error (ParseError | None): The fatal parse error, if any.
    """

    document_name: str
    blocks: list[RenderedBlock] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    parse_error: ParseError | None = None

    @property
    def ok(self) -> bool:
        """True when the document was split without any error diagnostic."""
        return not self.diagnostics.has_error()

    def block(self, name: str) -> RenderedBlock | None:
        """Return the rendered block named ``name`` (identity before templating)."""
        return next((b for b in self.blocks if b.name == name), None)

    def artifacts(self) -> dict[str, str]:
        """Return output artifacts keyed by output name (texts and maps)."""
        out: dict[str, str] = {}
        for block in self.blocks:
            out.update(block.artifacts())
        return out


class Splitter:
    """Single-use splitter for one document.

    Args:
        document (Document): The stylesheet to split.
        reopen (ReopenPolicy): How re-opened block names are handled.
        nested_at_rules (frozenset[str]): At-rules whose children get their own mappings.
        source_maps (bool): Whether to generate maps when the document has one.
        filename_template (str): Template applied to the names of split-out blocks.
        hasher (ContentHasher | None): Digest used for ``[contenthash]``.
    """

    def __init__(
        self,
        document: Document,
        *,
        reopen: ReopenPolicy = ReopenPolicy.APPEND,
        nested_at_rules: frozenset[str] = frozenset({"media"}),
        source_maps: bool = True,
        filename_template: str | None = None,
        hasher: ContentHasher | None = None,
    ) -> None:
        self.document = document
        self.nested_at_rules = nested_at_rules
        self.source_maps = source_maps
        self.filename_template = filename_template
        self.hasher = hasher
        self.diagnostics = DiagnosticLog()
        self.registry = BlockRegistry(document.name, reopen=reopen)
        self.stack = BlockStack(self.registry)
        self._original_map: SourceMapConsumer | None = None

    @classmethod
    def from_config(cls, document: Document, config: Config) -> Splitter:
        """Build a splitter using the settings of a frozen `Config`."""
        return cls(
            document,
            reopen=config.reopen,
            nested_at_rules=config.nested_at_rules,
            source_maps=config.source_maps,
            filename_template=config.filename,
            hasher=ContentHasher(
                config.hash_function, config.hash_digest, config.hash_digest_length
            ),
        )

    def run(self) -> SplitResult:
        """Walk the document once and render its blocks."""
        result = SplitResult(document_name=self.document.name, diagnostics=self.diagnostics)

        stream = parse_rule_stream(self.document.text, nested_at_rules=self.nested_at_rules)
        if stream.diagnostics:
            # Only the first parser diagnostic is reported
            first = stream.diagnostics[0]
            error = ParseError(first.reason, first.line)
            logger.error("%s: %s", self.document.name, error)
            self.diagnostics.add_exception(error, level=DiagnosticLevel.ERROR)
            result.parse_error = error
            return result

        self._original_map = self._usable_original_map()

        for rule in stream.rules:
            logger.trace("Rule %s [%d, %d)", rule.kind.value, rule.start, rule.end)
            if rule.is_comment and self._handle_comment(rule):
                continue
            self._append(self.stack.active, rule)

        for error in self.stack.unclosed():
            logger.warning("%s: %s", self.document.name, error)
            self.diagnostics.add_exception(error, level=DiagnosticLevel.ERROR)

        if self._original_map is not None:
            for block in self.registry:
                if block.mappings:
                    block.embed_sources(self._original_map)

        result.blocks = render_blocks(
            self.registry,
            with_maps=self._original_map is not None,
            filename_template=self.filename_template,
            hasher=self.hasher,
        )
        logger.info(
            "%s: split into %d block(s), %d diagnostic(s)",
            self.document.name,
            len(result.blocks),
            len(self.diagnostics),
        )
        return result

    def _usable_original_map(self) -> SourceMapConsumer | None:
        original = self.document.original_map
        if original is None or not self.source_maps:
            return None
        if not original.has_mappings:
            warning = InvalidSourceMapWarning(
                f"Source map for {self.document.name} has no mappings; "
                "no source maps will be generated"
            )
            logger.warning("%s", warning)
            self.diagnostics.add_warning(str(warning), code=DiagnosticCode.INVALID_SOURCE_MAP)
            return None
        return original

    def _handle_comment(self, rule: Rule) -> bool:
        """Apply a delimiter or drop a stale pragma; return False for content comments."""
        kind = classify_comment(rule.comment or "")
        if kind.kind is CommentKind.CONTENT:
            return False
        if kind.kind is CommentKind.SOURCEMAP_PRAGMA:
            logger.debug("Dropping stale source map pragma at offset %d", rule.start)
            return True

        assert kind.name is not None
        if kind.kind is CommentKind.START:
            self.stack.open(kind.name)
            return True

        try:
            self.stack.close(kind.name, line=self.document.position_of(rule.start).line)
        except BlockMismatchError as exc:
            logger.warning("%s: %s", self.document.name, exc)
            self.diagnostics.add_exception(exc, level=DiagnosticLevel.ERROR)
        return True

    def _append(self, block: Block, rule: Rule) -> None:
        text = self.document.slice(rule.start, rule.end)
        # Captured before the append: the block-local position of the rule's first character
        start = block.append(text)
        if self._original_map is None:
            return
        self._map(block, rule, start)
        for child in rule.children:
            self._map_nested(block, rule, text, start, child)

    def _map_nested(
        self, block: Block, parent: Rule, text: str, start: Position, child: Rule
    ) -> None:
        offset = self.document.raw_offset(child.start) - self.document.raw_offset(parent.start)
        self._map(block, child, block.position_within(start, text, offset))
        for grandchild in child.children:
            self._map_nested(block, parent, text, start, grandchild)

    def _map(self, block: Block, rule: Rule, generated: Position) -> None:
        assert self._original_map is not None
        where = self.document.position_of(rule.start)
        original = self._original_map.original_position_for(where.line, where.column)
        if original is None:
            logger.trace("No original position for %d:%d", where.line, where.column)
            return
        block.add_mapping(
            MappingEntry(
                generated_line=generated.line,
                generated_column=generated.column,
                source=original.source,
                original_line=original.line,
                original_column=original.column,
            )
        )


def split_document(
    name: str,
    text: str,
    source_map: str | bytes | SourceMapConsumer | None = None,
    *,
    config: Config | None = None,
) -> SplitResult:
    """Split a stylesheet given as text.

    A map that cannot be decoded is reported as an ``invalid-source-map``
    warning and the document is split without maps.

    Args:
        name (str): Document name (e.g. ``dist/main.css``).
        text (str): Stylesheet text.
        source_map (str | bytes | SourceMapConsumer | None): Original map, as JSON
            or already decoded.
        config (Config | None): Settings; defaults when None.

    Returns:
        SplitResult: Rendered blocks and diagnostics.
    """
    if config is None:
        config = MutableConfig.from_defaults().freeze()

    decode_error: SourceMapDecodeError | None = None
    try:
        document = Document.create(name, text, source_map)
    except SourceMapDecodeError as exc:
        decode_error = exc
        document = Document.create(name, text)

    splitter = Splitter.from_config(document, config)
    if decode_error is not None:
        logger.warning("%s: %s", name, decode_error)
        splitter.diagnostics.add_warning(
            f"Source map for {name} cannot be used: {decode_error}",
            code=DiagnosticCode.INVALID_SOURCE_MAP,
        )
    return splitter.run()
