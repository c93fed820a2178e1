# topmark:header:start
#
#   project      : CSSBlocks
#   file         : rules.py
#   file_relpath : src/cssblocks/split/rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Top-level rule stream of a stylesheet, built on tinycss2.

tinycss2 reports where each node *starts* (1-based line and column) but not
where it ends. Top-level whitespace is kept as separate nodes, so a rule
ends exactly where the next node begins.

tinycss2 normalizes newlines (and NUL) before computing positions. Callers
must hand in text that went through `normalize_text` so that positions map
onto offsets of that same text; `Document` maps those offsets back to the
raw input when copying rule text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import tinycss2

from cssblocks.config.logging import get_logger
from cssblocks.constants import DEFAULT_NESTED_AT_RULES
from cssblocks.split.position import PositionIndex, normalize_newlines

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from cssblocks.config.logging import CssBlocksLogger

logger: CssBlocksLogger = get_logger(__name__)


class RuleKind(Enum):
    """Discriminant of a `Rule`.

    Only ``MEDIA`` rules carry children.
    """

    STYLE = "style"
    AT_RULE = "at-rule"
    MEDIA = "media"
    COMMENT = "comment"


@dataclass(frozen=True, slots=True)
class Rule:
    """One syntactic unit of a stylesheet with its ``[start, end)`` character span.

    Attributes:
        kind (RuleKind): What the rule is.
        start (int): Offset of the first character.
        end (int): Offset one past the last character.
        comment (str | None): Comment body (between ``/*`` and ``*/``) for COMMENT rules.
        at_keyword (str | None): Lowercased keyword (without ``@``) for at-rules.
        children (tuple[Rule, ...]): Nested rules of a MEDIA rule.
    """

    kind: RuleKind
    start: int
    end: int
    comment: str | None = None
    at_keyword: str | None = None
    children: tuple[Rule, ...] = ()

    @property
    def is_comment(self) -> bool:
        """Return True for COMMENT rules."""
        return self.kind is RuleKind.COMMENT


@dataclass(frozen=True, slots=True)
class ParseDiagnostic:
    """A problem reported by the CSS parser."""

    reason: str
    line: int


@dataclass(frozen=True, slots=True)
class RuleStream:
    """Ordered top-level rules plus the parser's diagnostics."""

    rules: tuple[Rule, ...]
    diagnostics: tuple[ParseDiagnostic, ...] = ()


def normalize_text(text: str) -> str:
    """Apply the same preprocessing tinycss2 applies before tokenizing."""
    return normalize_newlines(text.replace("\0", "\ufffd"))


class _RuleBuilder:
    def __init__(self, text: str, nested_at_rules: frozenset[str]) -> None:
        self.text = text
        self.index = PositionIndex(text)
        self.nested_at_rules = nested_at_rules
        self.diagnostics: list[ParseDiagnostic] = []

    def offset(self, node: Any) -> int:
        # tinycss2 columns start at 1
        return self.index.offset_of(node.source_line, node.source_column - 1)

    def build(self, nodes: Sequence[Any], limit: int) -> tuple[Rule, ...]:
        """Turn parsed nodes into rules; the last node ends at ``limit``."""
        starts = [self.offset(node) for node in nodes]
        rules: list[Rule] = []
        for i, node in enumerate(nodes):
            start = starts[i]
            end = starts[i + 1] if i + 1 < len(nodes) else limit
            rule = self.to_rule(node, start, end)
            if rule is not None:
                rules.append(rule)
        return tuple(rules)

    def to_rule(self, node: Any, start: int, end: int) -> Rule | None:
        if node.type == "whitespace":
            return None
        if node.type == "error":
            self.diagnostics.append(ParseDiagnostic(reason=node.message, line=node.source_line))
            return None
        if node.type == "comment":
            return Rule(RuleKind.COMMENT, start, end, comment=node.value)
        if node.type == "qualified-rule":
            return Rule(RuleKind.STYLE, start, end)
        if node.type == "at-rule":
            keyword: str = node.lower_at_keyword
            if keyword in self.nested_at_rules:
                return Rule(
                    RuleKind.MEDIA,
                    start,
                    end,
                    at_keyword=keyword,
                    children=self.children_of(node, start, end),
                )
            return Rule(RuleKind.AT_RULE, start, end, at_keyword=keyword)
        # Top-level tokens tinycss2 does not wrap in a rule: keep them as content
        logger.debug("Unexpected top-level node %r at offset %d", node.type, start)
        return Rule(RuleKind.STYLE, start, end)

    def children_of(self, node: Any, start: int, end: int) -> tuple[Rule, ...]:
        if not node.content:
            return ()
        children = tinycss2.parse_rule_list(
            node.content, skip_comments=False, skip_whitespace=False
        )
        closing = self.text.rfind("}", start, end)
        return self.build(children, closing if closing != -1 else end)


def parse_rule_stream(
    text: str,
    *,
    nested_at_rules: Iterable[str] = DEFAULT_NESTED_AT_RULES,
) -> RuleStream:
    """Parse ``text`` into a `RuleStream`.

    Args:
        text (str): Stylesheet text, already passed through `normalize_text`.
        nested_at_rules (Iterable[str]): Lowercased at-rule keywords whose
            nested rules are exposed as children.

    Returns:
        RuleStream: Top-level rules in document order plus parse diagnostics.
    """
    builder = _RuleBuilder(text, frozenset(k.lower() for k in nested_at_rules))
    nodes = tinycss2.parse_stylesheet(text, skip_comments=False, skip_whitespace=False)
    rules = builder.build(nodes, len(text))
    logger.debug(
        "Parsed %d top-level rule(s), %d parse diagnostic(s)", len(rules), len(builder.diagnostics)
    )
    return RuleStream(rules=rules, diagnostics=tuple(builder.diagnostics))
