# topmark:header:start
#
#   project      : CSSBlocks
#   file         : delimiters.py
#   file_relpath : src/cssblocks/split/delimiters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classification of comment rules.

A comment body is one of:

- ``! start:NAME.css`` / ``! end:NAME.css``: a block delimiter (one
  optional whitespace character after ``!`` and at the very end);
- ``# sourceMappingURL=NAME.css.map``: a stale map pragma, dropped;
- anything else: ordinary content.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cssblocks.constants import DELIMITER_PATTERN, SOURCEMAP_PRAGMA_PATTERN


class CommentKind(Enum):
    """What a comment rule means to the splitter."""

    START = "start"
    END = "end"
    SOURCEMAP_PRAGMA = "sourcemap-pragma"
    CONTENT = "content"


@dataclass(frozen=True, slots=True)
class CommentClass:
    """Result of `classify_comment`.

    Attributes:
        kind (CommentKind): The comment's role.
        name (str | None): Block name for START and END, else None.
    """

    kind: CommentKind
    name: str | None = None

    @property
    def is_delimiter(self) -> bool:
        """Return True for START and END markers."""
        return self.kind in (CommentKind.START, CommentKind.END)


CONTENT = CommentClass(CommentKind.CONTENT)


def classify_comment(body: str) -> CommentClass:
    """Classify a comment by its body (the text between ``/*`` and ``*/``)."""
    match = DELIMITER_PATTERN.match(body)
    if match is not None:
        return CommentClass(CommentKind(match.group(1)), match.group(2))
    if SOURCEMAP_PRAGMA_PATTERN.match(body):
        return CommentClass(CommentKind.SOURCEMAP_PRAGMA)
    return CONTENT
