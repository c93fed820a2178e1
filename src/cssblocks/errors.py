# topmark:header:start
#
#   project      : CSSBlocks
#   file         : errors.py
#   file_relpath : src/cssblocks/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised while splitting stylesheets.

Only `ParseError` is fatal for a document. The structural errors are raised
by the block stack and caught by the splitter, which records them on the
document's `DiagnosticLog` and keeps walking.
"""

from __future__ import annotations

from cssblocks.diagnostic.model import DiagnosticCode


class CssBlocksError(Exception):
    """Base class for all CSSBlocks errors."""

    code: DiagnosticCode = DiagnosticCode.GENERIC
    line: int | None = None


class ParseError(CssBlocksError):
    """The stylesheet could not be parsed; splitting of that document is skipped."""

    code = DiagnosticCode.PARSE_ERROR

    def __init__(self, reason: str, line: int | None = None) -> None:
        self.reason = reason
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"Cannot parse stylesheet{where}: {reason}")


class BlockMismatchError(CssBlocksError):
    """An ``end:`` marker does not close the currently open block."""

    code = DiagnosticCode.BLOCK_MISMATCH

    def __init__(self, open_name: str, closing_name: str, line: int | None = None) -> None:
        self.open_name = open_name
        self.closing_name = closing_name
        self.line = line
        super().__init__(f"Closing block mismatch: open={open_name}, closing={closing_name}")


class UnclosedBlockError(CssBlocksError):
    """A ``start:`` marker was never matched by an ``end:`` marker."""

    code = DiagnosticCode.UNCLOSED_BLOCK

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Block was not closed: {name}")


class SourceMapDecodeError(CssBlocksError):
    """A source map document is malformed or uses an unsupported layout."""

    code = DiagnosticCode.INVALID_SOURCE_MAP


class InvalidSourceMapWarning(UserWarning):
    """The supplied source map is unusable; maps are not generated for this run."""

    code = DiagnosticCode.INVALID_SOURCE_MAP
