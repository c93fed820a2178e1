# topmark:header:start
#
#   project      : CSSBlocks
#   file         : model.py
#   file_relpath : src/cssblocks/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and helpers for CSSBlocks.

Structural problems found while splitting a stylesheet (mismatched or
unclosed blocks, unusable source maps, parse failures) are collected rather
than raised, so a single pass can report all of them.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * DiagnosticCode: stable identifiers for each kind of problem.
    * Diagnostic: immutable structured diagnostic payload.
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable per-document collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from cssblocks.errors import CssBlocksError


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during splitting.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


class DiagnosticCode(str, Enum):
    """Stable identifiers for the problems the splitter reports."""

    PARSE_ERROR = "parse-error"
    BLOCK_MISMATCH = "block-mismatch"
    UNCLOSED_BLOCK = "unclosed-block"
    INVALID_SOURCE_MAP = "invalid-source-map"
    GENERIC = "generic"


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level, code and message.

    Attributes:
        level (DiagnosticLevel): Severity.
        code (DiagnosticCode): What kind of problem this is.
        message (str): Human-readable description.
        line (int | None): 1-based line in the input document, when known.
    """

    level: DiagnosticLevel
    code: DiagnosticCode
    message: str
    line: int | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation of this diagnostic."""
        return {
            "level": self.level.value,
            "code": self.code.value,
            "message": self.message,
            "line": self.line,
        }


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


@dataclass
class DiagnosticLog:
    """Mutable, per-document collection of diagnostics."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)

    def add_info(self, message: str, *, code: DiagnosticCode = DiagnosticCode.GENERIC) -> None:
        """Add an ``info`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
            code: The diagnostic code.
        """
        self._add(Diagnostic(DiagnosticLevel.INFO, code, message))

    def add_warning(self, message: str, *, code: DiagnosticCode = DiagnosticCode.GENERIC) -> None:
        """Add a ``warning`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
            code: The diagnostic code.
        """
        self._add(Diagnostic(DiagnosticLevel.WARNING, code, message))

    def add_error(
        self,
        message: str,
        *,
        code: DiagnosticCode = DiagnosticCode.GENERIC,
        line: int | None = None,
    ) -> None:
        """Add an ``error`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
            code: The diagnostic code.
            line: Optional 1-based line number in the input document.
        """
        self._add(Diagnostic(DiagnosticLevel.ERROR, code, message, line))

    def add_exception(self, error: CssBlocksError, *, level: DiagnosticLevel) -> None:
        """Record a CSSBlocks exception as a diagnostic instead of raising it.

        Args:
            error: The exception; its ``code`` and ``line`` attributes are carried over.
            level: Severity to record it at.
        """
        self._add(Diagnostic(level, error.code, str(error), error.line))

    def by_code(self, code: DiagnosticCode) -> list[Diagnostic]:
        """Return all diagnostics carrying ``code``, in insertion order."""
        return [d for d in self.items if d.code is code]

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_warning(self) -> bool:
        """Return True if the DiagnosticLog contains warning diagnostics."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if the DiagnosticLog contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        return diagnostics_counts_to_dict(self.items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: the diagnostics to count.

    Returns:
        Per-level counts.
    """
    items = list(diagnostics)
    n_info: int = sum(1 for d in items if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in items if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in items if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)


def diagnostics_counts_to_dict(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    """Return a JSON-friendly mapping of counts by severity for any iterable."""
    stats: DiagnosticStats = compute_diagnostic_stats(diagnostics)
    return {
        "info": stats.n_info,
        "warning": stats.n_warning,
        "error": stats.n_error,
    }
