# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __init__.py
#   file_relpath : src/cssblocks/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic primitives and helpers.

Design:
    - Diagnostics are represented by immutable `Diagnostic` instances.
    - During splitting, diagnostics are accumulated in a mutable `DiagnosticLog`,
      one per document, so documents in a batch never share state.
"""

from __future__ import annotations

from cssblocks.diagnostic.model import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    compute_diagnostic_stats,
    diagnostics_counts_to_dict,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DiagnosticStats",
    "compute_diagnostic_stats",
    "diagnostics_counts_to_dict",
]
