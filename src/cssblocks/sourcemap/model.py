# topmark:header:start
#
#   project      : CSSBlocks
#   file         : model.py
#   file_relpath : src/cssblocks/sourcemap/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data model shared by the source map consumer and generator.

Lines are 1-based and columns 0-based, as in the Mozilla ``source-map``
object model. The wire format stores original lines 0-based; the codec
converts at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Bias(Enum):
    """How to resolve a lookup that has no exact match."""

    GREATEST_LOWER_BOUND = "glb"
    LEAST_UPPER_BOUND = "lub"


@dataclass(frozen=True, slots=True)
class SourceMapping:
    """One segment of a decoded ``mappings`` string.

    ``source`` is None for segments that only carry a generated column.
    """

    generated_line: int
    generated_column: int
    source: str | None = None
    original_line: int | None = None
    original_column: int | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class OriginalPosition:
    """Where a generated position came from."""

    source: str
    line: int
    column: int
    name: str | None = None


@dataclass(frozen=True, slots=True)
class GeneratedPosition:
    """Where an original position ended up in the generated file."""

    line: int
    column: int
