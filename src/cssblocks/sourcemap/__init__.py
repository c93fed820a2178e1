# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __init__.py
#   file_relpath : src/cssblocks/sourcemap/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source Map v3 codec.

`SourceMapConsumer` reads the map that came with an input stylesheet;
`SourceMapGenerator` writes one map per output block.
"""

from __future__ import annotations

from cssblocks.sourcemap.consumer import SourceMapConsumer, decode_mappings
from cssblocks.sourcemap.generator import SourceMapGenerator
from cssblocks.sourcemap.model import Bias, GeneratedPosition, OriginalPosition, SourceMapping

__all__ = [
    "Bias",
    "GeneratedPosition",
    "OriginalPosition",
    "SourceMapConsumer",
    "SourceMapGenerator",
    "SourceMapping",
    "decode_mappings",
]
