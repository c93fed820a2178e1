# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __init__.py
#   file_relpath : src/cssblocks/split/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Block splitting of a single stylesheet.

`split_document` is the entry point; `Splitter` does the single forward
walk and `RenderedBlock` is what comes out of it.
"""

from __future__ import annotations

from cssblocks.split.document import Document
from cssblocks.split.serializer import RenderedBlock
from cssblocks.split.splitter import SplitResult, Splitter, split_document

__all__ = [
    "Document",
    "RenderedBlock",
    "SplitResult",
    "Splitter",
    "split_document",
]
