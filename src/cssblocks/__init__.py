# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __init__.py
#   file_relpath : src/cssblocks/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CSSBlocks package.

CSSBlocks splits a generated stylesheet, annotated with ``/*! start:NAME.css */``
and ``/*! end:NAME.css */`` markers, into several output stylesheets and
re-derives a source map for each of them from the input's original map.
"""

from __future__ import annotations
