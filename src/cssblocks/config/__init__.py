# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __init__.py
#   file_relpath : src/cssblocks/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for CSSBlocks.

Settings are read from ``cssblocks.toml`` or ``[tool.cssblocks]`` in
``pyproject.toml`` and layered by `MutableConfig`, which freezes into the
immutable `Config` the splitter consumes.
"""

from __future__ import annotations

from cssblocks.config.model import Config, MutableConfig
from cssblocks.config.types import ArgsLike, HashDigest, ReopenPolicy

__all__ = [
    "ArgsLike",
    "Config",
    "HashDigest",
    "MutableConfig",
    "ReopenPolicy",
]
