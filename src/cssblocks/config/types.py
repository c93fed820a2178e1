# topmark:header:start
#
#   project      : CSSBlocks
#   file         : types.py
#   file_relpath : src/cssblocks/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Enumerations and aliases used by the CSSBlocks configuration.

Kept free of package imports so low-level modules can depend on it.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

# Mapping accepted by config overrides (CLI option namespaces and API dicts alike).
ArgsLike = Mapping[str, Any]


class ReopenPolicy(str, Enum):
    """What happens when a block name is opened again after being closed.

    Attributes:
        APPEND: Keep appending to the one block registered under that name.
        SEPARATE: Start a new block, named with an occurrence suffix
            (``a.css``, ``a-2.css``, ``a-3.css``...).
    """

    APPEND = "append"
    SEPARATE = "separate"


class HashDigest(str, Enum):
    """Encoding of the ``[contenthash]`` digest."""

    HEX = "hex"
    BASE64 = "base64"
