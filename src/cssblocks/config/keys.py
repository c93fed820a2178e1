# topmark:header:start
#
#   project      : CSSBlocks
#   file         : keys.py
#   file_relpath : src/cssblocks/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for CSSBlocks configuration.

Keys defined here are the external configuration API as it appears in
``cssblocks.toml`` and in ``[tool.cssblocks]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by CSSBlocks configuration."""

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [split]
    SECTION_SPLIT: Final[str] = "split"

    KEY_SOURCE_MAPS: Final[str] = "source_maps"
    KEY_REOPEN: Final[str] = "reopen"
    KEY_NESTED_AT_RULES: Final[str] = "nested_at_rules"
    KEY_JOBS: Final[str] = "jobs"

    # [output]
    SECTION_OUTPUT: Final[str] = "output"

    KEY_FILENAME: Final[str] = "filename"
    KEY_HASH_FUNCTION: Final[str] = "hash_function"
    KEY_HASH_DIGEST: Final[str] = "hash_digest"
    KEY_HASH_DIGEST_LENGTH: Final[str] = "hash_digest_length"
