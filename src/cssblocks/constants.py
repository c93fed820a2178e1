# topmark:header:start
#
#   project      : CSSBlocks
#   file         : constants.py
#   file_relpath : src/cssblocks/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CSSBlocks Constants."""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    CSSBLOCKS_VERSION: str = get_version("cssblocks")
except PackageNotFoundError:  # running from a source checkout
    CSSBLOCKS_VERSION = "0.0.0"

# Whitespace and word characters as ECMAScript regexes define them: ``\s``
# includes the Unicode space separators, ``\w`` is ASCII only.
_SPACE: Final[str] = r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"
_WORD: Final[str] = r"[A-Za-z0-9_-]"

# Delimiter comments: ``/*! start:name.css */`` and ``/*! end:name.css */``.
# Matched against the whole comment body (text between ``/*`` and ``*/``).
DELIMITER_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"!{_SPACE}?(start|end):({_WORD}+\.css){_SPACE}?\Z"
)

# Stale source map pragma left behind by an earlier build step.
SOURCEMAP_PRAGMA_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"# sourceMappingURL={_WORD}+\.css\.map"
)

CSS_SUFFIX: Final[str] = ".css"
MAP_SUFFIX: Final[str] = ".map"

# Filename template placeholders.
NAME_PLACEHOLDER: Final[str] = "[name]"
CONTENTHASH_PLACEHOLDER: Final[str] = "[contenthash]"

DEFAULT_FILENAME_TEMPLATE: Final[str] = "[name].css"
DEFAULT_HASH_FUNCTION: Final[str] = "md5"
DEFAULT_HASH_DIGEST: Final[str] = "hex"
DEFAULT_HASH_DIGEST_LENGTH: Final[int] = 20

DEFAULT_NESTED_AT_RULES: Final[tuple[str, ...]] = ("media",)

# Config discovery
CONFIG_FILE_NAME: Final[str] = "cssblocks.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_SECTION: Final[str] = "tool.cssblocks"

LOG_LEVEL_ENV_VAR: Final[str] = "CSSBLOCKS_LOG_LEVEL"

VALUE_NOT_SET: str = "<not set>"
