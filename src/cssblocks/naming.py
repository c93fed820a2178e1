# topmark:header:start
#
#   project      : CSSBlocks
#   file         : naming.py
#   file_relpath : src/cssblocks/naming.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output file naming: ``[name]`` and ``[contenthash]`` templates."""

from __future__ import annotations

import base64
import hashlib
import posixpath

from cssblocks.config.types import HashDigest
from cssblocks.constants import (
    CONTENTHASH_PLACEHOLDER,
    CSS_SUFFIX,
    DEFAULT_HASH_DIGEST_LENGTH,
    DEFAULT_HASH_FUNCTION,
    NAME_PLACEHOLDER,
)


class ContentHasher:
    """Callable that digests text for the ``[contenthash]`` placeholder.

    Args:
        function (str): Any algorithm name accepted by `hashlib.new`.
        digest (HashDigest): Digest encoding.
        length (int): Number of leading digest characters kept.

    Raises:
        ValueError: If the algorithm is unknown or ``length`` is not positive.
    """

    def __init__(
        self,
        function: str = DEFAULT_HASH_FUNCTION,
        digest: HashDigest = HashDigest.HEX,
        length: int = DEFAULT_HASH_DIGEST_LENGTH,
    ) -> None:
        if length < 1:
            raise ValueError(f"Hash digest length must be positive, got {length}")
        hashlib.new(function)  # raises ValueError for unknown algorithms
        self.function = function
        self.digest = HashDigest(digest)
        self.length = length

    def __call__(self, contents: str) -> str:
        h = hashlib.new(self.function, contents.encode("utf-8"))
        if self.digest is HashDigest.BASE64:
            encoded = base64.b64encode(h.digest()).decode("ascii")
        else:
            encoded = h.hexdigest()
        return encoded[: self.length]


def format_filename(
    template: str,
    name: str,
    contents: str,
    hasher: ContentHasher | None = None,
) -> str:
    """Expand a filename template for a block.

    Args:
        template (str): Template such as ``[name].[contenthash].css``.
        name (str): Block name; its basename without ``.css`` replaces ``[name]``.
        contents (str): Text digested for ``[contenthash]``.
        hasher (ContentHasher | None): Digest function; defaults to `ContentHasher()`.

    Returns:
        str: The expanded file name.
    """
    stem = posixpath.basename(name)
    if stem.endswith(CSS_SUFFIX):
        stem = stem[: -len(CSS_SUFFIX)]
    output = template.replace(NAME_PLACEHOLDER, stem)
    if CONTENTHASH_PLACEHOLDER in output:
        output = output.replace(CONTENTHASH_PLACEHOLDER, (hasher or ContentHasher())(contents))
    return output
