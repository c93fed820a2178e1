# topmark:header:start
#
#   project      : CSSBlocks
#   file         : vlq.py
#   file_relpath : src/cssblocks/sourcemap/vlq.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base64 VLQ codec used by the ``mappings`` field of Source Map v3.

Each value is stored sign-in-lowest-bit, five bits per base64 digit, with
bit 6 of the digit flagging a continuation.
"""

from __future__ import annotations

from typing import Final

from cssblocks.errors import SourceMapDecodeError

BASE64_ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DIGIT_VALUES: Final[dict[str, int]] = {c: i for i, c in enumerate(BASE64_ALPHABET)}

VLQ_BASE_SHIFT: Final[int] = 5
VLQ_BASE_MASK: Final[int] = (1 << VLQ_BASE_SHIFT) - 1
VLQ_CONTINUATION_BIT: Final[int] = 1 << VLQ_BASE_SHIFT


def encode(value: int) -> str:
    """Encode a single signed integer."""
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    digits: list[str] = []
    while True:
        digit = vlq & VLQ_BASE_MASK
        vlq >>= VLQ_BASE_SHIFT
        if vlq:
            digit |= VLQ_CONTINUATION_BIT
        digits.append(BASE64_ALPHABET[digit])
        if not vlq:
            return "".join(digits)


def encode_values(values: list[int]) -> str:
    """Encode a mapping segment (a list of signed integers)."""
    return "".join(encode(v) for v in values)


def decode(segment: str) -> list[int]:
    """Decode every value packed into ``segment``.

    Raises:
        SourceMapDecodeError: On a non-base64 character or a truncated value.
    """
    values: list[int] = []
    value = 0
    shift = 0
    for char in segment:
        digit = _DIGIT_VALUES.get(char)
        if digit is None:
            raise SourceMapDecodeError(f"Invalid base64 VLQ character {char!r} in {segment!r}")
        value += (digit & VLQ_BASE_MASK) << shift
        if digit & VLQ_CONTINUATION_BIT:
            shift += VLQ_BASE_SHIFT
            continue
        negative = value & 1
        value >>= 1
        values.append(-value if negative else value)
        value = 0
        shift = 0
    if shift:
        raise SourceMapDecodeError(f"Truncated base64 VLQ value in {segment!r}")
    return values
