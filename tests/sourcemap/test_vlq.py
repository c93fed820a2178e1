# topmark:header:start
#
#   project      : CSSBlocks
#   file         : test_vlq.py
#   file_relpath : tests/sourcemap/test_vlq.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the base64 VLQ codec."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cssblocks.errors import SourceMapDecodeError
from cssblocks.sourcemap import vlq
from tests.conftest import parametrize


@parametrize(
    "value, encoded",
    [
        (0, "A"),
        (1, "C"),
        (-1, "D"),
        (15, "e"),
        (16, "gB"),
        (-16, "hB"),
        (123, "2H"),
    ],
)
def test_encode_known_values(value: int, encoded: str) -> None:
    """Known encodings from the Source Map v3 reference implementation."""
    assert vlq.encode(value) == encoded
    assert vlq.decode(encoded) == [value]


def test_decode_segment_with_several_values() -> None:
    """A segment packs several values back to back."""
    assert vlq.decode("AAgBC") == [0, 0, 16, 1]
    assert vlq.encode_values([0, 0, 16, 1]) == "AAgBC"


@given(st.lists(st.integers(min_value=-(2**31), max_value=2**31), min_size=1, max_size=6))
def test_encode_decode_values(values: list[int]) -> None:
    """Decoding an encoded segment gives the values back."""
    assert vlq.decode(vlq.encode_values(values)) == values


@parametrize("segment", ["A!", "g", "AAg"])
def test_decode_rejects_bad_segments(segment: str) -> None:
    """Non-base64 characters and truncated values are decode errors."""
    with pytest.raises(SourceMapDecodeError):
        vlq.decode(segment)
