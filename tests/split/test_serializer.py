# topmark:header:start
#
#   project      : CSSBlocks
#   file         : test_serializer.py
#   file_relpath : tests/split/test_serializer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for rendering blocks and for output file naming."""

from __future__ import annotations

import base64
import hashlib

import pytest

from cssblocks.config import HashDigest
from cssblocks.naming import ContentHasher, format_filename
from cssblocks.split.block import Block, MappingEntry
from cssblocks.split.serializer import RenderedBlock, map_pragma, render_block, render_blocks
from tests.conftest import load_map, parametrize


def _block(name: str = "a.css", *, output_name: str | None = None, text: str = ".a{}") -> Block:
    block = Block(name, output_name=output_name)
    block.append(text)
    return block


def test_map_pragma() -> None:
    """The pragma names ``<identity>.map`` and ends with a newline."""
    assert map_pragma("a.css") == "/*# sourceMappingURL=a.css.map*/\n"


def test_render_without_map() -> None:
    """Without a map the text only gets a trailing newline."""
    rendered = render_block(_block(), with_map=False)
    assert rendered.text == ".a{}\n"
    assert rendered.source_map is None
    assert rendered.map_json is None
    assert rendered.artifacts() == {"a.css": ".a{}\n"}


def test_render_with_map() -> None:
    """With a map the pragma follows the text and the map lists the mappings."""
    block = _block(output_name="dist/a.css")
    block.add_mapping(MappingEntry(1, 0, "a.scss", 3, 1))
    rendered = render_block(block, with_map=True)

    assert rendered.text == ".a{}\n/*# sourceMappingURL=a.css.map*/\n"
    assert rendered.identity == "a.css"
    assert rendered.map_name == "dist/a.css.map"
    data = load_map(rendered.map_json)
    assert data["version"] == 3
    assert data["file"] == "dist/a.css"
    assert data["sources"] == ["a.scss"]
    assert data["mappings"] == "AAEC"
    assert "sourcesContent" not in data
    assert set(rendered.artifacts()) == {"dist/a.css", "dist/a.css.map"}


def test_render_blocks_keeps_order_and_document_name() -> None:
    """Rendering keeps registry order; templates never rename the document block."""
    document = Block("main.css", output_name="dist/main.css", is_document=True)
    document.append(".m{}")
    rendered = render_blocks(
        [document, _block(output_name="dist/a.css")],
        with_maps=False,
        filename_template="[name].x.css",
    )
    assert [r.output_name for r in rendered] == ["dist/main.css", "dist/a.x.css"]
    assert rendered[0].is_document


def test_rendered_block_is_immutable() -> None:
    """Rendered blocks are frozen values."""
    rendered = RenderedBlock(name="a.css", output_name="a.css", text="\n")
    with pytest.raises(AttributeError):
        rendered.text = "x"  # type: ignore[misc]


@parametrize(
    "template, expected",
    [
        ("[name].css", "a.css"),
        ("[name].min.css", "a.min.css"),
        ("css/[name].css", "css/a.css"),
        ("static.css", "static.css"),
    ],
)
def test_format_filename_name_placeholder(template: str, expected: str) -> None:
    """``[name]`` is the block basename without ``.css``."""
    assert format_filename(template, "a.css", ".a{}") == expected


def test_format_filename_contenthash_defaults_to_md5_hex_20() -> None:
    """The default digest is the first 20 hex characters of the MD5 of the contents."""
    expected = hashlib.md5(b".a{}").hexdigest()[:20]
    assert format_filename("[name].[contenthash].css", "a.css", ".a{}") == f"a.{expected}.css"


def test_content_hasher_options() -> None:
    """Algorithm, encoding and length are configurable."""
    sha = ContentHasher("sha256", HashDigest.HEX, 12)
    assert sha(".a{}") == hashlib.sha256(b".a{}").hexdigest()[:12]

    b64 = ContentHasher("md5", HashDigest.BASE64, 6)
    assert b64(".a{}") == base64.b64encode(hashlib.md5(b".a{}").digest()).decode()[:6]


def test_content_hasher_is_stable_and_content_sensitive() -> None:
    """The same text always hashes the same; different text hashes differently."""
    hasher = ContentHasher()
    assert hasher(".a{}") == hasher(".a{}")
    assert hasher(".a{}") != hasher(".b{}")


@parametrize("function, length", [("no-such-hash", 20), ("md5", 0)])
def test_content_hasher_rejects_bad_settings(function: str, length: int) -> None:
    """Unknown algorithms and non-positive lengths are rejected."""
    with pytest.raises(ValueError):
        ContentHasher(function, HashDigest.HEX, length)
