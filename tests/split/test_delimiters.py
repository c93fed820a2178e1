# topmark:header:start
#
#   project      : CSSBlocks
#   file         : test_delimiters.py
#   file_relpath : tests/split/test_delimiters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for comment classification (block markers and stale map pragmas)."""

from __future__ import annotations

from cssblocks.split.delimiters import CommentKind, classify_comment
from tests.conftest import parametrize


@parametrize(
    "body, kind, name",
    [
        ("! start:a.css ", CommentKind.START, "a.css"),
        ("!start:a.css", CommentKind.START, "a.css"),
        ("! end:departures.css", CommentKind.END, "departures.css"),
        ("! end:foo_bar-1.css ", CommentKind.END, "foo_bar-1.css"),
        ("! start:a.css\n", CommentKind.START, "a.css"),  # one whitespace character
        ("!\xa0start:a.css\xa0", CommentKind.START, "a.css"),  # no-break space
        (f"! end:a.css{chr(0x2028)}", CommentKind.END, "a.css"),
    ],
)
def test_block_markers(body: str, kind: CommentKind, name: str) -> None:
    """``start:``/``end:`` comments are markers carrying the block name."""
    result = classify_comment(body)
    assert result.kind is kind
    assert result.name == name
    assert result.is_delimiter


@parametrize(
    "body",
    [
        " start:a.css ",  # no bang
        "!  start:a.css",  # two spaces
        "! start:a.scss",  # wrong suffix
        "! start:dir/a.css",  # path separators are not allowed
        "! begin:a.css",
        "! start:a.css extra",
        "! start:a.css \n",  # trailing newline after the optional space
        "! start:a.css\n\n",
        "! start:\xe9.css",  # word characters are ASCII only
        "! start:a\xb2.css",
        "plain comment",
        "",
    ],
)
def test_content_comments(body: str) -> None:
    """Anything that is not exactly a marker or a pragma is content."""
    result = classify_comment(body)
    assert result.kind is CommentKind.CONTENT
    assert result.name is None
    assert not result.is_delimiter


def test_sourcemap_pragma() -> None:
    """A ``sourceMappingURL`` comment naming a ``.css.map`` file is a stale pragma."""
    assert classify_comment("# sourceMappingURL=main.css.map").kind is CommentKind.SOURCEMAP_PRAGMA
    assert classify_comment("# sourceMappingURL=data:application/json;base64,e30=").kind is (
        CommentKind.CONTENT
    )
    assert classify_comment("# sourceMappingURL=\xe9.css.map").kind is CommentKind.CONTENT
