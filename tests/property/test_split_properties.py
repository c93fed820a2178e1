# topmark:header:start
#
#   project      : CSSBlocks
#   file         : test_split_properties.py
#   file_relpath : tests/property/test_split_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Property tests for splitting generated stylesheets.

Documents are built from numbered style rules, each either left in the
document or wrapped in start/end markers for one of a few block names. The
properties checked:
1) every rule ends up in exactly the block it was marked for, in document order;
2) splitting a rendered block again is a no-op;
3) every rule in a block maps back to the original position of that rule.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from cssblocks.sourcemap import SourceMapConsumer
from cssblocks.split import split_document
from tests.conftest import make_source_map

BLOCK_NAMES = ["a.css", "b.css", "c.css"]

# Mark the entire test module
pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

# One entry per rule: the block it belongs to, or None for the document.
s_layout = st.lists(st.one_of(st.none(), st.sampled_from(BLOCK_NAMES)), max_size=25)
s_nonempty_layout = st.lists(
    st.one_of(st.none(), st.sampled_from(BLOCK_NAMES)), min_size=1, max_size=25
)


def _rule(i: int) -> str:
    return f".r{i}{{n:{i}}}"


def _expected(layout: list[str | None]) -> dict[str, str]:
    texts: dict[str, str] = {"main.css": ""}
    for i, name in enumerate(layout):
        key = name or "main.css"
        texts[key] = texts.get(key, "") + _rule(i)
    return {name: text + "\n" for name, text in texts.items()}


@settings(deadline=None, max_examples=60, suppress_health_check=[HealthCheck.too_slow])
@given(layout=s_layout)
def test_rules_land_in_their_marked_block(layout: list[str | None]) -> None:
    """Each rule is copied to its block; blocks appear in first-reference order."""
    parts: list[str] = []
    for i, name in enumerate(layout):
        if name is None:
            parts.append(_rule(i))
        else:
            parts.append(f"/*! start:{name} */{_rule(i)}/*! end:{name} */")
    result = split_document("main.css", "\n".join(parts))

    assert result.ok
    assert result.artifacts() == _expected(layout)
    assert list(result.artifacts()) == list(_expected(layout))


@settings(deadline=None, max_examples=60, suppress_health_check=[HealthCheck.too_slow])
@given(layout=s_layout)
def test_splitting_a_block_again_is_a_no_op(layout: list[str | None]) -> None:
    """A rendered block has no markers left: splitting it yields the same text."""
    text = "".join(
        _rule(i) if name is None else f"/*! start:{name} */{_rule(i)}/*! end:{name} */"
        for i, name in enumerate(layout)
    )
    for block in split_document("main.css", text).blocks:
        again = split_document(block.name, block.text)
        assert [b.text for b in again.blocks] == [block.text]
        assert again.ok


@settings(deadline=None, max_examples=40, suppress_health_check=[HealthCheck.too_slow])
@given(layout=s_nonempty_layout)
def test_block_maps_point_back_to_original_rules(layout: list[str | None]) -> None:
    """A rule's position in a block resolves to the rule's original position."""
    lines: list[str] = []
    rule_lines: dict[int, int] = {}
    for i, name in enumerate(layout):
        if name is not None:
            lines.append(f"/*! start:{name} */")
        lines.append(_rule(i))
        rule_lines[i] = len(lines)
        if name is not None:
            lines.append(f"/*! end:{name} */")
    # Every document line maps to line 100 + n of the original source
    original = make_source_map(
        [(n, 0, "src/main.scss", 100 + n, 0) for n in range(1, len(lines) + 1)]
    )

    result = split_document("main.css", "\n".join(lines), original)
    assert result.ok

    for block in result.blocks:
        members = [i for i, name in enumerate(layout) if (name or "main.css") == block.name]
        if not members:
            assert block.source_map is not None
            continue
        assert block.map_json is not None
        consumer = SourceMapConsumer.from_json(block.map_json)
        column = 0
        for i in members:
            pos = consumer.original_position_for(1, column)
            assert pos is not None
            assert (pos.source, pos.line, pos.column) == (
                "src/main.scss",
                100 + rule_lines[i],
                0,
            )
            back = consumer.generated_position_for("src/main.scss", 100 + rule_lines[i], 0)
            assert back is not None
            assert (back.line, back.column) == (1, column)
            column += len(_rule(i))
