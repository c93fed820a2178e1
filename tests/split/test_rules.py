# topmark:header:start
#
#   project      : CSSBlocks
#   file         : test_rules.py
#   file_relpath : tests/split/test_rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the tinycss2-backed top-level rule stream."""

from __future__ import annotations

from cssblocks.split.rules import RuleKind, normalize_text, parse_rule_stream

SAMPLE = ".a{color:red}\n/* c */\n@import 'x.css';\n@media print{.b{x:y}}"


def test_rule_spans_cover_exact_source_text() -> None:
    """Each rule's span is the exact text of the rule, without surrounding whitespace."""
    stream = parse_rule_stream(SAMPLE)
    assert stream.diagnostics == ()

    kinds = [r.kind for r in stream.rules]
    assert kinds == [RuleKind.STYLE, RuleKind.COMMENT, RuleKind.AT_RULE, RuleKind.MEDIA]

    texts = [SAMPLE[r.start : r.end] for r in stream.rules]
    assert texts == [
        ".a{color:red}",
        "/* c */",
        "@import 'x.css';",
        "@media print{.b{x:y}}",
    ]


def test_comment_body_and_at_keyword_are_exposed() -> None:
    """Comment rules carry their body; at-rules carry their lowercased keyword."""
    stream = parse_rule_stream("/*! start:a.css */@MEDIA screen{}")
    comment, media = stream.rules
    assert comment.is_comment
    assert comment.comment == "! start:a.css "
    assert media.kind is RuleKind.MEDIA
    assert media.at_keyword == "media"


def test_media_children_have_their_own_spans() -> None:
    """Rules nested in ``@media`` are exposed as children with spans in the same text."""
    text = "@media print {\n  .b{x:y}\n  .c{z:w}\n}"
    (media,) = parse_rule_stream(text).rules
    assert [text[c.start : c.end] for c in media.children] == [".b{x:y}", ".c{z:w}"]
    assert all(c.kind is RuleKind.STYLE for c in media.children)


def test_nested_at_rules_setting_controls_children() -> None:
    """Only the configured at-rules are descended into."""
    text = "@supports (display:grid){.g{display:grid}}@media print{.p{x:y}}"

    default = parse_rule_stream(text).rules
    assert [r.kind for r in default] == [RuleKind.AT_RULE, RuleKind.MEDIA]
    assert default[0].children == ()

    custom = parse_rule_stream(text, nested_at_rules=["supports"]).rules
    assert [r.kind for r in custom] == [RuleKind.MEDIA, RuleKind.AT_RULE]
    assert custom[0].at_keyword == "supports"
    assert [text[c.start : c.end] for c in custom[0].children] == [".g{display:grid}"]


def test_empty_stylesheet_has_no_rules() -> None:
    """An empty (or blank) stylesheet yields an empty stream."""
    assert parse_rule_stream("").rules == ()
    assert parse_rule_stream("  \n\t\n").rules == ()


def test_parse_error_is_reported_with_its_line() -> None:
    """A qualified rule without a block is reported as a parse diagnostic."""
    stream = parse_rule_stream(".a{color:red}\n.broken")
    assert len(stream.diagnostics) == 1
    assert stream.diagnostics[0].line == 2
    assert [r.kind for r in stream.rules] == [RuleKind.STYLE]


def test_normalize_text_matches_css_preprocessing() -> None:
    """CR, CRLF and form feeds become LF; NUL becomes U+FFFD."""
    assert normalize_text("a\r\nb\rc\fd\0") == "a\nb\nc\nd\ufffd"
    assert normalize_text(".a{}\n") == ".a{}\n"
