#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_inline_rules.py
"""Unit tests for the inline grammar rules.

Tests cover:
- Emphasis, strong, strikethrough and code spans
- Escapes and hard line breaks
- Inline links, images and the three autolink forms
- URL sanitization of link targets
- Plain text fallback for unmatched syntax

"""

import time

import pytest

from markast.ast import (
    Code,
    Emphasis,
    Image,
    LineBreak,
    Link,
    Strikethrough,
    Strong,
    TaskListItem,
    Text,
)
from markast.constants import DIAGNOSTIC_UNSAFE_URL
from markast.parsing.rules.inline import resolve_target
from markast.parsing.state import ParseState


def parse_inline(context, source):
    return context.parse(source, ParseState(inline=True))


@pytest.mark.unit
class TestTextFormatting:
    """Tests for emphasis-like rules."""

    def test_plain_text(self, context):
        """Test that ordinary words become one Text node."""
        assert parse_inline(context, "just some words") == [Text(content="just some words")]

    @pytest.mark.parametrize("source", ["**bold**", "__bold__"])
    def test_strong(self, context, source):
        """Test both strong delimiters."""
        assert parse_inline(context, source) == [Strong(content=[Text(content="bold")])]

    @pytest.mark.parametrize("source", ["*it*", "_it_"])
    def test_emphasis(self, context, source):
        """Test both emphasis delimiters."""
        assert parse_inline(context, source) == [Emphasis(content=[Text(content="it")])]

    def test_strikethrough(self, context):
        """Test strikethrough."""
        assert parse_inline(context, "~~gone~~") == [Strikethrough(content=[Text(content="gone")])]

    def test_nested_formatting(self, context):
        """Test emphasis nested inside strong text."""
        assert parse_inline(context, "**bold _and it_**") == [
            Strong(content=[Text(content="bold "), Emphasis(content=[Text(content="and it")])])
        ]

    def test_formatting_between_text(self, context):
        """Test that surrounding text is kept on both sides."""
        nodes = parse_inline(context, "a **b** c")
        assert nodes == [Text(content="a "), Strong(content=[Text(content="b")]), Text(content=" c")]

    def test_unclosed_emphasis_is_text(self, context):
        """Test that a lone delimiter degrades to text."""
        assert parse_inline(context, "*unclosed") == [Text(content="*unclosed")]

    def test_formatting_rules_are_inline_only(self, context):
        """Test that emphasis does not fire in block scope."""
        nodes = context.parse("**x**", ParseState(inline=False))
        assert not any(isinstance(node, Strong) for node in nodes)


@pytest.mark.unit
class TestCodeAndEscapes:
    """Tests for code spans, escapes and breaks."""

    def test_code_span(self, context):
        """Test a simple code span."""
        assert parse_inline(context, "`x = 1`") == [Code(content="x = 1")]

    def test_code_span_with_backtick(self, context):
        """Test a double-backtick span containing a backtick."""
        assert parse_inline(context, "``a ` b``") == [Code(content="a ` b")]

    def test_code_span_content_not_parsed(self, context):
        """Test that markup inside a code span is literal."""
        assert parse_inline(context, "`**x**`") == [Code(content="**x**")]

    @pytest.mark.parametrize("source", ["``a`", "```a``", "`", "a ``` b"])
    def test_unmatched_backtick_run_is_text(self, context, source):
        """Test that a run without a closer of the same length stays literal."""
        assert parse_inline(context, source) == [Text(content=source)]

    def test_code_span_closer_skips_longer_runs(self, context):
        """Test that the closing run must have exactly the opening length."""
        assert parse_inline(context, "`a``b`") == [Code(content="a``b")]

    @pytest.mark.slow
    def test_long_backtick_run(self, context):
        """Test that a long run of backticks completes quickly."""
        source = "`" * 5000

        start_time = time.time()
        nodes = parse_inline(context, source)
        end_time = time.time()

        duration = end_time - start_time
        assert nodes == [Text(content=source)]
        assert duration < 2

    def test_escape(self, context):
        """Test that escaped punctuation is literal text."""
        assert parse_inline(context, r"\*not emphasis\*") == [Text(content="*not emphasis*")]

    def test_backslash_before_letter_kept(self, context):
        """Test that only punctuation can be escaped."""
        assert parse_inline(context, r"\n") == [Text(content=r"\n")]

    def test_hard_line_break(self, context):
        """Test two trailing spaces before a newline."""
        assert parse_inline(context, "a  \nb") == [Text(content="a"), LineBreak(), Text(content="b")]

    def test_soft_line_break_is_text(self, context):
        """Test that a plain newline stays inside the text."""
        assert parse_inline(context, "a\nb") == [Text(content="a\nb")]


@pytest.mark.unit
class TestLinksAndImages:
    """Tests for links, images and autolinks."""

    def test_inline_link(self, context):
        """Test a link with a title."""
        assert parse_inline(context, '[text](http://x.com "Title")') == [
            Link(url="http://x.com", content=[Text(content="text")], title="Title")
        ]

    def test_link_with_angle_target(self, context):
        """Test a target wrapped in angle brackets."""
        (link,) = parse_inline(context, "[a](<http://x.com>)")
        assert link.url == "http://x.com"

    def test_link_content_is_parsed(self, context):
        """Test that link text may contain formatting."""
        (link,) = parse_inline(context, "[**b**](/path)")
        assert link.content == [Strong(content=[Text(content="b")])]

    def test_link_target_escapes_removed(self, context):
        """Test that backslash escapes are removed from targets."""
        (link,) = parse_inline(context, r"[a](http://x.com/a\_b)")
        assert link.url == "http://x.com/a_b"

    def test_image(self, context):
        """Test an inline image."""
        assert parse_inline(context, '![alt text](a.png "T")') == [Image(url="a.png", alt="alt text", title="T")]

    def test_angle_autolink(self, context):
        """Test an angle-bracket autolink."""
        assert parse_inline(context, "<http://x.com>") == [
            Link(url="http://x.com", content=[Text(content="http://x.com")])
        ]

    def test_mailto_autolink(self, context):
        """Test an email autolink gains a mailto scheme."""
        assert parse_inline(context, "<me@x.com>") == [Link(url="mailto:me@x.com", content=[Text(content="me@x.com")])]

    def test_mailto_autolink_with_scheme(self, context):
        """Test that an explicit mailto scheme is not doubled."""
        (link,) = parse_inline(context, "<mailto:me@x.com>")
        assert link.url == "mailto:me@x.com"
        assert link.content == [Text(content="me@x.com")]

    def test_bare_url(self, context):
        """Test that a bare URL becomes a link without trailing punctuation."""
        assert parse_inline(context, "see http://x.com/a.") == [
            Text(content="see "),
            Link(url="http://x.com/a", content=[Text(content="http://x.com/a")]),
            Text(content="."),
        ]

    def test_bare_url_needs_word_boundary(self, context):
        """Test that a scheme glued to a preceding word is not linked."""
        assert parse_inline(context, "foohttp://x.com") == [Text(content="foohttp://x.com")]
        assert parse_inline(context, "foo http://x.com") == [
            Text(content="foo "),
            Link(url="http://x.com", content=[Text(content="http://x.com")]),
        ]

    def test_unsafe_link_target(self, context):
        """Test that a javascript link loses its target and is reported."""
        (link,) = parse_inline(context, "[x](javascript:void)")
        assert link.url is None
        assert link.content == [Text(content="x")]
        assert [d.code for d in context.diagnostics] == [DIAGNOSTIC_UNSAFE_URL]

    def test_unsafe_image_target(self, context):
        """Test that images are sanitized too."""
        (image,) = parse_inline(context, "![x](javascript:void)")
        assert image.url is None

    def test_resolve_target(self, context):
        """Test resolve_target directly."""
        assert resolve_target("http://x.com", context) == "http://x.com"
        assert context.diagnostics == []
        assert resolve_target("javascript:x", context) is None
        assert context.diagnostics[0].identifier == "javascript:x"


@pytest.mark.unit
class TestTaskMarker:
    """Tests for the task checkbox rule."""

    def test_outside_list_is_text(self, context):
        """Test that a checkbox outside a list item is plain text."""
        assert parse_inline(context, "[x] done") == [Text(content="[x] done")]

    @pytest.mark.parametrize("marker, checked", [("[ ]", False), ("[x]", True), ("[X]", True)])
    def test_at_item_start(self, context, marker, checked):
        """Test a checkbox opening a list item's content."""
        nodes = context.parse(f"{marker} task", ParseState(inline=True, in_list=True))
        assert nodes == [TaskListItem(checked=checked), Text(content=" task")]

    def test_not_mid_item(self, context):
        """Test that a checkbox later in the item is text."""
        nodes = context.parse("a [x] b", ParseState(inline=True, in_list=True))
        assert nodes == [Text(content="a [x] b")]
