#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_block_rules.py
"""Unit tests for the block grammar rules."""

import pytest

from markast import compile_markdown
from markast.ast import BlockQuote, CodeBlock, Heading, Paragraph, Text, ThematicBreak
from markast.parsing.state import ParseState


def blocks(markdown):
    return compile_markdown(markdown).document.children


@pytest.mark.unit
class TestHeadings:
    """Tests for ATX and setext headings."""

    @pytest.mark.parametrize("level", range(1, 7))
    def test_atx_levels(self, level):
        """Test every ATX heading level."""
        (heading,) = blocks("#" * level + " Title")
        assert heading == Heading(level=level, content=[Text(content="Title")])

    def test_atx_closing_hashes(self):
        """Test that trailing hashes are not part of the title."""
        (heading,) = blocks("## Title ##")
        assert heading.content == [Text(content="Title")]

    @pytest.mark.parametrize("underline, level", [("=====", 1), ("-----", 2)])
    def test_setext(self, underline, level):
        """Test setext headings."""
        (heading,) = blocks(f"Title\n{underline}")
        assert heading == Heading(level=level, content=[Text(content="Title")])

    def test_heading_content_is_inline(self):
        """Test that headings may contain formatting."""
        (heading,) = blocks("# A *b*")
        assert heading.content[1].content == [Text(content="b")]


@pytest.mark.unit
class TestCodeBlocks:
    """Tests for fenced and indented code."""

    def test_fenced_with_language(self):
        """Test a fenced block with a language tag."""
        (code,) = blocks("```py\nprint(1)\n```")
        assert code == CodeBlock(content="print(1)", language="py")

    def test_tilde_fence(self):
        """Test a tilde fence without language."""
        (code,) = blocks("~~~\na\nb\n~~~")
        assert code == CodeBlock(content="a\nb")

    def test_fenced_content_is_literal(self):
        """Test that markup inside a fence is not parsed."""
        (code,) = blocks("```\n# not a heading\n**x**\n```")
        assert code.content == "# not a heading\n**x**"

    def test_indented(self):
        """Test an indented code block."""
        (code,) = blocks("    x = 1\n    y = 2")
        assert code == CodeBlock(content="x = 1\ny = 2")

    def test_indented_with_blank_line(self):
        """Test that blank lines inside indented code are kept."""
        (code,) = blocks("    a\n\n    b")
        assert code.content == "a\n\nb"


@pytest.mark.unit
class TestOtherBlocks:
    """Tests for quotes, rules and paragraphs."""

    def test_block_quote(self):
        """Test a two-line block quote."""
        (quote,) = blocks("> quoted\n> more")
        assert quote == BlockQuote(children=[Paragraph(content=[Text(content="quoted\nmore")])])

    def test_block_quote_lazy_continuation(self):
        """Test that an unprefixed line continues the quote."""
        (quote,) = blocks("> quoted\nmore")
        assert quote.children == [Paragraph(content=[Text(content="quoted\nmore")])]

    def test_nested_block_quote(self):
        """Test a quote inside a quote."""
        (quote,) = blocks("> > inner")
        assert isinstance(quote.children[0], BlockQuote)

    def test_quote_holds_blocks(self):
        """Test that a quote may contain headings and paragraphs."""
        (quote,) = blocks("> # Title\n>\n> body")
        assert [type(child) for child in quote.children] == [Heading, Paragraph]

    @pytest.mark.parametrize("rule", ["***", "---", "___", "* * *"])
    def test_thematic_break(self, rule):
        """Test the thematic break forms."""
        children = blocks(f"a\n\n{rule}\n\nb")
        assert [type(child) for child in children] == [Paragraph, ThematicBreak, Paragraph]

    def test_blank_lines_separate_paragraphs(self):
        """Test that any run of blank lines ends a paragraph."""
        children = blocks("a\n\n\n\nb")
        assert children == [Paragraph(content=[Text(content="a")]), Paragraph(content=[Text(content="b")])]

    def test_paragraph_spans_lines(self):
        """Test that single newlines stay inside one paragraph."""
        (paragraph,) = blocks("one\ntwo")
        assert paragraph.content == [Text(content="one\ntwo")]

    def test_block_rules_do_not_fire_inline(self, context):
        """Test that heading syntax is text in inline scope."""
        assert context.parse("# x", ParseState(inline=True)) == [Text(content="# x")]
