#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/rules/blocks.py
"""Block grammar rules: headings, quotes, code blocks, rules and paragraphs.

Block patterns rely on the compile entry terminating block input with a
blank line, so every construct here ends in at least one ``\\n``.
"""

from __future__ import annotations

import re
from typing import Optional

from markast.ast.nodes import BlockQuote, CodeBlock, Heading, Node, Paragraph, ThematicBreak
from markast.parsing.dispatch import Priority, Rule, block_regex
from markast.parsing.state import CompileContext, ParseState

BLOCKQUOTE_R = re.compile(r"^ *>[^\n]+(?:\n[^\n]+|\n{2,}(?= *>)[^\n]+)*\n{2,}")
BLOCKQUOTE_TRIM_LEFT_MULTILINE_R = re.compile(r"^ *> ?", re.M)
BREAK_THEMATIC_R = re.compile(r"^ *(?:[-*_] *){3,}(?:\n *)+\n")
CODE_BLOCK_R = re.compile(r"^ {4}[^\n]+(?:\n+ {4}[^\n]+)*(?:\n *)+\n")
CODE_BLOCK_FENCED_R = re.compile(r"^\s*(`{3,}|~{3,}) *(\S+)? *\n([\s\S]+?)\s*\1 *(?:\n *)+\n")
CODE_BLOCK_INDENT_R = re.compile(r"^ {4}", re.M)
CONSECUTIVE_NEWLINE_R = re.compile(r"^(?:\n *)*\n")
HEADING_R = re.compile(r"^ *(#{1,6}) *([^\n]+?) *#* *\n+")
HEADING_SETEXT_R = re.compile(r"^([^\n]+)\n *(=|-){3,} *(?:\n *)+\n")
PARAGRAPH_R = re.compile(r"^((?:[^\n]|\n(?! *\n))+)(?:\n *)+\n")
TRAILING_NEWLINES_R = re.compile(r"\n+\Z")


def _build_block_quote(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    content = BLOCKQUOTE_TRIM_LEFT_MULTILINE_R.sub("", match.group(0))
    return BlockQuote(children=context.parse_block(content, state))


def _build_break_thematic(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return ThematicBreak()


def _build_code_block(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    content = CODE_BLOCK_INDENT_R.sub("", match.group(0))
    return CodeBlock(content=TRAILING_NEWLINES_R.sub("", content))


def _build_code_fenced(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return CodeBlock(content=match.group(3), language=match.group(2) or None)


def _build_heading(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Heading(level=len(match.group(1)), content=context.parse_inline(match.group(2), state))


def _build_heading_setext(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    level = 1 if match.group(2) == "=" else 2
    return Heading(level=level, content=context.parse_inline(match.group(1), state))


def _build_newline_coalescer(match: re.Match[str], context: CompileContext, state: ParseState) -> None:
    return None


def _build_paragraph(match: re.Match[str], context: CompileContext, state: ParseState) -> Optional[Node]:
    content = context.parse_inline(match.group(1), state)
    # A paragraph made only of definitions or comments leaves nothing to show
    if not content:
        return None
    return Paragraph(content=content)


RULES: tuple[Rule, ...] = (
    Rule("block_quote", Priority.HIGH, block_regex(BLOCKQUOTE_R), _build_block_quote),
    Rule("break_thematic", Priority.HIGH, block_regex(BREAK_THEMATIC_R), _build_break_thematic),
    Rule("code_block", Priority.MAX, block_regex(CODE_BLOCK_R), _build_code_block),
    Rule("code_fenced", Priority.MAX, block_regex(CODE_BLOCK_FENCED_R), _build_code_fenced),
    Rule("heading", Priority.HIGH, block_regex(HEADING_R), _build_heading),
    Rule("heading_setext", Priority.MAX, block_regex(HEADING_SETEXT_R), _build_heading_setext),
    Rule("newline_coalescer", Priority.LOW, block_regex(CONSECUTIVE_NEWLINE_R), _build_newline_coalescer),
    Rule("paragraph", Priority.LOW, block_regex(PARAGRAPH_R), _build_paragraph),
)
