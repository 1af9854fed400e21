#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/rules/inline.py
"""Inline grammar rules: emphasis, code spans, links, images and plain text."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from markast.ast.nodes import (
    Code,
    Emphasis,
    Image,
    LineBreak,
    Link,
    Node,
    Strikethrough,
    Strong,
    TaskListItem,
    Text,
)
from markast.constants import DIAGNOSTIC_UNSAFE_URL
from markast.parsing.dispatch import Priority, Rule, any_scope_regex, inline_regex
from markast.parsing.state import CompileContext, ParseState
from markast.utils.security import sanitize_url, unescape_url

BACKTICK_RUN_R = re.compile(r"^`+")
BREAK_LINE_R = re.compile(r"^ {2,}\n")
GFM_TASK_R = re.compile(r"^\s*?\[([xX]|\s)\]")
LINK_AUTOLINK_R = re.compile(r"^<([^ <>]+:/[^ <>]+)>")
LINK_AUTOLINK_BARE_URL_R = re.compile(r"^(https?://[^\s<]+[^<.,:;\"')\]\s])")
LINK_AUTOLINK_MAILTO_R = re.compile(r"^<([^ <>]+@[^ <>]+)>")
AUTOLINK_MAILTO_CHECK_R = re.compile(r"mailto:", re.I)
TEXT_BOLD_R = re.compile(r"^[*_]{2}([\s\S]+?)[*_]{2}(?![*_])")
TEXT_EMPHASIZED_R = re.compile(r"^[*_]([\s\S]+?)[*_](?![*_])")
TEXT_ESCAPED_R = re.compile(r"^\\([^0-9A-Za-z\s])")
TEXT_STRIKETHROUGHED_R = re.compile(r"^~~(?=\S)([\s\S]*?\S)~~")

# A plain run stops before any symbol, a numbered-list marker, a blank line,
# a hard break or something shaped like a URL scheme, so that every other
# rule gets a chance at those positions.
TEXT_PLAIN_R = re.compile(
    r"^[\s\S]+?(?=[^0-9A-Z\s\u00c0-\uffff]|(?<![0-9])[0-9]+\.|\n\n| {2,}\n|(?<![0-9A-Z_])[0-9A-Z_]+:\S|\Z)",
    re.I,
)

LINK_INSIDE = r"(?:\[[^\]]*\]|[^\[\]]|\](?=[^\[]*\]))*"
LINK_HREF_AND_TITLE = r"\s*<?((?:[^\s\\]|\\.)*?)>?(?:\s+['\"]([\s\S]*?)['\"])?\s*"
LINK_R = re.compile(r"^\[(" + LINK_INSIDE + r")\]\(" + LINK_HREF_AND_TITLE + r"\)")
IMAGE_R = re.compile(r"^!\[(" + LINK_INSIDE + r")\]\(" + LINK_HREF_AND_TITLE + r"\)")


@lru_cache(maxsize=64)
def _code_span_patterns(length: int) -> tuple[re.Pattern[str], re.Pattern[str]]:
    fence = "`" * length
    closing = re.compile(r"(?<!`)" + fence + r"(?!`)")
    span = re.compile(r"^(" + fence + r")\s*([\s\S]*?[^`])\s*\1(?!`)")
    return closing, span


def _match_code_inline(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
    if not state.inline:
        return None
    run = BACKTICK_RUN_R.match(source)
    if run is None:
        return None

    closing, span = _code_span_patterns(run.end())
    closer = closing.search(source, run.end())
    if closer is not None:
        match = span.match(source, 0, closer.end())
        if match is not None:
            return match
    # No closing run of the same length: the backticks are literal
    return run


def resolve_target(raw: str, context: CompileContext) -> Optional[str]:
    """Sanitize a link or image target, reporting rejected ones.

    Parameters
    ----------
    raw : str
        Target as written, backslash escapes already removed
    context : CompileContext
        Context collecting the ``unsafe-url`` diagnostic

    Returns
    -------
    str or None
        The target, or None when it is unsafe

    """
    url = sanitize_url(raw)
    if url is None:
        context.report(DIAGNOSTIC_UNSAFE_URL, f"Rejected unsafe URL {raw[:100]!r}", identifier=raw)
    return url


def _build_code_inline(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    if match.re is BACKTICK_RUN_R:
        return Text(content=match.group(0))
    return Code(content=match.group(2))


def _build_text_bolded(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Strong(content=context.parse_inline(match.group(1), state))


def _build_text_emphasized(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Emphasis(content=context.parse_inline(match.group(1), state))


def _build_text_strikethroughed(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Strikethrough(content=context.parse_inline(match.group(1), state))


def _build_text_escaped(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Text(content=match.group(1))


def _build_text(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Text(content=match.group(0))


def _build_break_line(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return LineBreak()


def _build_link(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Link(
        url=resolve_target(unescape_url(match.group(2)), context),
        content=context.parse_inline(match.group(1), state),
        title=match.group(3),
    )


def _build_image(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return Image(
        url=resolve_target(unescape_url(match.group(2)), context),
        alt=match.group(1),
        title=match.group(3),
    )


def _build_autolink(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    target = match.group(1)
    return Link(url=resolve_target(target, context), content=[Text(content=target)])


def _build_mailto(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    address = match.group(1)
    target = address if AUTOLINK_MAILTO_CHECK_R.search(address) else f"mailto:{address}"
    return Link(url=resolve_target(target, context), content=[Text(content=address.replace("mailto:", "", 1))])


def _match_gfm_task(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
    # Only a checkbox that opens a list item's content counts
    if not (state.inline and state.in_list) or previous:
        return None
    return GFM_TASK_R.match(source)


def _build_gfm_task(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return TaskListItem(checked=match.group(1).lower() == "x")


RULES: tuple[Rule, ...] = (
    Rule("break_line", Priority.HIGH, any_scope_regex(BREAK_LINE_R), _build_break_line),
    Rule("code_inline", Priority.LOW, _match_code_inline, _build_code_inline),
    Rule("gfm_task", Priority.HIGH, _match_gfm_task, _build_gfm_task),
    Rule("image", Priority.HIGH, inline_regex(IMAGE_R), _build_image),
    Rule("link", Priority.LOW, inline_regex(LINK_R), _build_link),
    Rule("link_angle_brace_style_detector", Priority.MAX, inline_regex(LINK_AUTOLINK_R), _build_autolink),
    Rule("link_bare_url_detector", Priority.MAX, inline_regex(LINK_AUTOLINK_BARE_URL_R), _build_autolink),
    Rule("link_mailto_detector", Priority.MAX, inline_regex(LINK_AUTOLINK_MAILTO_R), _build_mailto),
    Rule("text", Priority.MIN, any_scope_regex(TEXT_PLAIN_R), _build_text),
    Rule("text_bolded", Priority.MED, inline_regex(TEXT_BOLD_R), _build_text_bolded),
    Rule("text_emphasized", Priority.LOW, inline_regex(TEXT_EMPHASIZED_R), _build_text_emphasized),
    Rule("text_escaped", Priority.HIGH, inline_regex(TEXT_ESCAPED_R), _build_text_escaped),
    Rule(
        "text_strikethroughed",
        Priority.LOW,
        inline_regex(TEXT_STRIKETHROUGHED_R),
        _build_text_strikethroughed,
    ),
)
