#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/rules/html.py
"""Raw HTML rules and attribute extraction.

Three rules recognize raw HTML in any scope:

- ``raw_html_element``: a tag with a matching closing tag. Nested tags of
  the same name are counted so the element ends at its own closing tag. The
  body is compiled as Markdown, in block scope when it starts with another
  complete element and in inline scope otherwise.
- ``raw_html_self_closing``: a tag with no closing tag (``<br />``,
  ``<img src="...">``).
- ``html_comment``: ``<!-- ... -->``, consumed without producing a node.

Attribute strings are turned into dictionaries by :func:`extract_attributes`.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional

from markast.ast.nodes import AttributeValue, HTMLElement, HTMLSelfClosing, Node
from markast.parsing.dispatch import Priority, Rule, any_scope_regex
from markast.parsing.state import CompileContext, ParseState

logger = logging.getLogger(__name__)

# Attribute name, optionally followed by `=` and a double-quoted,
# single-quoted or brace-delimited value.
ATTR_EXTRACTOR_R = re.compile(
    r"([-A-Z0-9_:]+)"
    r"(?:\s*=\s*(?:"
    r"\"((?:\\.|[^\"\\])*)\""
    r"|'((?:\\.|[^'\\])*)'"
    r"|\{((?:\\.|\{[^}]*?\}|[^{}\\])*)\}"
    r"))?",
    re.I,
)

# A tag name starts with a letter and ends at whitespace, `/` or `>`
TAG_NAME = r"[A-Za-z][\w:.-]*(?=[\s/>])"

HTML_COMMENT_R = re.compile(r"^<!--[\s\S]*?-->")
HTML_TAG_START_R = re.compile(r"^ *<[A-Za-z]")
HTML_OPEN_TAG_R = re.compile(r"^ *<(" + TAG_NAME + r") ?([^>]*)>")
HTML_SELF_CLOSING_ELEMENT_R = re.compile(r"^ *<(" + TAG_NAME + r")((?:<[^<>]*>|[^>])*)>(?!</\1>)\s*")
STYLE_DECLARATION_SPLIT_R = re.compile(r";\s?")
TRAILING_NEWLINES_R = re.compile(r"\n*")


@lru_cache(maxsize=256)
def _tag_scanner(tag: str) -> re.Pattern[str]:
    # Opening or closing occurrences of exactly this tag name
    return re.compile(r"<(/?)" + re.escape(tag) + r"(?=[\s/>])[^>]*>")


@lru_cache(maxsize=256)
def _element_pattern(tag: str) -> re.Pattern[str]:
    escaped = re.escape(tag)
    return re.compile(r"^ *<(" + escaped + r") ?([^>]*)>([\s\S]*)</" + escaped + r">\n*\Z")


def match_html_element(source: str) -> Optional[re.Match[str]]:
    """Match a complete HTML element at the start of ``source``.

    The match groups are the tag name, the raw attribute string and the body.
    An element whose closing tag is missing does not match.

    Parameters
    ----------
    source : str
        Remaining input

    Returns
    -------
    re.Match or None
        Match spanning the element and any newlines directly after it

    """
    if HTML_TAG_START_R.match(source) is None or ">" not in source:
        return None
    opening = HTML_OPEN_TAG_R.match(source)
    if opening is None or opening.group(2).endswith("/"):
        return None

    tag = opening.group(1)
    if source.find(f"</{tag}", opening.end()) < 0:
        return None

    depth = 1
    for occurrence in _tag_scanner(tag).finditer(source, opening.end()):
        if occurrence.group(1):
            depth -= 1
            if depth == 0:
                end = TRAILING_NEWLINES_R.match(source, occurrence.end()).end()
                return _element_pattern(tag).match(source[:end])
        elif not occurrence.group(0).endswith("/>"):
            depth += 1

    return None


def _starts_with_element(text: str) -> bool:
    return match_html_element(text) is not None or HTML_SELF_CLOSING_ELEMENT_R.match(text) is not None


def _parse_style(value: str) -> dict[str, str]:
    styles: dict[str, str] = {}
    for declaration in STYLE_DECLARATION_SPLIT_R.split(value):
        name, separator, setting = declaration.partition(":")
        if not separator:
            continue
        styles[name.strip()] = setting.strip()
    return styles


def _attribute_value(name: str, value: str, context: CompileContext, state: ParseState) -> AttributeValue:
    if name == "style":
        return _parse_style(value)
    if value == "true":
        return True
    if value == "false":
        return False

    embedded = value.strip()
    if _starts_with_element(embedded):
        return context.parse_fragment(embedded, state)
    return value


def extract_attributes(raw: str, context: CompileContext, state: ParseState) -> dict[str, AttributeValue]:
    """Turn a raw attribute string into a mapping.

    Parameters
    ----------
    raw : str
        Everything between the tag name and the closing ``>``
    context : CompileContext
        Context used to compile markup embedded in attribute values
    state : ParseState
        State of the enclosing tag

    Returns
    -------
    dict
        Attribute name to value, where a value is:

        - the quoted text, without its quotes
        - True for a bare attribute name, True/False for the literal
          keywords ``true``/``false``
        - a dict of declarations for ``style``
        - a list of nodes when the value is itself a complete HTML element
        - otherwise the text inside ``{...}``, without the braces

    Examples
    --------
    ``<input disabled class="x" style="color: red; margin: 0">`` yields
    ``{"disabled": True, "class": "x", "style": {"color": "red", "margin": "0"}}``.

    """
    attributes: dict[str, AttributeValue] = {}
    for attribute in ATTR_EXTRACTOR_R.finditer(raw):
        name = attribute.group(1)
        double_quoted, single_quoted, interpolation = attribute.group(2, 3, 4)
        if double_quoted is not None:
            value = double_quoted
        elif single_quoted is not None:
            value = single_quoted
        elif interpolation is not None:
            value = interpolation
        else:
            attributes[name] = True
            continue
        attributes[name] = _attribute_value(name, value, context, state)
    return attributes


def _match_html_element(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
    return match_html_element(source)


def _match_html_self_closing(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
    if HTML_TAG_START_R.match(source) is None or ">" not in source:
        return None
    return HTML_SELF_CLOSING_ELEMENT_R.match(source)


def _build_html_element(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    tag, raw_attributes, body = match.group(1, 2, 3)
    body = body.strip()

    if match_html_element(body) is not None:
        children = context.parse_block(body + "\n\n", state)
    else:
        children = context.parse_inline(body, state)

    return HTMLElement(tag=tag, attrs=extract_attributes(raw_attributes, context, state), children=children)


def _build_html_self_closing(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    return HTMLSelfClosing(tag=match.group(1), attrs=extract_attributes(match.group(2), context, state))


def _build_html_comment(match: re.Match[str], context: CompileContext, state: ParseState) -> None:
    logger.debug(f"Dropping HTML comment of {len(match.group(0))} characters")
    return None


RULES: tuple[Rule, ...] = (
    Rule("html_comment", Priority.HIGH, any_scope_regex(HTML_COMMENT_R), _build_html_comment),
    Rule("raw_html_element", Priority.HIGH, _match_html_element, _build_html_element),
    Rule(
        "raw_html_self_closing",
        Priority.HIGH,
        _match_html_self_closing,
        _build_html_self_closing,
    ),
)
