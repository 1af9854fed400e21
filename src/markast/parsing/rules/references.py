#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/rules/references.py
"""Link reference and footnote rules.

Definitions (``[id]: url "title"`` and ``[^id]: body``) are recorded in the
context's tables and produce no node. Citations produce nodes that keep the
id and resolve against the table when read, so a definition may follow its
first use.
"""

from __future__ import annotations

import re

from markast.ast.nodes import FootnoteReference, Node, ReferenceImage, ReferenceLink
from markast.parsing.dispatch import Priority, Rule, any_scope_regex, block_regex, inline_regex
from markast.parsing.state import CompileContext, ParseState

FOOTNOTE_R = re.compile(r"^\[\^(.*?)\]:(.*)\n")
FOOTNOTE_REFERENCE_R = re.compile(r"^\[\^([^\]\s]+)\]")
REFERENCE_DEFINITION_R = re.compile(r"^\[(?!\^)([^\]]*)\]:\s*(\S+)(?:\s+\"([^\"]*)\")? *")
REFERENCE_IMAGE_R = re.compile(r"^!\[([^\]]*)\] ?\[([^\]]*)\]")
REFERENCE_LINK_R = re.compile(r"^\[([^\]]*)\] ?\[([^\]]*)\]")


def _build_ref(match: re.Match[str], context: CompileContext, state: ParseState) -> None:
    context.references.define(match.group(1), match.group(2), match.group(3))
    return None


def _build_ref_image(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    alt, ref = match.group(1, 2)
    # `![alt][]` cites its own alt text
    ref = ref or alt
    context.references.cite(ref)
    return ReferenceImage(ref=ref, alt=alt or None, references=context.references)


def _build_ref_link(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    text, ref = match.group(1, 2)
    ref = ref or text
    context.references.cite(ref)
    return ReferenceLink(ref=ref, content=context.parse_inline(text, state), references=context.references)


def _build_footnote(match: re.Match[str], context: CompileContext, state: ParseState) -> None:
    context.footnotes.define(match.group(1), match.group(2).strip())
    return None


def _build_footnote_reference(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    identifier = match.group(1)
    context.footnotes.cite(identifier)
    return FootnoteReference(identifier=identifier)


RULES: tuple[Rule, ...] = (
    Rule("footnote", Priority.MAX, block_regex(FOOTNOTE_R), _build_footnote),
    Rule("footnote_reference", Priority.HIGH, inline_regex(FOOTNOTE_REFERENCE_R), _build_footnote_reference),
    Rule("ref", Priority.MAX, any_scope_regex(REFERENCE_DEFINITION_R), _build_ref),
    Rule("ref_image", Priority.MAX, inline_regex(REFERENCE_IMAGE_R), _build_ref_image),
    Rule("ref_link", Priority.MAX, inline_regex(REFERENCE_LINK_R), _build_ref_link),
)
