#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/rules/lists.py
"""Bullet and numbered list rule.

Lists are the most context-sensitive construct in the grammar:

1. A list may only start at the beginning of a line. Because inline scopes
   can reach list syntax mid-line, the matcher checks the text consumed by
   the previous match.
2. A list may start in block scope, or in inline scope when that scope is
   the body of a list item (nested lists inside tight items).
3. The matched block is split into items with a pattern that refuses to
   cross into a sibling item at the same indentation.
4. Each item's own indentation width is stripped from its continuation
   lines, then its bullet is removed.
5. An item is loose when it contains a blank line, or when it is the last
   item and the item before it was loose. Loose items are parsed as blocks
   and tight items inline.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from markast.ast.nodes import List, ListItem, Node, Paragraph, TaskListItem
from markast.constants import TaskStatus
from markast.parsing.dispatch import Priority, Rule
from markast.parsing.state import CompileContext, ParseState

logger = logging.getLogger(__name__)

# `*`, `-`, `+`, `1.`, `2.`, ...
LIST_BULLET = r"(?:[*+-]|[0-9]+\.)"

# Leading space plus a bullet plus a space (`   * `)
LIST_ITEM_PREFIX = r"( *)(" + LIST_BULLET + r") +"
LIST_ITEM_PREFIX_R = re.compile(r"^" + LIST_ITEM_PREFIX)

# One item: its first line plus every following line that does not open a
# sibling item at the same indentation.
LIST_ITEM_R = re.compile(
    LIST_ITEM_PREFIX + r"[^\n]*(?:\n(?!\1" + LIST_BULLET + r" )[^\n]*)*(?:\n|\Z)",
    re.M,
)

# A whole list: runs until a blank line that is not followed by an indented
# line or another bullet, or until the end of input (nested lists).
LIST_R = re.compile(
    r"^( *)(" + LIST_BULLET + r") [\s\S]+?(?:\n{2,}(?! )(?!\1" + LIST_BULLET + r" )\n*|\s*\Z)"
)

LIST_LOOKBEHIND_R = re.compile(r"\A\Z|\n *\Z")
BLOCK_END_R = re.compile(r"\n{2,}\Z")
LIST_ITEM_END_R = re.compile(r" *\n+\Z")


def _match_list(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
    is_start_of_line = LIST_LOOKBEHIND_R.search(previous) is not None
    is_list_block = state.in_list or not state.inline
    if is_start_of_line and is_list_block:
        return LIST_R.match(source)
    return None


def _task_status(children: list[Node]) -> Optional[TaskStatus]:
    first: Optional[Node] = children[0] if children else None
    if isinstance(first, Paragraph) and first.content:
        first = first.content[0]
    if isinstance(first, TaskListItem):
        return "checked" if first.checked else "unchecked"
    return None


def _build_list(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    bullet = match.group(2)
    ordered = len(bullet) > 1
    start = int(bullet.rstrip(".")) if ordered else None

    items_source = BLOCK_END_R.sub("\n", match.group(0))
    raw_items = [item.group(0) for item in LIST_ITEM_R.finditer(items_source)]

    items: list[ListItem] = []
    last_item_was_loose = False
    for index, raw_item in enumerate(raw_items):
        prefix = LIST_ITEM_PREFIX_R.match(raw_item)
        space = len(prefix.group(0)) if prefix else 0

        # Unindent continuation lines by this item's own width, then drop the bullet
        content = re.sub(r"^ {1,%d}" % space, "", raw_item, flags=re.M) if space else raw_item
        content = LIST_ITEM_PREFIX_R.sub("", content, count=1)

        is_last_item = index == len(raw_items) - 1
        loose = "\n\n" in content or (is_last_item and last_item_was_loose)
        last_item_was_loose = loose

        if loose:
            children = context.parse_block(LIST_ITEM_END_R.sub("\n\n", content), state, in_list=True)
        else:
            children = context.parse_inline(LIST_ITEM_END_R.sub("", content), state, in_list=True)

        items.append(ListItem(children=children, loose=loose, task_status=_task_status(children)))

    logger.debug(f"Parsed {'ordered' if ordered else 'bullet'} list with {len(items)} items")
    return List(ordered=ordered, items=items, start=start, tight=not any(item.loose for item in items))


RULES: tuple[Rule, ...] = (Rule("list", Priority.HIGH, _match_list, _build_list),)
