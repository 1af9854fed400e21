#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/rules/tables.py
"""Pipe table rule.

A table is a header row, a separator row declaring column alignment
(``:--``, ``--:``, ``:-:`` or plain dashes) and one or more body rows. Rows
may carry more or fewer cells than the header; nothing is padded or
dropped.
"""

from __future__ import annotations

import re
from typing import Optional

from markast.ast.nodes import Node, Table, TableCell, TableRow
from markast.constants import Alignment
from markast.parsing.dispatch import Priority, Rule, block_regex
from markast.parsing.state import CompileContext, ParseState

NP_TABLE_R = re.compile(r"^(.*\|?.*)\n *(\|? *[-:]+ *\|[-| :]*)\n((?:.*\|.*\n)+)\n?")
TABLE_TRIM_PIPES_R = re.compile(r"^ *\||\| *\Z")
TABLE_CENTER_ALIGN_R = re.compile(r"^ *:-+: *\Z")
TABLE_LEFT_ALIGN_R = re.compile(r"^ *:-+ *\Z")
TABLE_RIGHT_ALIGN_R = re.compile(r"^ *-+: *\Z")
TABLE_ROW_SPLIT_R = re.compile(r" *\| *")


def parse_alignment(cell: str) -> Optional[Alignment]:
    """Map one separator cell to its column alignment.

    >>> [parse_alignment(c) for c in (":--", "--:", ":-:", "---")]
    ['left', 'right', 'center', None]

    """
    if TABLE_RIGHT_ALIGN_R.match(cell):
        return "right"
    if TABLE_CENTER_ALIGN_R.match(cell):
        return "center"
    if TABLE_LEFT_ALIGN_R.match(cell):
        return "left"
    return None


def _split_row(row: str) -> list[str]:
    return TABLE_ROW_SPLIT_R.split(TABLE_TRIM_PIPES_R.sub("", row).strip())


def _build_row(
    cells: list[str],
    alignments: list[Optional[Alignment]],
    context: CompileContext,
    state: ParseState,
    is_header: bool = False,
) -> TableRow:
    return TableRow(
        cells=[
            TableCell(
                content=context.parse_inline(text.strip(), state),
                alignment=alignments[index] if index < len(alignments) else None,
            )
            for index, text in enumerate(cells)
        ],
        is_header=is_header,
    )


def _build_table(match: re.Match[str], context: CompileContext, state: ParseState) -> Node:
    alignments = [parse_alignment(cell) for cell in _split_row(match.group(2))]
    header = _build_row(_split_row(match.group(1)), alignments, context, state, is_header=True)

    body = TABLE_TRIM_PIPES_R.sub("", match.group(3)).strip()
    rows = [_build_row(_split_row(line), alignments, context, state) for line in body.split("\n")]

    return Table(header=header, rows=rows, alignments=alignments)


RULES: tuple[Rule, ...] = (Rule("table", Priority.HIGH, block_regex(NP_TABLE_R), _build_table),)
