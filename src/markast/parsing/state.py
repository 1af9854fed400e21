#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/state.py
"""Parse state and per-compile context.

:class:`ParseState` is the small value threaded through every rule: whether
the current scope is inline, whether it sits inside a list item, and how
deeply sub-parses are nested. It is frozen; rules that open a sub-scope
derive a new state with :meth:`ParseState.enter` and never touch the one
they received.

:class:`CompileContext` holds everything that lives for exactly one compile
call: the reference and footnote tables, collected diagnostics, and the
recursion entry points that rule builders use to parse nested content
through the same dispatcher.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Optional

from markast.ast.nodes import Node, Text
from markast.constants import DIAGNOSTIC_NESTING_LIMIT, DiagnosticCode
from markast.parsing.normalize import is_inline_source, prepare_block_source
from markast.references import FootnoteTable, ReferenceTable

if TYPE_CHECKING:
    from markast.options.markdown import MarkdownParserOptions
    from markast.parsing.dispatch import Dispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseState:
    """Scope information for one dispatcher invocation.

    Parameters
    ----------
    inline : bool, default = False
        Whether inline rules (rather than block rules) are active
    in_list : bool, default = False
        Whether the content is the body of a list item; lets nested lists
        start inside inline scope
    depth : int, default = 0
        Number of enclosing sub-parses

    """

    inline: bool = False
    in_list: bool = False
    depth: int = 0

    def enter(self, *, inline: Optional[bool] = None, in_list: Optional[bool] = None) -> ParseState:
        """Derive the state for a nested sub-parse.

        Unspecified flags are inherited; ``depth`` always increases by one.
        """
        return replace(
            self,
            inline=self.inline if inline is None else inline,
            in_list=self.in_list if in_list is None else in_list,
            depth=self.depth + 1,
        )


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while compiling a document.

    Parameters
    ----------
    code : str
        One of the ``DIAGNOSTIC_*`` codes from :mod:`markast.constants`
    message : str
        Human readable description
    identifier : str or None, default = None
        Reference id, footnote id or URL the problem concerns

    """

    code: DiagnosticCode
    message: str
    identifier: Optional[str] = None


class CompileContext:
    """Mutable state scoped to a single compile call.

    Parameters
    ----------
    dispatcher : Dispatcher
        Dispatcher that nested content is parsed with
    options : MarkdownParserOptions
        Options of the compiler that created this context

    """

    def __init__(self, dispatcher: Dispatcher, options: MarkdownParserOptions) -> None:
        self.dispatcher = dispatcher
        self.options = options
        self.references = ReferenceTable()
        self.footnotes = FootnoteTable()
        self.diagnostics: list[Diagnostic] = []

    def report(self, code: DiagnosticCode, message: str, identifier: Optional[str] = None) -> None:
        """Record a diagnostic for the current compile."""
        logger.debug(f"{code}: {message}")
        self.diagnostics.append(Diagnostic(code=code, message=message, identifier=identifier))

    def parse(self, source: str, state: ParseState) -> list[Node]:
        """Parse ``source`` with the dispatcher under ``state``.

        Content nested deeper than ``max_nesting_depth`` is not parsed any
        further; it is returned verbatim as a single Text node.
        """
        if state.depth > self.options.max_nesting_depth:
            self.report(
                DIAGNOSTIC_NESTING_LIMIT,
                f"Nesting depth exceeded {self.options.max_nesting_depth}; content kept as text",
            )
            return [Text(content=source)] if source else []
        return self.dispatcher.parse(source, state, self)

    def parse_inline(self, source: str, state: ParseState, *, in_list: Optional[bool] = None) -> list[Node]:
        """Parse ``source`` as inline content one level below ``state``."""
        return self.parse(source, state.enter(inline=True, in_list=in_list))

    def parse_block(self, source: str, state: ParseState, *, in_list: Optional[bool] = None) -> list[Node]:
        """Parse ``source`` as block content one level below ``state``."""
        return self.parse(source, state.enter(inline=False, in_list=in_list))

    def parse_fragment(self, source: str, state: ParseState) -> list[Node]:
        """Parse a standalone fragment, choosing its scope from its content.

        Used for markup embedded in attribute values, which is compiled like
        a top-level document but shares this context's tables.
        """
        if is_inline_source(source):
            return self.parse_inline(source, state)
        return self.parse_block(prepare_block_source(source), state)
