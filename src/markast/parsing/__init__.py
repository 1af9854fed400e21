#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsing engine: normalization, parse state, rule dispatch and grammar rules."""

from markast.parsing.dispatch import Dispatcher, Priority, Rule, any_scope_regex, block_regex, inline_regex
from markast.parsing.normalize import is_inline_source, normalize_whitespace, prepare_block_source
from markast.parsing.state import CompileContext, Diagnostic, ParseState

__all__ = [
    "CompileContext",
    "Diagnostic",
    "Dispatcher",
    "ParseState",
    "Priority",
    "Rule",
    "any_scope_regex",
    "block_regex",
    "inline_regex",
    "is_inline_source",
    "normalize_whitespace",
    "prepare_block_source",
]
