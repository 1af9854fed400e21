#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown compilation.

This module defines the options accepted by the Markdown compiler.
"""
# src/markast/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from markast.constants import (
    DEFAULT_AUTOLINK_BARE_URLS,
    DEFAULT_FORCE_BLOCK,
    DEFAULT_FORCE_INLINE,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_PARSE_FOOTNOTES,
    DEFAULT_PARSE_FRONTMATTER,
    DEFAULT_PARSE_HTML,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSE_TASK_LISTS,
)
from markast.exceptions import ValidationError
from markast.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST compilation.

    Parameters
    ----------
    force_inline : bool, default False
        Parse the entire input as inline content only. Takes precedence over
        ``force_block``.
    force_block : bool, default False
        Always parse as block content, suppressing the inline heuristic.
    parse_tables : bool, default True
        Whether to parse pipe tables.
    parse_footnotes : bool, default True
        Whether to parse footnote references and definitions.
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_task_lists : bool, default True
        Whether to parse task list checkboxes ([ ] and [x]).
    parse_html : bool, default True
        Whether to parse raw HTML elements and comments.
    autolink_bare_urls : bool, default True
        Whether bare http(s) URLs become links.
    parse_frontmatter : bool, default False
        Whether to extract YAML/TOML/JSON front matter into document metadata.
    max_nesting_depth : int, default 48
        Maximum depth of nested sub-parses before content is kept as text.

    """

    force_inline: bool = field(
        default=DEFAULT_FORCE_INLINE,
        metadata={"help": "Parse the whole input as inline content", "importance": "core"},
    )
    force_block: bool = field(
        default=DEFAULT_FORCE_BLOCK,
        metadata={"help": "Always parse as block content (no inline heuristic)", "importance": "core"},
    )
    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Parse table syntax (pipe tables)", "importance": "core"},
    )
    parse_footnotes: bool = field(
        default=DEFAULT_PARSE_FOOTNOTES,
        metadata={"help": "Parse footnote references and definitions", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=DEFAULT_PARSE_TASK_LISTS,
        metadata={"help": "Parse task list checkboxes ([ ] and [x])", "importance": "core"},
    )
    parse_html: bool = field(
        default=DEFAULT_PARSE_HTML,
        metadata={"help": "Parse raw HTML elements and comments", "importance": "advanced"},
    )
    autolink_bare_urls: bool = field(
        default=DEFAULT_AUTOLINK_BARE_URLS,
        metadata={"help": "Turn bare http(s) URLs into links", "importance": "advanced"},
    )
    parse_frontmatter: bool = field(
        default=DEFAULT_PARSE_FRONTMATTER,
        metadata={"help": "Parse YAML/TOML/JSON frontmatter at document start", "importance": "advanced"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum nesting depth of sub-parses before content is kept as literal text",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate flag types and the nesting depth limit.

        Raises
        ------
        ValidationError
            If a flag is not a bool or ``max_nesting_depth`` is not a positive int.

        """
        super().__post_init__()
        if isinstance(self.max_nesting_depth, bool) or not isinstance(self.max_nesting_depth, int):
            raise ValidationError(
                f"max_nesting_depth must be an int, got {type(self.max_nesting_depth).__name__}",
                parameter_name="max_nesting_depth",
                parameter_value=self.max_nesting_depth,
            )
        if self.max_nesting_depth <= 0:
            raise ValidationError(
                f"max_nesting_depth must be positive, got {self.max_nesting_depth}",
                parameter_name="max_nesting_depth",
                parameter_value=self.max_nesting_depth,
            )
