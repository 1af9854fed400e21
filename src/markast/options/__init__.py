#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the markast compiler."""

from markast.options.base import BaseParserOptions, CloneFrozenMixin
from markast.options.markdown import MarkdownParserOptions

__all__ = [
    "BaseParserOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
]
