#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/normalize.py
"""Input canonicalization and scope detection.

Every grammar rule assumes ``\\n`` line endings and no tabs, so raw input
goes through :func:`normalize_whitespace` before it reaches the dispatcher.
"""

from __future__ import annotations

import re

from markast.constants import TAB_WIDTH

_CR_NEWLINE_R = re.compile(r"\r\n?")
_FORMFEED_R = re.compile(r"\f")
_TAB_R = re.compile(r"\t")

# Anything that can only be block content: a newline anywhere, or a leading
# list bullet, heading marker, wide indent, rule or quote marker.
_BLOCK_SIGNAL_R = re.compile(r"\n|^[-*]\s|^#|^ {2,}|^-{2,}|^>\s")

_TRIM_NEWLINES_AND_TRAILING_WHITESPACE_R = re.compile(r"^\n+|\s+\Z")


def normalize_whitespace(text: str) -> str:
    r"""Canonicalize line endings, form feeds and tabs.

    ``\r\n`` and lone ``\r`` become ``\n``, form feeds are removed and every
    tab becomes four spaces.

    >>> normalize_whitespace("a\r\n\tb\f")
    'a\n    b'

    """
    text = _CR_NEWLINE_R.sub("\n", text)
    text = _FORMFEED_R.sub("", text)
    return _TAB_R.sub(" " * TAB_WIDTH, text)


def is_inline_source(text: str) -> bool:
    """Return True when ``text`` shows no sign of block-level structure.

    >>> is_inline_source("just *some* text")
    True
    >>> is_inline_source("# Title")
    False

    """
    return _BLOCK_SIGNAL_R.search(text) is None


def prepare_block_source(text: str) -> str:
    """Trim leading blank lines and trailing whitespace, then terminate the block."""
    return _TRIM_NEWLINES_AND_TRAILING_WHITESPACE_R.sub("", text) + "\n\n"
