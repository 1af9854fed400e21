#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/rules/__init__.py
"""Grammar rule registry.

Rules are grouped by concern in the submodules of this package. The full set
is assembled by :func:`build_rules`, which leaves out the rules of any
extension switched off in the options.
"""

from __future__ import annotations

import logging

from markast.options.markdown import MarkdownParserOptions
from markast.parsing.dispatch import Rule
from markast.parsing.rules import blocks, html, inline, lists, references, tables

logger = logging.getLogger(__name__)

ALL_RULES: tuple[Rule, ...] = (
    *blocks.RULES,
    *html.RULES,
    *inline.RULES,
    *lists.RULES,
    *references.RULES,
    *tables.RULES,
)

# Option flag -> rules that exist only while the flag is on
EXTENSION_RULES: dict[str, frozenset[str]] = {
    "parse_tables": frozenset({"table"}),
    "parse_footnotes": frozenset({"footnote", "footnote_reference"}),
    "parse_strikethrough": frozenset({"text_strikethroughed"}),
    "parse_task_lists": frozenset({"gfm_task"}),
    "parse_html": frozenset({"html_comment", "raw_html_element", "raw_html_self_closing"}),
    "autolink_bare_urls": frozenset({"link_bare_url_detector"}),
}


def build_rules(options: MarkdownParserOptions | None = None) -> list[Rule]:
    """Return the rules enabled by ``options``.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Compiler options; None enables every extension

    Returns
    -------
    list of Rule
        Enabled rules, unordered (the dispatcher sorts them)

    """
    options = options or MarkdownParserOptions()
    disabled: set[str] = set()
    for flag, rule_names in EXTENSION_RULES.items():
        if not getattr(options, flag):
            disabled.update(rule_names)

    if disabled:
        logger.debug(f"Disabled rules: {', '.join(sorted(disabled))}")
    return [rule for rule in ALL_RULES if rule.name not in disabled]


__all__ = ["ALL_RULES", "EXTENSION_RULES", "build_rules"]
