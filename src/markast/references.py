#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/references.py
"""Per-compile tables for link reference and footnote definitions.

Link reference definitions (``[id]: url "title"``) and footnote definitions
(``[^id]: body``) may appear anywhere in a document, including after the
first citation. The grammar rules record definitions into these tables
during the single forward pass; nodes that cite them keep a handle to the
table and resolve lazily when a consumer reads them.

A fresh pair of tables is created for every ``compile`` call so repeated or
concurrent compilations never share definitions.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_WHITESPACE_RUN_R = re.compile(r"\s+")


def normalize_reference_id(ref: str) -> str:
    """Normalize a reference id for lookup.

    Ids are compared case-insensitively with internal whitespace collapsed.

    >>> normalize_reference_id("  Foo\\n Bar ")
    'foo bar'

    """
    return _WHITESPACE_RUN_R.sub(" ", ref).strip().lower()


@dataclass(frozen=True)
class LinkDefinition:
    """Target of a link reference definition.

    Parameters
    ----------
    url : str
        Raw (unsanitized) target URL
    title : str or None, default = None
        Optional title

    """

    url: str
    title: Optional[str] = None


@dataclass(frozen=True)
class FootnoteEntry:
    """A footnote definition as it appeared in the source."""

    identifier: str
    body: str


class ReferenceTable:
    """Mapping of link reference ids to their definitions.

    The first definition of an id wins; later duplicates are ignored.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, LinkDefinition] = {}
        self._citations: list[str] = []

    def define(self, ref: str, url: str, title: Optional[str] = None) -> None:
        """Record a link reference definition."""
        key = normalize_reference_id(ref)
        if key in self._definitions:
            logger.debug(f"Ignoring duplicate link reference definition: {ref!r}")
            return
        self._definitions[key] = LinkDefinition(url=url, title=title)

    def cite(self, ref: str) -> None:
        """Record that a node cites ``ref``."""
        self._citations.append(ref)

    def lookup(self, ref: str) -> Optional[LinkDefinition]:
        """Return the definition for ``ref``, or None when undefined."""
        return self._definitions.get(normalize_reference_id(ref))

    def undefined(self) -> list[str]:
        """Return cited ids without a definition, in first-citation order."""
        missing: list[str] = []
        seen: set[str] = set()
        for ref in self._citations:
            key = normalize_reference_id(ref)
            if key in seen or key in self._definitions:
                continue
            seen.add(key)
            missing.append(ref)
        return missing

    def __contains__(self, ref: object) -> bool:
        return isinstance(ref, str) and normalize_reference_id(ref) in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


class FootnoteTable:
    """Ordered collection of footnote definitions and citations."""

    def __init__(self) -> None:
        self._entries: list[FootnoteEntry] = []
        self._citations: list[str] = []

    def define(self, identifier: str, body: str) -> None:
        """Record a footnote definition in document order."""
        self._entries.append(FootnoteEntry(identifier=identifier, body=body))

    def cite(self, identifier: str) -> None:
        """Record that a footnote reference cites ``identifier``."""
        self._citations.append(identifier)

    @property
    def entries(self) -> list[FootnoteEntry]:
        """Footnote definitions in definition order."""
        return list(self._entries)

    def lookup(self, identifier: str) -> Optional[FootnoteEntry]:
        """Return the first definition for ``identifier``, or None."""
        for entry in self._entries:
            if entry.identifier == identifier:
                return entry
        return None

    def undefined(self) -> list[str]:
        """Return cited identifiers without a definition, in first-citation order."""
        defined = {entry.identifier for entry in self._entries}
        missing: list[str] = []
        for identifier in self._citations:
            if identifier not in defined and identifier not in missing:
                missing.append(identifier)
        return missing

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
