#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the markast library.

This module centralizes the hardcoded values used across the compiler so
that defaults live in a single place.

Constants are organized by category:
1. Type Definitions - Literal types shared by nodes and options
2. Parsing Behavior - Default option values
3. Security Constants - URL sanitization settings
4. Diagnostic Codes - Identifiers for recoverable document problems
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
TaskStatus = Literal["checked", "unchecked"]

# =============================================================================
# Parsing Behavior
# =============================================================================

# Spaces substituted for each tab during input normalization
TAB_WIDTH = 4

DEFAULT_FORCE_INLINE = False
DEFAULT_FORCE_BLOCK = False
DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_FOOTNOTES = True
DEFAULT_PARSE_STRIKETHROUGH = True
DEFAULT_PARSE_TASK_LISTS = True
DEFAULT_PARSE_HTML = True
DEFAULT_AUTOLINK_BARE_URLS = True
DEFAULT_PARSE_FRONTMATTER = False

# Maximum number of nested sub-parses (block quotes, list items, HTML bodies,
# emphasis, ...) before remaining content is emitted as literal text.
DEFAULT_MAX_NESTING_DEPTH = 48

# =============================================================================
# Security Constants
# =============================================================================

# Scheme prefix rejected by sanitize_url after decoding and stripping
UNSAFE_URL_SCHEME = "javascript:"

# =============================================================================
# Diagnostic Codes
# =============================================================================

DiagnosticCode = Literal[
    "undefined-link-reference",
    "undefined-footnote",
    "unsafe-url",
    "nesting-limit",
    "invalid-frontmatter",
]

DIAGNOSTIC_UNDEFINED_LINK_REFERENCE: DiagnosticCode = "undefined-link-reference"
DIAGNOSTIC_UNDEFINED_FOOTNOTE: DiagnosticCode = "undefined-footnote"
DIAGNOSTIC_UNSAFE_URL: DiagnosticCode = "unsafe-url"
DIAGNOSTIC_NESTING_LIMIT: DiagnosticCode = "nesting-limit"
DIAGNOSTIC_INVALID_FRONTMATTER: DiagnosticCode = "invalid-frontmatter"
