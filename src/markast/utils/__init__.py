#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared by the markast compiler."""

from markast.utils.security import is_url_safe, sanitize_url, unescape_url

__all__ = ["is_url_safe", "sanitize_url", "unescape_url"]
