#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Security utilities for link and image targets.

Every URL that ends up on a Link or Image node passes through
:func:`sanitize_url`. The check mirrors browser-side XSS filters: the value is
percent-decoded, every character outside ``[A-Za-z0-9/:]`` is dropped, and the
remainder is compared against the ``javascript:`` scheme. This defeats
obfuscation with embedded whitespace or percent-encoded letters.

Functions
---------
- sanitize_url: Return a URL unchanged or None when it is unsafe
- is_url_safe: Boolean form of sanitize_url
- unescape_url: Remove Markdown backslash escapes from a link target
"""

import logging
import re
from urllib.parse import unquote_to_bytes

from markast.constants import UNSAFE_URL_SCHEME

logger = logging.getLogger(__name__)

# A "%" not followed by two hex digits cannot be decoded
_MALFORMED_ESCAPE_R = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME_NOISE_R = re.compile(r"[^A-Za-z0-9/:]")
_UNESCAPE_URL_R = re.compile(r"\\([^0-9A-Za-z\s])")


def _decode_uri_component(url: str) -> str:
    """Percent-decode a URL, failing on malformed escapes.

    Raises
    ------
    ValueError
        If an escape is malformed or the decoded bytes are not valid UTF-8

    """
    if _MALFORMED_ESCAPE_R.search(url):
        raise ValueError(f"Malformed percent escape in URL: {url[:50]}")
    return unquote_to_bytes(url).decode("utf-8")


def sanitize_url(url: str | None) -> str | None:
    """Return ``url`` unchanged if it is safe to emit, otherwise None.

    Parameters
    ----------
    url : str or None
        Raw link or image target

    Returns
    -------
    str or None
        The original URL, or None when it decodes to a ``javascript:`` scheme
        or cannot be decoded at all

    Examples
    --------
    >>> sanitize_url("http://x.com")
    'http://x.com'
    >>> sanitize_url("javascript:alert(1)") is None
    True
    >>> sanitize_url("a%AFc") is None
    True

    """
    if url is None:
        return None

    try:
        decoded = _decode_uri_component(url)
    except ValueError:
        logger.debug(f"Rejecting URL that failed to decode: {url[:100]!r}")
        return None

    scheme_text = _SCHEME_NOISE_R.sub("", decoded).lower()
    if scheme_text.startswith(UNSAFE_URL_SCHEME):
        logger.debug(f"Rejecting URL with unsafe scheme: {url[:100]!r}")
        return None

    return url


def is_url_safe(url: str | None) -> bool:
    """Check whether :func:`sanitize_url` would keep a URL.

    Parameters
    ----------
    url : str or None
        URL to check

    Returns
    -------
    bool
        True when the URL is present and safe

    """
    return url is not None and sanitize_url(url) is not None


def unescape_url(raw_url: str) -> str:
    r"""Remove backslash escapes from a Markdown link target.

    >>> unescape_url(r"http://x.com/a\_b")
    'http://x.com/a_b'

    """
    return _UNESCAPE_URL_R.sub(r"\1", raw_url)
