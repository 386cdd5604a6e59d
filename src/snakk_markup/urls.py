"""Link destination validation for snakk-markup.

A destination is accepted when it is an absolute URL with an allowed scheme
(http and https must also name a host) or, optionally, a root-relative path.
Everything else, including protocol-relative "//host" and the "/\\host"
form browsers treat the same way, is rejected and the link is rendered as
literal text.

Example:
    >>> from snakk_markup.urls import is_safe_url
    >>> is_safe_url("https://example.com")
    True
    >>> is_safe_url("javascript:alert(1)")
    False
"""

from __future__ import annotations

import re
from collections.abc import Set
from urllib.parse import quote as url_quote
from urllib.parse import urlsplit

from snakk_markup.utils.logger import get_logger

logger = get_logger(__name__)

_DEFAULT_ALLOWED_SCHEMES = frozenset(("http", "https", "mailto"))

# Schemes whose URLs are meaningless without an authority component.
_HOST_SCHEMES = frozenset(("http", "https", "ftp", "ftps", "ws", "wss"))

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def is_safe_url(
    url: str,
    allowed_schemes: Set[str] = _DEFAULT_ALLOWED_SCHEMES,
    *,
    allow_root_relative: bool = True,
) -> bool:
    """Check whether a decoded link destination may become an href.

    Args:
        url: Destination with HTML entities already decoded
        allowed_schemes: Lower-case absolute URL schemes to accept
        allow_root_relative: Accept "/path" destinations

    Returns:
        True if the destination is safe to emit as an href
    """
    url = url.strip()
    if not url or _CONTROL_CHARS.search(url):
        return False

    if url.startswith("/"):
        # "//host" and "/\host" both resolve to another origin
        return allow_root_relative and url[1:2] not in ("/", "\\")

    try:
        parts = urlsplit(url)
    except ValueError:
        logger.debug("Rejected unparseable link destination")
        return False

    scheme = parts.scheme.lower()
    if not scheme:
        return False
    if scheme not in allowed_schemes:
        logger.debug("Rejected link destination with scheme %r", scheme)
        return False
    if scheme in _HOST_SCHEMES and not parts.netloc:
        return False
    if scheme == "mailto" and not parts.path:
        return False
    return True


def encode_url(url: str) -> str:
    """Percent-encode a destination for use in an href attribute.

    Spaces, quotes, angle brackets and non-ASCII characters are encoded;
    already-encoded sequences and common URL punctuation are preserved.
    The result still needs escape_html() before it goes into an attribute.
    """
    return url_quote(url.strip(), safe="/:?#[]@!$&'()*+,;=-_.~%")
