"""Text processing utilities for snakk-markup.

Escaping is the trust boundary of the whole renderer: every later stage
works on text that has already been through escape_html().

Example:
    >>> from snakk_markup.utils.text import escape_html
    >>> escape_html("<b>'hi'</b>")
    '&lt;b&gt;&#x27;hi&#x27;&lt;/b&gt;'
"""

from __future__ import annotations

import html as html_module

# HTML parsers replace NUL with U+FFFD; the segment table relies on NUL
# never surviving escape_html().
_NUL = "\x00"
_REPLACEMENT = "\ufffd"


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF.

    Browsers submit textarea content with CRLF line endings.
    """
    if "\r" not in text:
        return text
    return text.replace("\r\n", "\n").replace("\r", "\n")


def escape_html(text: str) -> str:
    """Escape HTML special characters.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    NUL characters are replaced with U+FFFD before escaping.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text safe for element content and quoted attributes
    """
    if not text:
        return ""
    if _NUL in text:
        text = text.replace(_NUL, _REPLACEMENT)
    return html_module.escape(text, quote=True)


def unescape_html(text: str) -> str:
    """Reverse escape_html() for plain-text output."""
    if not text or "&" not in text:
        return text
    return html_module.unescape(text)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    return " ".join(text.split())


def truncate_at_word(text: str, length: int, suffix: str = "...") -> str:
    """Truncate at word boundary within length.

    The result, suffix included, is never longer than ``length``.

    Examples:
        >>> truncate_at_word("hello brave new world", 14)
        'hello brave...'
        >>> truncate_at_word("short", 14)
        'short'
    """
    if not text or len(text) <= length:
        return text
    max_content = length - len(suffix)
    if max_content <= 0:
        return suffix[:length]
    truncated = text[:max_content]
    if text[max_content] == " ":
        # Cut fell exactly on a word boundary
        return truncated.strip() + suffix
    last_space = truncated.rfind(" ")
    result = truncated[:last_space].strip() if last_space > 0 else truncated.strip()
    return result + suffix if result else suffix
