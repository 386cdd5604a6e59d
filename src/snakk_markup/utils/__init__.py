"""Utility modules for snakk-markup.

Provides:
- text: escape_html, unescape_html, newline and whitespace helpers
- logger: get_logger for logging
"""

from snakk_markup.utils.logger import get_logger
from snakk_markup.utils.text import (
    collapse_whitespace,
    escape_html,
    normalize_newlines,
    truncate_at_word,
    unescape_html,
)

__all__ = [
    "collapse_whitespace",
    "escape_html",
    "get_logger",
    "normalize_newlines",
    "truncate_at_word",
    "unescape_html",
]
