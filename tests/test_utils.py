"""Tests for utility modules."""

import logging

import pytest

from snakk_markup.utils import (
    collapse_whitespace,
    escape_html,
    get_logger,
    normalize_newlines,
    truncate_at_word,
    unescape_html,
)


class TestEscapeHtml:
    def test_special_characters(self) -> None:
        assert escape_html("<a href=\"x\">'&'</a>") == (
            "&lt;a href=&quot;x&quot;&gt;&#x27;&amp;&#x27;&lt;/a&gt;"
        )

    def test_empty(self) -> None:
        assert escape_html("") == ""

    def test_nul_replaced(self) -> None:
        assert escape_html("a\x00b") == "a\ufffdb"

    def test_unescape_reverses(self) -> None:
        text = "<b>\"it's\" & more</b>"
        assert unescape_html(escape_html(text)) == text

    def test_unescape_without_entities(self) -> None:
        assert unescape_html("plain") == "plain"


class TestNormalizeNewlines:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("a\r\nb", "a\nb"), ("a\rb", "a\nb"), ("a\nb", "a\nb"), ("a\r\n\r\nb", "a\n\nb")],
    )
    def test_normalize(self, text: str, expected: str) -> None:
        assert normalize_newlines(text) == expected


class TestCollapseWhitespace:
    def test_collapse(self) -> None:
        assert collapse_whitespace("  a \n\n b\tc ") == "a b c"


class TestTruncateAtWord:
    def test_short_text(self) -> None:
        assert truncate_at_word("short", 14) == "short"

    def test_word_boundary(self) -> None:
        assert truncate_at_word("hello brave new world", 14) == "hello brave..."

    def test_partial_word_dropped(self) -> None:
        assert truncate_at_word("hello brave new world", 13) == "hello..."

    def test_never_longer_than_length(self) -> None:
        for length in range(1, 30):
            assert len(truncate_at_word("hello brave new world of words", length)) <= length

    def test_tiny_length(self) -> None:
        assert truncate_at_word("hello world", 2) == ".."

    def test_custom_suffix(self) -> None:
        assert truncate_at_word("hello brave world", 12, suffix="…") == "hello brave…"


class TestLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("urls").name == "snakk_markup.urls"

    def test_package_name_kept(self) -> None:
        assert get_logger("snakk_markup.config").name == "snakk_markup.config"

    def test_root(self) -> None:
        assert get_logger("snakk_markup").name == "snakk_markup"

    def test_returns_standard_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)
