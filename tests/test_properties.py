"""Property-based tests for renderer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

import re
from html.parser import HTMLParser

from hypothesis import given, settings
from hypothesis import strategies as st

from snakk_markup import make_snippet, render_html, render_plain_text
from snakk_markup.builder import ALLOWED_TAGS, VOID_TAGS

MARKUP_ALPHABET = "*_`[]()>-1. \n\tab<&\"'x:/\\\r\x00"

markup_text = st.text(alphabet=MARKUP_ALPHABET, max_size=300)

OWN_TAG = re.compile(r"</?(?:%s)(?: [^<>]*)?>" % "|".join(sorted(ALLOWED_TAGS)))
HREF = re.compile(r'href="([^"]*)"')


class _TagChecker(HTMLParser):
    """Collect tags and check that they nest."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.stack: list[str] = []
        self.tags: set[str] = set()
        self.balanced = True

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.tags.add(tag)
        if tag not in VOID_TAGS:
            self.stack.append(tag)

    def handle_endtag(self, tag: str) -> None:
        self.tags.add(tag)
        if not self.stack or self.stack.pop() != tag:
            self.balanced = False


def _check(html: str) -> _TagChecker:
    checker = _TagChecker()
    checker.feed(html)
    checker.close()
    return checker


class TestHtmlInvariants:
    """Invariants of render_html on arbitrary input."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_never_raises(self, markup: str) -> None:
        assert isinstance(render_html(markup), str)

    @given(markup_text)
    @settings(max_examples=300)
    def test_only_allowed_tags(self, markup: str) -> None:
        assert _check(render_html(markup)).tags <= ALLOWED_TAGS

    @given(markup_text)
    @settings(max_examples=300)
    def test_tags_balanced(self, markup: str) -> None:
        checker = _check(render_html(markup))
        assert checker.balanced
        assert checker.stack == []

    @given(markup_text)
    @settings(max_examples=300)
    def test_no_stray_angle_brackets(self, markup: str) -> None:
        """Outside the renderer's own tags, < and > only appear escaped."""
        rest = OWN_TAG.sub("", render_html(markup))
        assert "<" not in rest
        assert ">" not in rest

    @given(markup_text)
    @settings(max_examples=200)
    def test_no_nul_in_output(self, markup: str) -> None:
        assert "\x00" not in render_html(markup)
        assert "\x00" not in render_plain_text(markup)

    @given(markup_text)
    @settings(max_examples=100)
    def test_deterministic(self, markup: str) -> None:
        assert render_html(markup) == render_html(markup)

    @given(markup_text)
    @settings(max_examples=100)
    def test_crlf_equivalent(self, markup: str) -> None:
        source = markup.replace("\r", "")
        assert render_html(source.replace("\n", "\r\n")) == render_html(source)


class TestLinkInvariants:
    @given(
        scheme=st.sampled_from(
            ["http", "https", "mailto", "javascript", "JavaScript", "data", "vbscript", "file", ""]
        ),
        rest=st.text(alphabet="ab/:.@()&;#% \"'<>", max_size=30),
        label=st.text(alphabet="ab *_", min_size=1, max_size=10),
    )
    @settings(max_examples=300)
    def test_hrefs_are_allow_listed(self, scheme: str, rest: str, label: str) -> None:
        html = render_html(f"[{label}]({scheme}:{rest})")
        for href in HREF.findall(html):
            assert href.startswith(("http:", "https:", "mailto:", "/"))
            assert not href.startswith(("//", "/\\"))


class TestPlainTextInvariants:
    @given(st.text(alphabet="abc xyz", max_size=100))
    @settings(max_examples=100)
    def test_plain_words_unchanged(self, text: str) -> None:
        assert render_plain_text(text) == text.strip()

    @given(markup_text)
    @settings(max_examples=200)
    def test_never_raises(self, markup: str) -> None:
        assert isinstance(render_plain_text(markup), str)

    @given(markup_text, st.integers(min_value=1, max_value=120))
    @settings(max_examples=200)
    def test_snippet_within_limit(self, markup: str, limit: int) -> None:
        snippet = make_snippet(markup, max_chars=limit)
        assert len(snippet) <= limit
        assert "\n" not in snippet
