"""Tests for HtmlBuilder and the tag helpers."""

import pytest

from snakk_markup.builder import HtmlBuilder, start_tag, wrap
from snakk_markup.errors import RenderError


class TestStartTag:
    def test_plain(self) -> None:
        assert start_tag("p") == "<p>"

    def test_class_comes_last(self) -> None:
        assert start_tag("a", "link", href="/x", rel="nofollow") == (
            '<a href="/x" rel="nofollow" class="link">'
        )

    def test_attribute_values_are_escaped(self) -> None:
        assert start_tag("a", href='/x"><script>') == '<a href="/x&quot;&gt;&lt;script&gt;">'

    def test_empty_class_is_omitted(self) -> None:
        assert start_tag("ul", "") == "<ul>"

    def test_unknown_tag(self) -> None:
        with pytest.raises(RenderError, match="not allow-listed"):
            start_tag("script")

    def test_unknown_attribute(self) -> None:
        with pytest.raises(RenderError, match="onclick"):
            start_tag("a", onclick="alert(1)")


class TestWrap:
    def test_wrap(self) -> None:
        assert wrap("em", "x") == "<em>x</em>"

    def test_wrap_with_class(self) -> None:
        assert wrap("code", "x", "c") == '<code class="c">x</code>'


class TestHtmlBuilder:
    def test_empty(self) -> None:
        hb = HtmlBuilder()
        assert hb.build() == ""
        assert not hb
        assert len(hb) == 0

    def test_chaining(self) -> None:
        hb = HtmlBuilder()
        hb.open("p").append("Hello").void("br").append("World").close("p")
        assert hb.build() == "<p>Hello<br>World</p>"

    def test_element(self) -> None:
        hb = HtmlBuilder()
        hb.open("ul").element("li", "a").element("li", "b").close("ul")
        assert hb.build() == "<ul><li>a</li><li>b</li></ul>"

    def test_empty_append_is_skipped(self) -> None:
        hb = HtmlBuilder()
        hb.append("")
        assert len(hb) == 0

    def test_build_closes_open_elements(self) -> None:
        hb = HtmlBuilder()
        hb.open("blockquote").open("p").append("x")
        assert hb.build() == "<blockquote><p>x</p></blockquote>"

    def test_mismatched_close(self) -> None:
        hb = HtmlBuilder()
        hb.open("ul").open("li")
        with pytest.raises(RenderError, match="innermost open element is 'li'"):
            hb.close("ul")

    def test_close_without_open(self) -> None:
        with pytest.raises(RenderError):
            HtmlBuilder().close("p")

    def test_void_rejects_container(self) -> None:
        with pytest.raises(RenderError, match="not a void element"):
            HtmlBuilder().void("p")

    def test_open_void_is_not_tracked(self) -> None:
        hb = HtmlBuilder()
        hb.open("br")
        assert hb.build() == "<br>"
