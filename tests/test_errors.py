"""Tests for the exception hierarchy."""

import pytest

from snakk_markup import ConfigError, RenderError, SnakkMarkupError, render_html


class TestHierarchy:
    def test_subclasses(self) -> None:
        assert issubclass(ConfigError, SnakkMarkupError)
        assert issubclass(RenderError, SnakkMarkupError)

    def test_config_error_message(self) -> None:
        err = ConfigError("link_class", "unsafe character")
        assert str(err) == "RenderConfig.link_class: unsafe character"
        assert err.field == "link_class"
        assert err.message == "unsafe character"

    def test_catch_as_base(self) -> None:
        with pytest.raises(SnakkMarkupError):
            raise RenderError("boom")


class TestRenderingNeverRaises:
    @pytest.mark.parametrize(
        "markup",
        ["[", "](", "```", "`", "**", "__", "> ", "- ", "1. ", "[a](", "[a](b", "\x00", "\r"],
    )
    def test_fragments(self, markup: str) -> None:
        assert isinstance(render_html(markup), str)
