"""snakk-markup: safe rendering of forum post markup.

Converts the forum's lightweight markup dialect into sanitized HTML, and
into plain text for previews and notifications. All input is HTML-escaped
before any pattern runs; raw HTML is never passed through.

Supported syntax:
    **bold** __bold__ *italic* _italic_ `code`
    ```fenced code``` [text](https://url)
    > blockquote
    - unordered / * unordered
    1. ordered

Quick Start:
    >>> from snakk_markup import render_html, render_plain_text
    >>> render_html("**Hello** <world>")
    '<p class="my-2"><strong>Hello</strong> &lt;world&gt;</p>'
    >>> render_plain_text("**Hello** [world](https://example.com)")
    'Hello world'

    >>> # Or use the MarkupRenderer class with a fixed config
    >>> from snakk_markup import MarkupRenderer, RenderConfig
    >>> renderer = MarkupRenderer(config=RenderConfig(paragraph_class=""))
    >>> renderer("*hi*")
    '<p><em>hi</em></p>'
"""

from snakk_markup.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from snakk_markup.errors import ConfigError, RenderError, SnakkMarkupError
from snakk_markup.renderers.html import HtmlRenderer
from snakk_markup.renderers.plain import PlainTextRenderer
from snakk_markup.renderers.protocol import TextRenderer

__version__ = "0.1.0"


def render_html(markup: str | None) -> str:
    """Render markup to sanitized HTML using the active context config.

    Args:
        markup: Untrusted markup; None and "" render as ""

    Returns:
        HTML string. Embed it as-is: it is already escaped, and must not be
        passed back through this function.

    Example:
        >>> render_html("[a](javascript:alert(1))")
        '<p class="my-2">[a](javascript:alert(1))</p>'
    """
    return HtmlRenderer().render(markup)


def render_plain_text(markup: str | None) -> str:
    """Render markup to plain text with all dialect markers removed.

    The result is raw text; escape it before placing it in HTML.
    """
    return PlainTextRenderer().render(markup)


def make_snippet(markup: str | None, max_chars: int | None = None) -> str:
    """Single-line plain-text excerpt for quoted replies and reports.

    Args:
        markup: Untrusted markup
        max_chars: Maximum length including "..."; defaults to
            RenderConfig.snippet_length (100)

    Example:
        >>> make_snippet("**Long** post " * 20, max_chars=20)
        'Long post Long...'
    """
    return PlainTextRenderer().snippet(markup, max_chars)


def render_preview(markup: str | None) -> str:
    """Render the editor live-preview fragment."""
    return HtmlRenderer().render_preview(markup)


class MarkupRenderer:
    """High-level renderer combining the HTML and plain-text renderers.

    Usage:
        >>> renderer = MarkupRenderer()
        >>> renderer.to_html("- a\\n- b")
        '<ul class="list-disc list-inside my-2"><li>a</li><li>b</li></ul>'
        >>> renderer.to_plain_text("- a\\n- b")
        'a\\nb'

    Thread Safety:
        Holds only immutable configuration. Safe to share one instance
        across threads (e.g. as an application-wide singleton).

    """

    __slots__ = ("_html", "_plain")

    def __init__(self, *, config: RenderConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Fixed configuration; None reads the context config per call
        """
        self._html = HtmlRenderer(config)
        self._plain = PlainTextRenderer(config)

    @property
    def config(self) -> RenderConfig:
        return self._html.config

    def __call__(self, markup: str | None) -> str:
        """Render markup to HTML in one call."""
        return self._html.render(markup)

    def to_html(self, markup: str | None) -> str:
        return self._html.render(markup)

    def to_plain_text(self, markup: str | None) -> str:
        return self._plain.render(markup)

    def snippet(self, markup: str | None, max_chars: int | None = None) -> str:
        return self._plain.snippet(markup, max_chars)

    def preview(self, markup: str | None) -> str:
        return self._html.render_preview(markup)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "render_html",
    "render_plain_text",
    "make_snippet",
    "render_preview",
    # High-level
    "MarkupRenderer",
    # Renderers
    "HtmlRenderer",
    "PlainTextRenderer",
    "TextRenderer",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "SnakkMarkupError",
    "ConfigError",
    "RenderError",
]
