"""Plain-text renderer: markup with all dialect syntax removed.

Used for notification text, quoted-reply snippets and report previews.
Runs the same inline and block stages as the HTML renderer, so the two
outputs always agree on what counts as markup, then emits only text.

Example:
    >>> from snakk_markup import render_plain_text
    >>> render_plain_text("> **Hi** [there](https://example.com)")
    'Hi there'

The output is raw text, not HTML: escape it before embedding it in a page.
"""

from __future__ import annotations

from snakk_markup.blocks import BlockKind, assemble_blocks, strip_list_marker, strip_quote_markers
from snakk_markup.config import RenderConfig, get_render_config
from snakk_markup.inline import prepare_text
from snakk_markup.segments import CodeBlock, CodeSpan, Emphasis, Link, Segment, SegmentTable, Strong
from snakk_markup.utils.text import collapse_whitespace, truncate_at_word, unescape_html


class PlainTextRenderer:
    """Render markup to readable plain text.

    Thread Safety:
        Stateless apart from the optional fixed config; safe to share.
    """

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> RenderConfig:
        return self._config if self._config is not None else get_render_config()

    def render(self, markup: str | None) -> str:
        """Strip dialect markers, keeping the reading text.

        Code keeps its content and links keep their text. Quote and list
        markers are dropped, including nested quote markers and list
        markers inside quotes. Lines of a block are joined by a newline,
        blocks by a blank line.
        """
        if not markup:
            return ""
        text, table = prepare_text(markup, self.config)

        out: list[str] = []
        for block in assemble_blocks(text, table):
            lines = block.lines
            if block.kind is BlockKind.BLOCKQUOTE:
                lines = tuple(strip_list_marker(strip_quote_markers(line)) for line in lines)
            rendered = "\n".join(self._render_inline(line, table) for line in lines)
            if rendered.strip():
                out.append(rendered)
        return unescape_html("\n\n".join(out)).strip()

    def snippet(self, markup: str | None, max_chars: int | None = None) -> str:
        """Single-line excerpt, cut at a word boundary.

        Args:
            markup: Untrusted markup
            max_chars: Maximum length including the "..." suffix
                (defaults to config.snippet_length)
        """
        limit = max_chars if max_chars is not None else self.config.snippet_length
        return truncate_at_word(collapse_whitespace(self.render(markup)), limit)

    def _render_inline(self, text: str, table: SegmentTable) -> str:
        def render_segment(segment: Segment) -> str:
            match segment:
                case CodeBlock(code=code) | CodeSpan(code=code):
                    return code
                case Strong(inner=inner) | Emphasis(inner=inner):
                    return table.expand(inner, render_segment)
                case Link(label=label):
                    return table.expand(label, render_segment)
                case _:
                    return ""

        return table.expand(text, render_segment)
