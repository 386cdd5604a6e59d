"""HTML renderer for forum markup.

Renders the markup dialect to sanitized HTML using HtmlBuilder.

Pipeline:
    markup -> prepare_text()    escape + shield code, links, emphasis
           -> assemble_blocks() paragraphs, quotes, lists, code blocks
           -> HtmlBuilder       block elements, segments expanded in place

Only elements the renderer builds itself reach the output; all input text
was escaped before any pattern ran.

Thread Safety:
All per-render state (segment table, builder, assembler) is created fresh
for each render() call. Multiple threads can safely share a single
HtmlRenderer instance and call render() concurrently.
"""

from __future__ import annotations

from snakk_markup.blocks import Block, BlockKind, assemble_blocks
from snakk_markup.builder import HtmlBuilder, start_tag, wrap
from snakk_markup.config import RenderConfig, get_render_config
from snakk_markup.inline import prepare_text
from snakk_markup.segments import CodeBlock, CodeSpan, Emphasis, Link, Segment, SegmentTable, Strong
from snakk_markup.utils.text import escape_html

LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"


class HtmlRenderer:
    """Render markup to HTML.

    Usage:
        >>> renderer = HtmlRenderer()
        >>> renderer.render("**Hello** world")
        '<p class="my-2"><strong>Hello</strong> world</p>'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        When constructed without a config, each call reads the config of
        the calling context.
    """

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Fixed configuration; None reads get_render_config() per call
        """
        self._config = config

    @property
    def config(self) -> RenderConfig:
        return self._config if self._config is not None else get_render_config()

    def render(self, markup: str | None) -> str:
        """Render markup to an HTML fragment.

        Args:
            markup: Untrusted markup; None and "" render as ""

        Returns:
            HTML string, safe to embed without further escaping
        """
        if not markup:
            return ""
        config = self.config
        text, table = prepare_text(markup, config)

        hb = HtmlBuilder()
        for block in assemble_blocks(text, table):
            self._render_block(block, hb, table, config)
        return hb.build()

    def render_preview(self, markup: str | None) -> str:
        """Render the live-preview fragment for the post editor.

        Blank input yields the "nothing to preview" notice instead of an
        empty wrapper.
        """
        config = self.config
        html = self.render(markup) if markup and markup.strip() else ""
        if not html:
            return wrap("p", escape_html(config.empty_preview_text), config.empty_preview_class)
        return wrap("div", html, config.preview_class)

    def _render_block(
        self, block: Block, hb: HtmlBuilder, table: SegmentTable, config: RenderConfig
    ) -> None:
        """Render a block node."""
        lines = [self._render_inline(line, table, config) for line in block.lines]
        match block.kind:
            case BlockKind.PARAGRAPH:
                self._render_lines("p", lines, hb, config.paragraph_class)
            case BlockKind.BLOCKQUOTE:
                self._render_lines("blockquote", lines, hb, config.blockquote_class)
            case BlockKind.UNORDERED_LIST:
                self._render_list("ul", lines, hb, config.unordered_list_class)
            case BlockKind.ORDERED_LIST:
                self._render_list("ol", lines, hb, config.ordered_list_class)
            case BlockKind.CODE:
                hb.append("".join(lines))

    def _render_lines(self, tag: str, lines: list[str], hb: HtmlBuilder, css_class: str) -> None:
        """Render lines joined by soft breaks inside one element."""
        hb.open(tag, css_class)
        for i, line in enumerate(lines):
            if i:
                hb.void("br")
            hb.append(line)
        hb.close(tag)

    def _render_list(self, tag: str, items: list[str], hb: HtmlBuilder, css_class: str) -> None:
        hb.open(tag, css_class)
        for item in items:
            hb.element("li", item)
        hb.close(tag)

    def _render_inline(self, text: str, table: SegmentTable, config: RenderConfig) -> str:
        """Expand segment markers in a line of working text."""

        def render_segment(segment: Segment) -> str:
            match segment:
                case CodeBlock(code=code, language=language):
                    code_class = f"language-{language}" if language else ""
                    return wrap("pre", wrap("code", code, code_class), config.code_block_class)
                case CodeSpan(code=code):
                    return wrap("code", code, config.inline_code_class)
                case Strong(inner=inner):
                    return wrap("strong", table.expand(inner, render_segment))
                case Emphasis(inner=inner):
                    return wrap("em", table.expand(inner, render_segment))
                case Link(label=label, href=str() as href):
                    return (
                        start_tag("a", config.link_class, href=href, target=LINK_TARGET, rel=LINK_REL)
                        + table.expand(label, render_segment)
                        + "</a>"
                    )
                case Link(label=label, destination=destination):
                    # Rejected destination: print the source text back
                    return f"[{table.expand(label, render_segment)}]({destination})"
                case _:
                    return ""

        return table.expand(text, render_segment)
