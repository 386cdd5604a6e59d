"""TextRenderer protocol: stable interface for markup renderers.

Any renderer that implements ``render(markup) -> str`` conforms to this
protocol. ``HtmlRenderer`` and ``PlainTextRenderer`` are the built-in
implementations.

Example:
    from snakk_markup.renderers.protocol import TextRenderer

    def render_post(renderer: TextRenderer, content: str) -> str:
        return renderer.render(content)

"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextRenderer(Protocol):
    """Protocol for markup renderers.

    Implementations must accept raw markup (or None) and return a string,
    never raising for malformed input.

    """

    def render(self, markup: str | None) -> str:
        """Render raw markup.

        Args:
            markup: Untrusted markup source; None renders as "".

        Returns:
            Rendered string output.

        """
        ...
