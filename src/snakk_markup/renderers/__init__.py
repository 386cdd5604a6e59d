"""snakk-markup renderers.

Renderers turn raw forum markup into an output format.

Available Renderers:
- HtmlRenderer: Renders markup to sanitized HTML
- PlainTextRenderer: Renders markup to plain text for previews and snippets

Thread Safety:
All renderers keep per-call state local to each render() call.
Safe for concurrent use from multiple threads.

"""

from snakk_markup.renderers.html import HtmlRenderer
from snakk_markup.renderers.plain import PlainTextRenderer
from snakk_markup.renderers.protocol import TextRenderer

__all__ = ["HtmlRenderer", "PlainTextRenderer", "TextRenderer"]
