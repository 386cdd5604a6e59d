"""HtmlBuilder for O(n) accumulation of balanced, allow-listed HTML.

Appends to a list, joins once at the end. Unlike a plain string builder it
only knows the renderer's own elements and attributes, quotes every
attribute value through escape_html(), and tracks open tags so the output
is always balanced.

Thread Safety:
HtmlBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

from snakk_markup.errors import RenderError
from snakk_markup.utils.text import escape_html

ALLOWED_TAGS: frozenset[str] = frozenset(
    {"a", "blockquote", "br", "code", "div", "em", "li", "ol", "p", "pre", "strong", "ul"}
)
ALLOWED_ATTRIBUTES: frozenset[str] = frozenset({"class", "href", "rel", "target"})
VOID_TAGS: frozenset[str] = frozenset({"br"})


def start_tag(tag: str, css_class: str = "", **attrs: str) -> str:
    """Build a start tag.

    Args:
        tag: Allow-listed element name
        css_class: Class list; omitted when empty
        **attrs: Allow-listed attributes, values unescaped

    Returns:
        The start tag, attribute values escaped

    Raises:
        RenderError: Tag or attribute outside the allow-list
    """
    if tag not in ALLOWED_TAGS:
        raise RenderError(f"element <{tag}> is not allow-listed")
    parts = [f"<{tag}"]
    for name, value in attrs.items():
        if name not in ALLOWED_ATTRIBUTES:
            raise RenderError(f"attribute {name!r} is not allow-listed")
        parts.append(f' {name}="{escape_html(value)}"')
    if css_class:
        parts.append(f' class="{escape_html(css_class)}"')
    parts.append(">")
    return "".join(parts)


def wrap(tag: str, inner: str, css_class: str = "", **attrs: str) -> str:
    """Wrap trusted inner HTML in an element."""
    return f"{start_tag(tag, css_class, **attrs)}{inner}</{tag}>"


class HtmlBuilder:
    """Accumulate HTML with open/close tracking.

    Usage:
        >>> hb = HtmlBuilder()
        >>> _ = hb.open("p").append("Hello").void("br").append("World").close("p")
        >>> hb.build()
        '<p>Hello<br>World</p>'

    """

    __slots__ = ("_open", "_parts")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._open: list[str] = []

    def open(self, tag: str, css_class: str = "", **attrs: str) -> HtmlBuilder:
        """Append a start tag and remember it as open."""
        self._parts.append(start_tag(tag, css_class, **attrs))
        if tag not in VOID_TAGS:
            self._open.append(tag)
        return self

    def close(self, tag: str) -> HtmlBuilder:
        """Close the innermost open element.

        Raises:
            RenderError: tag is not the innermost open element
        """
        if not self._open or self._open[-1] != tag:
            current = self._open[-1] if self._open else None
            raise RenderError(f"cannot close <{tag}>, innermost open element is {current!r}")
        self._open.pop()
        self._parts.append(f"</{tag}>")
        return self

    def void(self, tag: str) -> HtmlBuilder:
        if tag not in VOID_TAGS:
            raise RenderError(f"<{tag}> is not a void element")
        self._parts.append(start_tag(tag))
        return self

    def append(self, html: str) -> HtmlBuilder:
        """Append trusted, already-escaped HTML (empty strings are skipped)."""
        if html:
            self._parts.append(html)
        return self

    def element(self, tag: str, inner: str, css_class: str = "", **attrs: str) -> HtmlBuilder:
        """Append a complete element around trusted inner HTML."""
        return self.open(tag, css_class, **attrs).append(inner).close(tag)

    def build(self) -> str:
        """Close anything still open and join all parts."""
        while self._open:
            self._parts.append(f"</{self._open.pop()}>")
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
