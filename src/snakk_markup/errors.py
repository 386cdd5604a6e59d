"""Exception classes for snakk-markup.

Rendering itself never raises: every malformed construct has a literal-text
fallback. Exceptions are reserved for programmer errors such as an invalid
RenderConfig.
"""

from __future__ import annotations


class SnakkMarkupError(Exception):
    """Base exception for all snakk-markup errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(SnakkMarkupError):
    """Internal renderer invariant violated.

    Raised by HtmlBuilder when asked to emit an element or attribute outside
    its allow-list, or to close an element that is not open. Malformed
    markup never triggers it.
    """

    pass


class ConfigError(SnakkMarkupError):
    """Invalid render configuration.

    Raised when a RenderConfig value could break out of the attribute it
    is written into, or leaves the renderer unable to work.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending RenderConfig field
            message: Description of the problem
        """
        self.field = field
        self.message = message
        super().__init__(f"RenderConfig.{field}: {message}")
