"""ContextVar-based render configuration for snakk-markup.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A MarkupRenderer carries its own RenderConfig; the module-level helpers
(render_html, render_plain_text, ...) read the config of the current context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Module-level helpers use the active context config
    from snakk_markup import render_html
    html = render_html("**hi**")

    # Temporarily swap the config
    from snakk_markup.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(paragraph_class="")):
        html = render_html("plain paragraph")

"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from snakk_markup.errors import ConfigError
from snakk_markup.utils.logger import get_logger

logger = get_logger(__name__)

# Characters that could end a double-quoted attribute or open a tag.
_UNSAFE_CLASS_CHARS = re.compile(r"[\"'<>&`\x00-\x1f\x7f]")
_SCHEME = re.compile(r"[a-z][a-z0-9+.-]*")

_CLASS_FIELDS = (
    "paragraph_class",
    "code_block_class",
    "inline_code_class",
    "link_class",
    "blockquote_class",
    "unordered_list_class",
    "ordered_list_class",
    "preview_class",
    "empty_preview_class",
)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).
    Defaults reproduce the forum theme (Tailwind + daisyUI utility classes).
    An empty class string omits the class attribute altogether.

    Attributes:
        paragraph_class: Classes for <p> paragraphs
        code_block_class: Classes for fenced code <pre> elements
        inline_code_class: Classes for inline <code> spans
        link_class: Classes for <a> links
        blockquote_class: Classes for <blockquote> elements
        unordered_list_class: Classes for <ul> lists
        ordered_list_class: Classes for <ol> lists
        allowed_schemes: Absolute URL schemes accepted as link destinations
        allow_root_relative_links: Accept "/path" destinations
        preview_class: Classes for the live-preview wrapper <div>
        empty_preview_class: Classes for the "nothing to preview" notice
        empty_preview_text: Text shown when a preview request is blank
        snippet_length: Default maximum length of make_snippet() output

    """

    paragraph_class: str = "my-2"
    code_block_class: str = "bg-base-200 p-3 rounded-lg overflow-x-auto my-2"
    inline_code_class: str = "bg-base-200 px-1 rounded"
    link_class: str = "link link-primary"
    blockquote_class: str = "border-l-4 border-primary pl-4 my-2 italic text-base-content/80"
    unordered_list_class: str = "list-disc list-inside my-2"
    ordered_list_class: str = "list-decimal list-inside my-2"
    allowed_schemes: frozenset[str] = frozenset(("http", "https", "mailto"))
    allow_root_relative_links: bool = True
    preview_class: str = "prose prose-sm max-w-none"
    empty_preview_class: str = "text-base-content/50 italic"
    empty_preview_text: str = "Nothing to preview"
    snippet_length: int = 100

    def __post_init__(self) -> None:
        for name in _CLASS_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(name, f"expected a string, got {type(value).__name__}")
            if _UNSAFE_CLASS_CHARS.search(value):
                raise ConfigError(name, f"unsafe character in class list {value!r}")

        if isinstance(self.allowed_schemes, str):
            raise ConfigError("allowed_schemes", "expected a collection of schemes, got a string")
        schemes = frozenset(s.lower().rstrip(":") for s in self.allowed_schemes)
        if not schemes and not self.allow_root_relative_links:
            raise ConfigError("allowed_schemes", "no link destination would ever be accepted")
        for scheme in schemes:
            if not _SCHEME.fullmatch(scheme):
                raise ConfigError("allowed_schemes", f"invalid scheme {scheme!r}")
        # Frozen dataclass: normalized value is written through object.__setattr__
        object.__setattr__(self, "allowed_schemes", schemes)

        if self.snippet_length < 1:
            raise ConfigError("snippet_length", "must be a positive integer")

    @classmethod
    def from_dict(cls, config_dict: dict) -> RenderConfig:
        """Create RenderConfig from dictionary.

        Useful for framework integration where config comes from settings
        files or environment-driven dictionaries.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are ignored (and logged at DEBUG level).

        Args:
            config_dict: Dictionary with config values. Keys should match
                RenderConfig attribute names.

        Returns:
            New RenderConfig instance with values from dict.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "link_class": "link",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.link_class
            'link'

        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(k for k in config_dict if k not in valid_fields)
        if unknown:
            logger.debug("Ignoring unknown render config keys: %s", ", ".join(unknown))
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "allowed_schemes" in filtered and not isinstance(filtered["allowed_schemes"], str):
            filtered["allowed_schemes"] = frozenset(filtered["allowed_schemes"])
        return cls(**filtered)


# Shared default; RenderConfig is frozen
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

# Per-context active config (threads and asyncio tasks each see their own)
_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Return the config used by render_html and render_plain_text here."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Make ``config`` the active config for the current context only."""
    _render_config.set(config)


def reset_render_config() -> None:
    """Go back to the default config in the current context."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Render with ``config`` inside the block.

    The config that was active on entry comes back on exit, including when
    the block raises. Contexts nest.

    Example:
        >>> with render_config_context(RenderConfig(link_class="")):
        ...     html = render_html("[a](https://example.com)")

    """
    token = _render_config.set(config)
    try:
        yield
    finally:
        _render_config.reset(token)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
