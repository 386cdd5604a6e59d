"""Inline stage of the markup pipeline.

Runs on escaped text and moves every recognized span into a SegmentTable,
in this order:

1. Fenced code (```...```), possibly spanning lines
2. Inline code (`...`)
3. Links ([label](destination)), validated against the config
4. Strong emphasis (***), strong (** then __), then emphasis (* then _)

Code is shielded first so nothing later can see inside it. Links run
before emphasis so delimiters inside a URL are never treated as
formatting. Every match becomes one atomic marker: a later pattern can
wrap it but never split it, so emitted tags always nest properly. Links
and emphasis never wrap a fenced code block; those stay block level.

Patterns are single-line (except fenced code) and span lengths are
capped, which keeps matching near-linear on hostile input.

Thread Safety:
Module-level compiled patterns are immutable. All state lives in the
SegmentTable passed in by the caller.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from snakk_markup.segments import CodeBlock, CodeSpan, Emphasis, Link, SegmentTable, Strong
from snakk_markup.urls import encode_url, is_safe_url
from snakk_markup.utils.text import escape_html, normalize_newlines, unescape_html

if TYPE_CHECKING:
    from snakk_markup.config import RenderConfig

_MAX_SPAN = 2000

FENCED_CODE_PATTERN = re.compile(r"```(.*?)```", re.DOTALL)
# A span never swallows a fenced code marker.
INLINE_CODE_PATTERN = re.compile(r"(?<!`)`([^`\n\x00]+)`(?!`)")
LANGUAGE_HINT_PATTERN = re.compile(r"[A-Za-z0-9_+#.-]{1,32}")

# Label: no brackets, no newline. Destination: no newline, no marker,
# one level of balanced parentheses, e.g. /wiki/Foo_(bar).
LINK_PATTERN = re.compile(
    r"\[([^\[\]\n]{1,%d})\]\(((?:[^()\n\x00]|\([^()\n\x00]*\))+)\)" % _MAX_SPAN
)

# Content must start and end with a non-space character. Underscore
# delimiters never open or close inside a word. A rule's kinds nest
# outermost first: ***x*** is strong around emphasis.
_EmphasisKind = type[Strong] | type[Emphasis]
_EMPHASIS_RULES: tuple[tuple[re.Pattern[str], tuple[_EmphasisKind, ...]], ...] = (
    (
        re.compile(r"(?<!\*)\*\*\*(?![\s*])(.{1,%d}?)(?<![\s*])\*\*\*(?!\*)" % _MAX_SPAN),
        (Strong, Emphasis),
    ),
    (re.compile(r"\*\*(?=\S)(.{1,%d}?)(?<=\S)\*\*" % _MAX_SPAN), (Strong,)),
    (re.compile(r"(?<!\w)__(?=\S)(.{1,%d}?)(?<=\S)__(?!\w)" % _MAX_SPAN), (Strong,)),
    (re.compile(r"(?<!\*)\*(?![\s*])(.{1,%d}?)(?<![\s*])\*(?!\*)" % _MAX_SPAN), (Emphasis,)),
    (re.compile(r"(?<!\w)_(?![\s_])(.{1,%d}?)(?<![\s_])_(?!\w)" % _MAX_SPAN), (Emphasis,)),
)


def prepare_text(markup: str, config: RenderConfig) -> tuple[str, SegmentTable]:
    """Escape markup and shield all inline constructs.

    Args:
        markup: Raw, untrusted markup
        config: Active render configuration (link policy)

    Returns:
        (working text, segment table). The working text is escaped and holds
        markers for every recognized inline construct.
    """
    table = SegmentTable()
    text = escape_html(normalize_newlines(markup))
    text = shield_code(text, table)
    text = shield_links(text, table, config)
    text = shield_emphasis(text, table)
    return text, table


def shield_code(text: str, table: SegmentTable) -> str:
    """Move fenced code blocks, then inline code spans, into the table."""

    def fenced(match: re.Match[str]) -> str:
        body = match.group(1)
        language = None
        if "\n" in body:
            first, rest = body.split("\n", 1)
            hint = first.strip()
            if hint and LANGUAGE_HINT_PATTERN.fullmatch(hint):
                language = hint
                body = rest
        return table.add(CodeBlock(code=_trim_code(body), language=language))

    def inline(match: re.Match[str]) -> str:
        return table.add(CodeSpan(code=match.group(1)))

    if "`" not in text:
        return text
    text = FENCED_CODE_PATTERN.sub(fenced, text)
    return INLINE_CODE_PATTERN.sub(inline, text)


def shield_links(text: str, table: SegmentTable, config: RenderConfig) -> str:
    """Move [label](destination) links into the table.

    Rejected destinations are still stored (with href=None) so the renderer
    can print them literally.
    """

    def link(match: re.Match[str]) -> str:
        label, destination = match.group(1), match.group(2)
        if table.has_code_block(label):
            return match.group(0)
        decoded = unescape_html(destination)
        if is_safe_url(
            decoded,
            config.allowed_schemes,
            allow_root_relative=config.allow_root_relative_links,
        ):
            return table.add(
                Link(label=shield_emphasis(label, table), destination=destination, href=encode_url(decoded))
            )
        return table.add(Link(label=label, destination=destination))

    if "](" not in text:
        return text
    return LINK_PATTERN.sub(link, text)


def shield_emphasis(text: str, table: SegmentTable, first_rule: int = 0) -> str:
    """Apply strong/emphasis rules in precedence order.

    The inner text of a match only receives the rules after the one that
    matched; earlier rules have already run over it as part of the outer text.
    """
    for index in range(first_rule, len(_EMPHASIS_RULES)):
        pattern, kinds = _EMPHASIS_RULES[index]

        def wrap(
            match: re.Match[str],
            kinds: tuple[_EmphasisKind, ...] = kinds,
            next_rule: int = index + 1,
        ) -> str:
            if table.has_code_block(match.group(1)):
                return match.group(0)
            marker = shield_emphasis(match.group(1), table, next_rule)
            for kind in reversed(kinds):
                marker = table.add(kind(inner=marker))
            return marker

        text = pattern.sub(wrap, text)
    return text


def _trim_code(body: str) -> str:
    """Drop blank lines around a code body, keeping first-line indentation."""
    body = body.rstrip()
    stripped = body.lstrip()
    leading = body[: len(body) - len(stripped)]
    if "\n" in leading:
        return body[leading.rfind("\n") + 1 :]
    return stripped
