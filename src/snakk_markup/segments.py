"""Shielded segments for snakk-markup.

Spans that later stages must not touch (code, finished links, emphasis) are
moved into a SegmentTable. The working text keeps an opaque marker in their
place: NUL, the segment index, NUL. escape_html() replaces every NUL in the
input, so a marker can only ever come from the table itself and user text
such as "{{CODE_BLOCK_0}}" is just text.

Segment Hierarchy:
Segment (base)
├── CodeBlock   fenced code, may span lines
├── CodeSpan    inline code
├── Strong      **x** / __x__
├── Emphasis    *x* / _x_
└── Link        [label](destination)

Thread Safety:
Segments are frozen. A SegmentTable is created per render call.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

MARKER_PATTERN = re.compile(r"\x00(\d+)\x00")


@dataclass(frozen=True, slots=True)
class Segment:
    """Base class for shielded segments."""


@dataclass(frozen=True, slots=True)
class CodeBlock(Segment):
    """Fenced code block.

    Attributes:
        code: Escaped code body, surrounding blank lines trimmed
        language: Language hint from the opening fence, if any
    """

    code: str
    language: str | None = None


@dataclass(frozen=True, slots=True)
class CodeSpan(Segment):
    """Inline code; code is already escaped."""

    code: str


@dataclass(frozen=True, slots=True)
class Strong(Segment):
    """Strong emphasis; inner may contain markers."""

    inner: str


@dataclass(frozen=True, slots=True)
class Emphasis(Segment):
    """Emphasis; inner may contain markers."""

    inner: str


@dataclass(frozen=True, slots=True)
class Link(Segment):
    """Link written as [label](destination).

    Attributes:
        label: Escaped link text, may contain markers
        destination: Escaped destination exactly as written
        href: Encoded, escaped href, or None when the destination was rejected
    """

    label: str
    destination: str
    href: str | None = None


class SegmentTable:
    """Ordered store of shielded segments for one render call.

    Usage:
        >>> table = SegmentTable()
        >>> marker = table.add(CodeSpan("x"))
        >>> table.expand(f"a {marker} b", lambda seg: "<code>x</code>")
        'a <code>x</code> b'

    """

    __slots__ = ("_segments",)

    def __init__(self) -> None:
        self._segments: list[Segment] = []

    def add(self, segment: Segment) -> str:
        """Store a segment and return the marker that stands in for it."""
        self._segments.append(segment)
        return f"\x00{len(self._segments) - 1}\x00"

    def get(self, index: int) -> Segment:
        return self._segments[index]

    def expand(self, text: str, render: Callable[[Segment], str]) -> str:
        """Replace every marker in text with render(segment).

        render is responsible for expanding markers nested inside the
        segment (Strong.inner, Link.label, ...).
        """
        if "\x00" not in text:
            return text
        return MARKER_PATTERN.sub(lambda m: render(self._segments[int(m.group(1))]), text)

    def split_code_blocks(self, text: str) -> Iterator[tuple[str, bool]]:
        """Split text around CodeBlock markers.

        Yields (piece, is_code_block) pairs in order, where a code block piece
        is the bare marker. Markers for other segment types stay inside the
        text pieces.
        """
        pos = 0
        for match in MARKER_PATTERN.finditer(text):
            if not isinstance(self._segments[int(match.group(1))], CodeBlock):
                continue
            if match.start() > pos:
                yield text[pos : match.start()], False
            yield match.group(0), True
            pos = match.end()
        if pos < len(text):
            yield text[pos:], False

    def has_code_block(self, text: str) -> bool:
        return any(
            isinstance(self._segments[int(m.group(1))], CodeBlock)
            for m in MARKER_PATTERN.finditer(text)
        )

    def __len__(self) -> int:
        return len(self._segments)
