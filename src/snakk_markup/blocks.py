"""Line classification and block assembly.

The block pass runs after the inline stage, on escaped text in which every
code span and code block is already a marker, so code content can never be
mistaken for quote or list syntax.

Each line is classified once, then fed through a small state machine:

    state \\ line     BLANK   CODE    TEXT        QUOTE          *_ITEM
    NONE              -       emit    open        open           open
    IN_PARAGRAPH      close   close   append      close, open    close, open
    IN_BLOCKQUOTE     close   close   close,open  append         close, open
    IN_*_LIST         close   close   close,open  close, open    append if same style

A line starting with "&gt;" (an escaped ">") is a quote line even when its
content looks like a list item.

Thread Safety:
BlockAssembler instances are local to each render call.

"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from snakk_markup.segments import SegmentTable

QUOTE_PATTERN = re.compile(r"&gt;[ \t]*(.*)")
UNORDERED_ITEM_PATTERN = re.compile(r"[-*][ \t]+(\S.*)")
ORDERED_ITEM_PATTERN = re.compile(r"\d{1,9}\.[ \t]+(\S.*)")


class LineKind(Enum):
    """Classification of a single source line."""

    BLANK = auto()  # empty or whitespace only
    TEXT = auto()  # paragraph text
    QUOTE = auto()  # &gt; quoted
    UNORDERED_ITEM = auto()  # - item / * item
    ORDERED_ITEM = auto()  # 1. item
    CODE = auto()  # a fenced code block marker on its own


class BlockState(Enum):
    """States of the block assembler."""

    NONE = auto()
    IN_PARAGRAPH = auto()
    IN_BLOCKQUOTE = auto()
    IN_UNORDERED_LIST = auto()
    IN_ORDERED_LIST = auto()


class BlockKind(Enum):
    PARAGRAPH = auto()
    BLOCKQUOTE = auto()
    UNORDERED_LIST = auto()
    ORDERED_LIST = auto()
    CODE = auto()


@dataclass(frozen=True, slots=True)
class Line:
    """A classified line; content has its marker syntax removed."""

    kind: LineKind
    content: str


@dataclass(frozen=True, slots=True)
class Block:
    """A finished block.

    Attributes:
        kind: Block type
        lines: Paragraph/quote lines, list items, or the code block marker
    """

    kind: BlockKind
    lines: tuple[str, ...]


_STATE_FOR_KIND: dict[LineKind, BlockState] = {
    LineKind.BLANK: BlockState.NONE,
    LineKind.CODE: BlockState.NONE,
    LineKind.TEXT: BlockState.IN_PARAGRAPH,
    LineKind.QUOTE: BlockState.IN_BLOCKQUOTE,
    LineKind.UNORDERED_ITEM: BlockState.IN_UNORDERED_LIST,
    LineKind.ORDERED_ITEM: BlockState.IN_ORDERED_LIST,
}

_BLOCK_FOR_STATE: dict[BlockState, BlockKind] = {
    BlockState.IN_PARAGRAPH: BlockKind.PARAGRAPH,
    BlockState.IN_BLOCKQUOTE: BlockKind.BLOCKQUOTE,
    BlockState.IN_UNORDERED_LIST: BlockKind.UNORDERED_LIST,
    BlockState.IN_ORDERED_LIST: BlockKind.ORDERED_LIST,
}


def classify_line(line: str) -> Line:
    """Classify one escaped line. Quote wins over list markers."""
    if not line.strip():
        return Line(LineKind.BLANK, "")
    if match := QUOTE_PATTERN.match(line):
        return Line(LineKind.QUOTE, match.group(1))
    if match := UNORDERED_ITEM_PATTERN.match(line):
        return Line(LineKind.UNORDERED_ITEM, match.group(1))
    if match := ORDERED_ITEM_PATTERN.match(line):
        return Line(LineKind.ORDERED_ITEM, match.group(1))
    return Line(LineKind.TEXT, line)


def strip_list_marker(line: str) -> str:
    """Remove a leading list marker, if any."""
    match = UNORDERED_ITEM_PATTERN.match(line) or ORDERED_ITEM_PATTERN.match(line)
    return match.group(1) if match else line


def strip_quote_markers(line: str) -> str:
    """Remove every leading quote marker ("&gt; &gt; x" -> "x")."""
    while match := QUOTE_PATTERN.match(line):
        line = match.group(1)
    return line


def transition(state: BlockState, kind: LineKind) -> tuple[BlockState, bool]:
    """Compute the next state for a line.

    Returns:
        (next_state, close_current): close_current is True when the block
        being built must be finished before the line is handled.
    """
    target = _STATE_FOR_KIND[kind]
    return target, state is not BlockState.NONE and target is not state


def scan_lines(text: str, table: SegmentTable) -> Iterator[Line]:
    """Split working text into classified lines.

    A text line holding a fenced code block marker is split around it, so
    the code block becomes a block of its own. Quote and list lines keep
    their code blocks nested.
    """
    for raw in text.split("\n"):
        line = classify_line(raw)
        if line.kind is not LineKind.TEXT or not table.has_code_block(raw):
            yield line
            continue
        for piece, is_code_block in table.split_code_blocks(raw):
            if is_code_block:
                yield Line(LineKind.CODE, piece)
            elif piece.strip():
                yield Line(LineKind.TEXT, piece.strip())


class BlockAssembler:
    """State machine grouping classified lines into blocks.

    Usage:
        >>> assembler = BlockAssembler()
        >>> for line in (classify_line("- a"), classify_line("- b")):
        ...     assembler.feed(line)
        >>> assembler.finish()
        [Block(kind=<BlockKind.UNORDERED_LIST: 3>, lines=('a', 'b'))]

    """

    __slots__ = ("_blocks", "_lines", "_state")

    def __init__(self) -> None:
        self._state = BlockState.NONE
        self._lines: list[str] = []
        self._blocks: list[Block] = []

    @property
    def state(self) -> BlockState:
        return self._state

    def feed(self, line: Line) -> None:
        next_state, close = transition(self._state, line.kind)
        if close:
            self._close()
        if line.kind is LineKind.CODE:
            self._blocks.append(Block(BlockKind.CODE, (line.content,)))
        elif next_state is not BlockState.NONE:
            self._lines.append(line.content)
        self._state = next_state

    def finish(self) -> list[Block]:
        """Close any open block and return all blocks in order."""
        if self._state is not BlockState.NONE:
            self._close()
            self._state = BlockState.NONE
        return self._blocks

    def _close(self) -> None:
        self._blocks.append(Block(_BLOCK_FOR_STATE[self._state], tuple(self._lines)))
        self._lines = []


def assemble_blocks(text: str, table: SegmentTable) -> list[Block]:
    """Run the block pass over working text."""
    assembler = BlockAssembler()
    for line in scan_lines(text, table):
        assembler.feed(line)
    return assembler.finish()
