"""Chunker: split Re:VIEW text into typed runs of lines.

Each physical line is classified once, top to bottom, and grouped with its
neighbours into a :class:`Chunk`.  Blank lines separate chunks and belong to
none of them.  Comment lines (``#@#`` / ``#@warn(...)``) never break the
chunk they appear in; on their own they form one-line Comment chunks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from reviewlint.errors import UnterminatedBlockError
from reviewlint.models import Chunk, ChunkType, Line

logger = logging.getLogger(__name__)

LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
LINE_ENDING_RE = re.compile(r"\r?\n$")

COMMENT_RE = re.compile(r"^#@(?:#|warn\()")
BLOCK_OPEN_RE = re.compile(r"^//(\w+)")
BLOCK_CLOSE = "//}"
UNORDERED_ITEM_RE = re.compile(r"^\s+\*+\s+")
ORDERED_ITEM_RE = re.compile(r"^\s+\d+\.\s+")
DEFINITION_TERM_RE = re.compile(r"^\s+:\s+")
CONTINUATION_RE = re.compile(r"^\s+\S")

_LIST_RULES: tuple[tuple[re.Pattern[str], ChunkType], ...] = (
    (UNORDERED_ITEM_RE, ChunkType.UNORDERED_LIST),
    (ORDERED_ITEM_RE, ChunkType.ORDERED_LIST),
    (DEFINITION_TERM_RE, ChunkType.DEFINITION_LIST),
)

# Open chunks that absorb comment lines instead of yielding to a Comment chunk.
_COMMENT_ABSORBING = {
    ChunkType.PARAGRAPH,
    ChunkType.UNORDERED_LIST,
    ChunkType.ORDERED_LIST,
    ChunkType.DEFINITION_LIST,
}


def split_lines(text: str) -> list[Line]:
    """Split *text* into :class:`Line` objects, keeping line endings in ``raw``."""
    lines: list[Line] = []
    start_index = 0
    for number, match in enumerate(LINE_RE.finditer(text), start=1):
        raw = match.group(0)
        body = LINE_ENDING_RE.sub("", raw)
        lines.append(
            Line(
                raw=raw,
                text=body,
                line_number=number,
                start_index=start_index,
                is_comment=bool(COMMENT_RE.match(body)),
            )
        )
        start_index += len(raw)
    return lines


def is_blank(line: Line) -> bool:
    return not line.text.strip()


@dataclass
class _Session:
    """Mutable state of one chunking pass."""

    chunks: list[Chunk] = field(default_factory=list)
    current: Chunk | None = None

    def flush(self) -> None:
        self.current = None

    def start(self, chunk_type: ChunkType, line: Line, keep_open: bool = True) -> Chunk:
        self.flush()
        chunk = Chunk(type=chunk_type, lines=[line])
        self.chunks.append(chunk)
        if keep_open:
            self.current = chunk
        return chunk

    def is_open(self, chunk_type: ChunkType) -> bool:
        return self.current is not None and self.current.type == chunk_type

    def feed(self, line: Line) -> None:
        # comments never break a chunk
        if line.is_comment:
            if self.current is not None and (
                self.current.type == ChunkType.BLOCK
                or self.current.type in _COMMENT_ABSORBING
            ):
                self.current.lines.append(line)
            else:
                self.chunks.append(Chunk(type=ChunkType.COMMENT, lines=[line]))
            return

        # block body
        if self.is_open(ChunkType.BLOCK):
            self.current.lines.append(line)
            if line.text.startswith(BLOCK_CLOSE):
                self.flush()
            return

        # block open
        if BLOCK_OPEN_RE.match(line.text):
            multiline = line.text.endswith("{")
            chunk = self.start(ChunkType.BLOCK, line, keep_open=multiline)
            chunk.multiline = multiline
            return

        if line.text.startswith("="):
            self.start(ChunkType.HEADING, line, keep_open=False)
            return

        for pattern, chunk_type in _LIST_RULES:
            if pattern.match(line.text):
                if self.is_open(chunk_type):
                    self.current.lines.append(line)
                else:
                    self.start(chunk_type, line)
                return

        # continuation line of a definition
        if self.is_open(ChunkType.DEFINITION_LIST) and CONTINUATION_RE.match(line.text):
            self.current.lines.append(line)
            return

        if is_blank(line):
            self.flush()
            return

        if self.is_open(ChunkType.PARAGRAPH):
            self.current.lines.append(line)
        else:
            self.start(ChunkType.PARAGRAPH, line)


def parse_as_chunks(text: str) -> list[Chunk]:
    """Parse *text* and return its chunks in document order.

    Raises :class:`UnterminatedBlockError` when a multi-line block is still
    open at the end of the document.
    """
    session = _Session()
    for line in split_lines(text):
        session.feed(line)

    if session.is_open(ChunkType.BLOCK):
        first = session.current.first_line
        name = BLOCK_OPEN_RE.match(first.text).group(1)
        raise UnterminatedBlockError(name, first.line_number)

    for chunk in session.chunks:
        chunk.raw = text[chunk.start_index:chunk.end_index]

    logger.debug("Chunked %d characters into %d chunks", len(text), len(session.chunks))
    return session.chunks
