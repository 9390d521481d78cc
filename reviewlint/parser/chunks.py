"""Chunk parsers: one builder per :class:`ChunkType`."""

from __future__ import annotations

import re
from typing import Callable

from reviewlint.errors import ReviewParseError
from reviewlint.models import Chunk, ChunkType, Line, Node, Syntax
from reviewlint.parser.blocks import create_paragraph, parse_block
from reviewlint.parser.chunker import (
    DEFINITION_TERM_RE,
    ORDERED_ITEM_RE,
    UNORDERED_ITEM_RE,
)
from reviewlint.parser.inline import parse_text
from reviewlint.parser.utils import (
    Context,
    create_comment_node_from_line,
    create_node_from_chunk,
    create_node_from_line,
    create_str_node,
)

ChunkParser = Callable[[Chunk], "Node | None"]

HEADING_RE = re.compile(r"^(=+)(?:\[[^\]]*\])?(?:\{[^}]*\})?\s*(.*)$")  # optional [column] and {id}
DEFINITION_PREFIX_RE = re.compile(rf"{DEFINITION_TERM_RE.pattern}|^\s+")


def parse_paragraph(chunk: Chunk) -> Node:
    return create_paragraph(chunk.lines)


def parse_heading(chunk: Chunk) -> Node:
    line = chunk.first_line
    match = HEADING_RE.match(line.text)
    if match is None:
        raise ReviewParseError(f"Malformed heading {line.text!r}", line=line.line_number)

    label = match.group(2).rstrip()
    heading = create_node_from_line(line, Syntax.Heading)
    heading.depth = len(match.group(1))
    heading.label = label
    heading.children = []
    if label:
        context = Context(
            start_index=line.start_index + match.start(2),
            line_number=line.line_number,
            start_column=match.start(2),
        )
        heading.children.append(create_str_node(label, context))
    return heading


def list_parser(prefix_re: re.Pattern[str]) -> ChunkParser:
    """Parser for list chunks whose lines start with *prefix_re*."""

    def parse(chunk: Chunk) -> Node:
        node = create_node_from_chunk(chunk, Syntax.List)
        node.children = [parse_list_item(prefix_re, line) for line in chunk.lines]
        return node

    return parse


def parse_list_item(prefix_re: re.Pattern[str], line: Line) -> Node:
    if line.is_comment:
        return create_comment_node_from_line(line)

    item = create_node_from_line(line, Syntax.ListItem)
    item_text = prefix_re.sub("", line.text, count=1)
    start_column = len(line.text) - len(item_text)
    context = Context(
        start_index=line.start_index + start_column,
        line_number=line.line_number,
        start_column=start_column,
    )
    item.children = parse_text(item_text, context)
    return item


def parse_comment(chunk: Chunk) -> None:
    """Standalone comments are not part of the linted text."""
    return None


CHUNK_PARSERS: dict[ChunkType, ChunkParser] = {
    ChunkType.PARAGRAPH: parse_paragraph,
    ChunkType.HEADING: parse_heading,
    ChunkType.UNORDERED_LIST: list_parser(UNORDERED_ITEM_RE),
    ChunkType.ORDERED_LIST: list_parser(ORDERED_ITEM_RE),
    # continuation lines stay separate ListItems
    ChunkType.DEFINITION_LIST: list_parser(DEFINITION_PREFIX_RE),
    ChunkType.BLOCK: parse_block,
    ChunkType.COMMENT: parse_comment,
}
