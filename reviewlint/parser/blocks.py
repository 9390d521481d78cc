"""Block parsers: ``//name[arg]...{ ... //}`` and single-line blocks.

A block's first line carries its name and bracketed arguments.  Each name
maps to one builder in :data:`BLOCK_PARSERS`; names missing from the table
produce no node at all.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from reviewlint.errors import ReviewParseError
from reviewlint.models import Chunk, Line, Node, Syntax
from reviewlint.parser.chunker import is_blank
from reviewlint.parser.inline import parse_line, parse_text
from reviewlint.parser.utils import (
    Context,
    create_comment_node_from_line,
    create_node,
    create_node_from_chunk,
    create_node_from_lines,
)

logger = logging.getLogger(__name__)

BLOCK_LINE_RE = re.compile(r"^//(\w+)(.*?)\{?$")
BLOCK_ARG_RE = re.compile(r"\[((?:\\.|[^\\\]])*)\]")
TABLE_RULE_RE = re.compile(r"^-+$")
TABLE_CELL_RE = re.compile(r"[^\t]+")


@dataclass(frozen=True)
class BlockArg:
    value: str
    start_column: int


@dataclass(frozen=True)
class Block:
    name: str
    args: list[BlockArg]
    chunk: Chunk

    @property
    def first_line(self) -> Line:
        return self.chunk.first_line

    @property
    def body(self) -> list[Line]:
        """Lines between the open and close markers."""
        if not self.chunk.multiline:
            return []
        return self.chunk.lines[1:-1]

    def arg(self, index: int) -> BlockArg | None:
        return self.args[index] if index < len(self.args) else None


BlockParser = Callable[[Block], Node]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def parse_block_args(args_text: str, offset: int) -> list[BlockArg]:
    """Parse ``[foo][This is foo]``; *offset* is the column where *args_text* starts."""
    return [
        BlockArg(value=m.group(1), start_column=offset + m.start() + 1)
        for m in BLOCK_ARG_RE.finditer(args_text)
    ]


def parse_block(chunk: Chunk) -> Node | None:
    """Build the node for a Block chunk, or ``None`` for unsupported names."""
    line = chunk.first_line
    match = BLOCK_LINE_RE.match(line.text)
    if match is None:
        raise ReviewParseError(
            f"Malformed block line {line.text!r}", line=line.line_number
        )

    name = match.group(1)
    block = Block(
        name=name,
        args=parse_block_args(match.group(2), 2 + len(name)),
        chunk=chunk,
    )

    parser = BLOCK_PARSERS.get(name)
    if parser is None:
        logger.debug("Ignoring unsupported block //%s at line %d", name, line.line_number)
        return None
    return parser(block)


def parse_block_arg(type: str, arg: BlockArg | None, line: Line) -> Node | None:
    """Parse one block argument as a node of *type* with inline children."""
    if arg is None or not arg.value:
        return None

    context = Context(
        start_index=line.start_index + arg.start_column,
        line_number=line.line_number,
        start_column=arg.start_column,
        escapes=frozenset("]"),
    )
    node = create_node(type, arg.value, context.start_index, line.line_number, arg.start_column)
    node.children = parse_text(arg.value, context)
    return node


def create_paragraph(lines: list[Line]) -> Node:
    """Paragraph spanning *lines*; comment lines become Comment children."""
    node = create_node_from_lines(lines, Syntax.Paragraph)
    node.children = []
    for line in lines:
        node.children.extend(parse_line(line))
    return node


def with_caption(caption_index: int, parser: BlockParser) -> BlockParser:
    """Prepend the argument at *caption_index* as a Caption child."""

    def parse(block: Block) -> Node:
        node = parser(block)
        caption = parse_block_arg(Syntax.Caption, block.arg(caption_index), block.first_line)
        if caption is not None:
            node.children = [caption] + (node.children or [])
        return node

    return parse


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------


def parse_table(block: Block) -> Node:
    node = create_node_from_chunk(block.chunk, Syntax.Table)
    node.children = []
    for line in block.body:
        node.children.extend(parse_table_row(line))
    return node


def parse_table_row(line: Line) -> list[Node]:
    """Cells of one table line, each as a ListItem."""
    if line.is_comment:
        return [create_comment_node_from_line(line)]
    if TABLE_RULE_RE.match(line.text):
        return []

    cells: list[Node] = []
    for match in TABLE_CELL_RE.finditer(line.text):
        start_column = match.start()
        content = match.group(0)
        if content.startswith("."):  # placeholder for an empty cell
            content = content[1:]
            start_column += 1
        if not content:
            continue

        context = Context(
            start_index=line.start_index + start_column,
            line_number=line.line_number,
            start_column=start_column,
        )
        cell = create_node(
            Syntax.TableCell, content, context.start_index, line.line_number, start_column
        )
        cell.children = parse_text(content, context)
        cells.append(cell)
    return cells


# ---------------------------------------------------------------------------
# Footnote
# ---------------------------------------------------------------------------


def parse_footnote(block: Block) -> Node:
    node = create_node_from_chunk(block.chunk, Syntax.Footnote)
    node.children = []
    paragraph = parse_block_arg(Syntax.Paragraph, block.arg(1), block.first_line)
    if paragraph is not None:
        node.children.append(paragraph)
    return node


# ---------------------------------------------------------------------------
# Paragraph-bearing blocks
# ---------------------------------------------------------------------------


def paragraph_block_parser(type: str) -> BlockParser:
    """Blocks whose body is prose, split into paragraphs by blank lines."""

    def parse(block: Block) -> Node:
        node = create_node_from_chunk(block.chunk, type)
        node.children = [create_paragraph(run) for run in split_paragraphs(block.body)]
        return node

    return parse


def split_paragraphs(lines: list[Line]) -> list[list[Line]]:
    runs: list[list[Line]] = []
    current: list[Line] = []
    for line in lines:
        if line.is_comment:
            # comments join a paragraph but never start one
            if current:
                current.append(line)
            continue
        if is_blank(line):
            if current:
                runs.append(current)
            current = []
            continue
        current.append(line)
    if current:
        runs.append(current)
    return runs


# ---------------------------------------------------------------------------
# Code blocks and images
# ---------------------------------------------------------------------------


def parse_code_block(block: Block) -> Node:
    node = create_node_from_chunk(block.chunk, Syntax.CodeBlock)
    node.children = []
    body = block.body
    node.value = create_node_from_lines(body, Syntax.CodeBlock).raw if body else ""
    return node


def parse_image(block: Block) -> Node:
    node = create_node_from_chunk(block.chunk, Syntax.Image)
    node.children = []
    return node


BLOCK_PARSERS: dict[str, BlockParser] = {
    "table": with_caption(1, parse_table),
    "footnote": parse_footnote,

    "quote": paragraph_block_parser(Syntax.BlockQuote),
    "lead": paragraph_block_parser(Syntax.Block),
    "read": paragraph_block_parser(Syntax.Block),
    "note": paragraph_block_parser(Syntax.Block),
    "memo": paragraph_block_parser(Syntax.Block),
    "tip": paragraph_block_parser(Syntax.Block),
    "info": paragraph_block_parser(Syntax.Block),
    "warning": paragraph_block_parser(Syntax.Block),
    "important": paragraph_block_parser(Syntax.Block),
    "caution": paragraph_block_parser(Syntax.Block),
    "notice": paragraph_block_parser(Syntax.Block),

    "list": with_caption(1, parse_code_block),
    "listnum": with_caption(1, parse_code_block),
    "emlist": with_caption(0, parse_code_block),
    "emlistnum": with_caption(0, parse_code_block),
    "source": with_caption(0, parse_code_block),
    "cmd": with_caption(0, parse_code_block),

    "image": with_caption(1, parse_image),
    "indepimage": with_caption(1, parse_image),
    "numberlessimage": with_caption(1, parse_image),
    "graph": with_caption(2, parse_image),
    "imgtable": with_caption(1, parse_image),
}
