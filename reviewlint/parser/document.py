"""Document builder: the public ``parse`` entry point."""

from __future__ import annotations

import logging

from reviewlint.models import Chunk, Location, Node, Position, Syntax
from reviewlint.parser.chunker import parse_as_chunks, split_lines
from reviewlint.parser.chunks import CHUNK_PARSERS
from reviewlint.parser.validate import validate

logger = logging.getLogger(__name__)


def parse(text: str) -> Node:
    """Parse Re:VIEW *text* and return a validated Document node.

    Raises :class:`~reviewlint.errors.UnterminatedBlockError` for a block
    missing its ``//}`` and :class:`~reviewlint.errors.NodeMismatchError` when
    a node's location metadata disagrees with *text*.
    """
    document = parse_document(text)
    validate(document, text)
    return document


def parse_document(text: str) -> Node:
    """Build the Document node without validating it."""
    chunks = parse_as_chunks(text)
    children = parse_chunks(chunks)

    lines = split_lines(text)
    if lines:
        end = Position(lines[-1].line_number, len(lines[-1].text))
    else:
        end = Position(1, 0)

    logger.debug("Built %d top-level nodes from %d chunks", len(children), len(chunks))
    return Node(
        type=Syntax.Document,
        raw=text,
        range=(0, len(text)),
        loc=Location(start=Position(1, 0), end=end),
        children=children,
    )


def parse_chunks(chunks: list[Chunk]) -> list[Node]:
    nodes: list[Node] = []
    for chunk in chunks:
        node = CHUNK_PARSERS[chunk.type](chunk)
        if node is not None:
            nodes.append(node)
    return nodes
