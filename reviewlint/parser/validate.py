"""Consistency check run over every parsed document.

Walks the tree read-only and raises :class:`NodeMismatchError` as soon as a
node's ``raw`` differs from the source slice at its ``range``, its ``loc``
does not point at that same slice, or its shape breaks the AST contract.
"""

from __future__ import annotations

import bisect

from reviewlint.errors import NodeMismatchError
from reviewlint.models import CONTAINER_TYPES, NODE_TYPES, Node, Position, Syntax


class LineIndex:
    """Map absolute offsets in a text to line/column positions."""

    def __init__(self, text: str) -> None:
        self._starts = [0]
        for i, char in enumerate(text):
            if char == "\n":
                self._starts.append(i + 1)

    def position(self, offset: int) -> Position:
        line = bisect.bisect_right(self._starts, offset)
        return Position(line, offset - self._starts[line - 1])


def validate(root: Node, text: str) -> None:
    """Check every node below *root* against *text*."""
    index = LineIndex(text)
    for node in root.walk():
        _check_shape(node)
        if node.type != Syntax.Document:
            _check_location(node, text, index)


def _fail(node: Node, detail: str) -> None:
    raise NodeMismatchError(node.type, node.loc.start.line, node.loc.start.column, detail)


def _check_shape(node: Node) -> None:
    if node.type not in NODE_TYPES:
        _fail(node, f"unknown node type {node.type!r}")
    if node.type in CONTAINER_TYPES and not isinstance(node.children, list):
        _fail(node, "container node without children")
    if node.type not in CONTAINER_TYPES and node.children is not None:
        _fail(node, "leaf node with children")
    if node.type == Syntax.Str and not isinstance(node.value, str):
        _fail(node, "Str node without a value")


def _check_location(node: Node, text: str, index: LineIndex) -> None:
    start, end = node.range
    if not 0 <= start <= end <= len(text):
        _fail(node, f"range {node.range} outside the document")

    actual = text[start:end]
    if node.raw != actual:
        _fail(node, f"raw {node.raw!r} does not match source {actual!r}")

    if node.loc.start != index.position(start):
        _fail(node, f"loc.start {node.loc.start} does not match offset {start}")
    if node.loc.end != index.position(end):
        _fail(node, f"loc.end {node.loc.end} does not match offset {end}")
