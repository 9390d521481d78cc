"""Exceptions raised by the Re:VIEW parser."""

from __future__ import annotations


class ReviewParseError(ValueError):
    """A document could not be turned into a validated AST."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class UnterminatedBlockError(ReviewParseError):
    """A ``//name{`` block reached the end of the document without ``//}``."""

    def __init__(self, block_name: str, line: int) -> None:
        super().__init__(
            f"Unterminated block '//{block_name}' opened at line {line}", line=line
        )
        self.block_name = block_name


class NodeMismatchError(ReviewParseError):
    """A node's raw text or location disagrees with the source."""

    def __init__(self, node_type: str, line: int, column: int, detail: str) -> None:
        super().__init__(
            f"{node_type} at line {line}, column {column}: {detail}", line=line
        )
        self.node_type = node_type
        self.column = column
