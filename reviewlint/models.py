"""Data models used throughout reviewlint."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator

# ---------------------------------------------------------------------------
# Lines and chunks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Line:
    """One physical line of a Re:VIEW document."""

    raw: str  # with line ending
    text: str  # without line ending
    line_number: int  # 1-indexed
    start_index: int  # 0-indexed offset in the document
    is_comment: bool = False


class ChunkType(str, enum.Enum):
    """Discriminant of a chunk."""

    PARAGRAPH = "Paragraph"
    HEADING = "Heading"
    UNORDERED_LIST = "UnorderedList"
    ORDERED_LIST = "OrderedList"
    DEFINITION_LIST = "DefinitionList"
    BLOCK = "Block"
    COMMENT = "Comment"

    def __str__(self) -> str:
        return self.value


@dataclass
class Chunk:
    """A contiguous run of lines classified under one type."""

    type: ChunkType
    lines: list[Line]
    raw: str = ""
    multiline: bool = False  # Block only: delimited by ``{`` ... ``//}``

    @property
    def first_line(self) -> Line:
        return self.lines[0]

    @property
    def last_line(self) -> Line:
        return self.lines[-1]

    @property
    def start_index(self) -> int:
        return self.lines[0].start_index

    @property
    def end_index(self) -> int:
        last = self.lines[-1]
        return last.start_index + len(last.text)


# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------


class Syntax:
    """Node type names shared with the linting host."""

    Document = "Document"
    Heading = "Header"
    Paragraph = "Paragraph"
    List = "List"
    ListItem = "ListItem"
    Table = "Table"
    TableCell = "ListItem"
    CodeBlock = "CodeBlock"
    Image = "Image"
    BlockQuote = "BlockQuote"
    Block = "Block"
    Footnote = "Footnote"
    Caption = "Caption"
    Comment = "Comment"

    # inline
    Str = "Str"
    Break = "Break"
    Code = "Code"
    Link = "Link"
    Strong = "Strong"
    Emphasis = "Emphasis"
    Keyword = "Keyword"
    Bouten = "Bouten"
    Amikake = "Amikake"
    Underline = "Underline"
    Teletype = "Teletype"
    TeletypeItalic = "TeletypeItalic"
    TeletypeBold = "TeletypeBold"
    TateChuYoko = "TateChuYoko"
    Ruby = "Ruby"
    Reference = "Reference"
    UnicodeChar = "UnicodeChar"
    Icon = "Icon"
    Math = "Math"
    Raw = "Raw"


NODE_TYPES: frozenset[str] = frozenset(
    value for key, value in vars(Syntax).items() if not key.startswith("_")
)

# Types that always carry a list of children.
CONTAINER_TYPES: frozenset[str] = frozenset({
    Syntax.Document,
    Syntax.Heading,
    Syntax.Paragraph,
    Syntax.List,
    Syntax.ListItem,
    Syntax.Table,
    Syntax.CodeBlock,
    Syntax.Image,
    Syntax.BlockQuote,
    Syntax.Block,
    Syntax.Footnote,
    Syntax.Caption,
    Syntax.Link,
    Syntax.Strong,
    Syntax.Emphasis,
    Syntax.Keyword,
    Syntax.Bouten,
    Syntax.Amikake,
    Syntax.Underline,
    Syntax.Teletype,
    Syntax.TeletypeItalic,
    Syntax.TeletypeBold,
    Syntax.TateChuYoko,
    Syntax.Ruby,
})


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Position:
    line: int  # 1-indexed
    column: int  # 0-indexed


@dataclass(frozen=True)
class Location:
    start: Position
    end: Position


@dataclass
class Node:
    """A location-annotated AST node (textlint ``TxtNode`` shape)."""

    type: str
    raw: str
    range: tuple[int, int]
    loc: Location
    children: list[Node] | None = None
    value: str | None = None

    # kind-specific attributes
    depth: int | None = None  # Header
    label: str | None = None  # Header
    url: str | None = None  # Link
    ruby_text: str | None = None  # Ruby

    def walk(self) -> Iterator[Node]:
        """Yield this node and its descendants, depth-first."""
        yield self
        for child in self.children or ():
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Render the plain record consumed by the linting host."""
        out: dict[str, Any] = {
            "type": self.type,
            "raw": self.raw,
            "range": [self.range[0], self.range[1]],
            "loc": {
                "start": {"line": self.loc.start.line, "column": self.loc.start.column},
                "end": {"line": self.loc.end.line, "column": self.loc.end.column},
            },
        }
        if self.value is not None:
            out["value"] = self.value
        if self.depth is not None:
            out["depth"] = self.depth
        if self.label is not None:
            out["label"] = self.label
        if self.url is not None:
            out["url"] = self.url
        if self.ruby_text is not None:
            out["rubyText"] = self.ruby_text
        if self.children is not None:
            out["children"] = [child.to_dict() for child in self.children]
        return out


# ---------------------------------------------------------------------------
# Check results
# ---------------------------------------------------------------------------


@dataclass
class FileReport:
    """Outcome of parsing a single file."""

    file_path: str
    ok: bool
    message: str = ""
    line: int | None = None
    node_count: int = 0

    def sort_key(self) -> tuple:
        """Failures first, then by path."""
        return (self.ok, self.file_path)


@dataclass
class CheckResult:
    """Complete output of a ``reviewlint check`` run."""

    checked_path: str
    processor: str
    reports: list[FileReport] = field(default_factory=list)
    mode: str = "report"  # report | strict

    @property
    def failures(self) -> list[FileReport]:
        return [r for r in self.reports if not r.ok]

    @property
    def sorted_reports(self) -> list[FileReport]:
        return sorted(self.reports, key=lambda r: r.sort_key())
