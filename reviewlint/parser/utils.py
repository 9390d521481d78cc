"""Location bookkeeping and node construction helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from reviewlint.models import Chunk, Line, Location, Node, Position, Syntax

TAG_OPEN_RE = re.compile(r"@<(\w+)>\{")
ESCAPE = "\\"


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Context:
    """Where a piece of text starts in the document."""

    start_index: int
    line_number: int
    start_column: int = 0
    escapes: frozenset[str] = frozenset()  # characters that may be backslash-escaped

    def offset(self, n: int) -> Context:
        return replace(self, start_index=self.start_index + n, start_column=self.start_column + n)

    def with_escapes(self, chars: str) -> Context:
        return replace(self, escapes=self.escapes | frozenset(chars))


def context_from_line(line: Line) -> Context:
    return Context(start_index=line.start_index, line_number=line.line_number)


def unescape_value(raw: str, context: Context) -> str:
    """Resolve ``\\<c>`` for every escapable character *c* of *context*."""
    if not context.escapes:
        return raw
    chars = "".join(re.escape(c) for c in sorted(context.escapes))
    return re.sub(r"\\([" + chars + "])", r"\1", raw)


# ---------------------------------------------------------------------------
# Inline tags
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TagContent:
    raw: str
    value: str  # ``\}`` resolved
    index: int  # offset of the content within the full tag text


@dataclass(frozen=True)
class Tag:
    name: str
    content: TagContent
    full_text: str
    preceding_text: str
    following_text: str


def _find_closing_brace(text: str, start: int) -> int:
    """Return the index of the first ``}`` at or after *start* not escaped by ``\\``."""
    i = start
    while i < len(text):
        char = text[i]
        if char == ESCAPE and text[i + 1:i + 2] == "}":
            i += 2
            continue
        if char == "}":
            return i
        i += 1
    return -1


def find_inline_tag(text: str) -> Tag | None:
    """Find the first ``@<name>{content}`` tag in *text*.

    Returns ``None`` when there is no tag or the first opener is never
    closed.
    """
    match = TAG_OPEN_RE.search(text)
    if match is None:
        return None

    close = _find_closing_brace(text, match.end())
    if close < 0:
        return None

    content_raw = text[match.end():close]
    return Tag(
        name=match.group(1),
        content=TagContent(
            raw=content_raw,
            value=content_raw.replace("\\}", "}"),
            index=match.end() - match.start(),
        ),
        full_text=text[match.start():close + 1],
        preceding_text=text[:match.start()],
        following_text=text[close + 1:],
    )


# ---------------------------------------------------------------------------
# Node factories
# ---------------------------------------------------------------------------


def create_node(
    type: str,
    text: str,
    start_index: int,
    line_number: int,
    start_column: int = 0,
) -> Node:
    """Create a node whose raw text is *text*, possibly spanning lines."""
    newlines = text.count("\n")
    if newlines:
        end = Position(line_number + newlines, len(text) - text.rfind("\n") - 1)
    else:
        end = Position(line_number, start_column + len(text))

    return Node(
        type=type,
        raw=text,
        range=(start_index, start_index + len(text)),
        loc=Location(start=Position(line_number, start_column), end=end),
    )


def create_inline_node(type: str, text: str, context: Context) -> Node:
    return create_node(type, text, context.start_index, context.line_number, context.start_column)


def create_str_node(text: str, context: Context) -> Node:
    node = create_inline_node(Syntax.Str, text, context)
    node.value = unescape_value(text, context)
    return node


def create_node_from_chunk(chunk: Chunk, type: str) -> Node:
    first = chunk.first_line
    return create_node(type, chunk.raw, first.start_index, first.line_number)


def create_node_from_line(line: Line, type: str) -> Node:
    return create_node(type, line.text, line.start_index, line.line_number)


def create_node_from_lines(lines: list[Line], type: str) -> Node:
    """Create a node spanning *lines*, without the last line's terminator."""
    text = "".join(line.raw for line in lines[:-1]) + lines[-1].text
    first = lines[0]
    return create_node(type, text, first.start_index, first.line_number)


def comment_value(text: str) -> str:
    if text.startswith("#@#"):
        return text[3:].strip()
    # #@warn(...)
    body = text[len("#@warn("):]
    return body[:-1] if body.endswith(")") else body


def create_comment_node_from_line(line: Line) -> Node:
    node = create_node_from_line(line, Syntax.Comment)
    node.value = comment_value(line.text)
    return node
