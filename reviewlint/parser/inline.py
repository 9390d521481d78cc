"""Inline parser: decompose one line of text into Str and tag nodes."""

from __future__ import annotations

import re
from typing import Callable

from reviewlint.models import Line, Node, Syntax
from reviewlint.parser.utils import (
    Context,
    Tag,
    context_from_line,
    create_comment_node_from_line,
    create_inline_node,
    create_str_node,
    find_inline_tag,
    unescape_value,
)

InlineParser = Callable[[Tag, Context], Node]

ARG_SEPARATOR_RE = re.compile(r"\s*,\s*")


def parse_line(line: Line) -> list[Node]:
    """Parse a line; comment lines become a single Comment node."""
    if line.is_comment:
        return [create_comment_node_from_line(line)]
    return parse_text(line.text, context_from_line(line))


def parse_text(text: str, context: Context) -> list[Node]:
    """Parse inline tags and Str runs of *text*, which must be a single line."""
    if "\n" in text:
        raise ValueError("parse_text() expects a single line of text")

    nodes: list[Node] = []
    tag = find_inline_tag(text)
    while tag is not None:
        if tag.preceding_text:
            node = create_str_node(tag.preceding_text, context)
            nodes.append(node)
            context = context.offset(len(node.raw))

        parser = INLINE_PARSERS.get(tag.name)
        if parser is not None:
            nodes.append(parser(tag, context.with_escapes("}")))

        context = context.offset(len(tag.full_text))
        text = tag.following_text
        tag = find_inline_tag(text)

    if text:
        nodes.append(create_str_node(text, context))

    return nodes


# ---------------------------------------------------------------------------
# Tag parsers
# ---------------------------------------------------------------------------


def text_tag_parser(type: str) -> InlineParser:
    """Parser for tags whose content is prose: one Str child."""

    def parse(tag: Tag, context: Context) -> Node:
        node = create_inline_node(type, tag.full_text, context)
        node.children = [create_str_node(tag.content.raw, context.offset(tag.content.index))]
        return node

    return parse


def non_text_tag_parser(type: str) -> InlineParser:
    """Parser for tags without lintable prose: a leaf node."""

    def parse(tag: Tag, context: Context) -> Node:
        return create_inline_node(type, tag.full_text, context)

    return parse


def parse_code_tag(tag: Tag, context: Context) -> Node:
    node = create_inline_node(Syntax.Code, tag.full_text, context)
    node.value = unescape_value(tag.content.raw, context)
    return node


def parse_href_tag(tag: Tag, context: Context) -> Node:
    """``@<href>{url}`` or ``@<href>{url, label}``."""
    node = create_inline_node(Syntax.Link, tag.full_text, context)
    content = tag.content.raw

    separator = ARG_SEPARATOR_RE.search(content)
    if separator is not None:
        url = content[:separator.start()]
        label = content[separator.end():]
        label_offset = tag.content.index + separator.end()
    else:
        url = label = content
        label_offset = tag.content.index

    node.url = unescape_value(url, context)
    node.children = [create_str_node(label, context.offset(label_offset))]
    return node


def parse_ruby_tag(tag: Tag, context: Context) -> Node:
    """``@<ruby>{base, reading}``; the reading is an attribute, not a child."""
    node = create_inline_node(Syntax.Ruby, tag.full_text, context)
    content = tag.content.raw

    separator = ARG_SEPARATOR_RE.search(content)
    if separator is not None:
        base = content[:separator.start()]
        node.ruby_text = unescape_value(content[separator.end():], context)
    else:
        base = content

    node.children = [create_str_node(base, context.offset(tag.content.index))]
    return node


INLINE_PARSERS: dict[str, InlineParser] = {
    # text tags
    "kw": text_tag_parser(Syntax.Keyword),
    "bou": text_tag_parser(Syntax.Bouten),
    "ami": text_tag_parser(Syntax.Amikake),
    "u": text_tag_parser(Syntax.Underline),
    "b": text_tag_parser(Syntax.Strong),
    "i": text_tag_parser(Syntax.Emphasis),
    "strong": text_tag_parser(Syntax.Strong),
    "em": text_tag_parser(Syntax.Emphasis),
    "tt": text_tag_parser(Syntax.Teletype),
    "tti": text_tag_parser(Syntax.TeletypeItalic),
    "ttb": text_tag_parser(Syntax.TeletypeBold),
    "tcy": text_tag_parser(Syntax.TateChuYoko),

    # partially text tags
    "ruby": parse_ruby_tag,
    "href": parse_href_tag,

    # references
    "chap": non_text_tag_parser(Syntax.Reference),
    "title": non_text_tag_parser(Syntax.Reference),
    "chapref": non_text_tag_parser(Syntax.Reference),
    "list": non_text_tag_parser(Syntax.Reference),
    "img": non_text_tag_parser(Syntax.Reference),
    "table": non_text_tag_parser(Syntax.Reference),
    "hd": non_text_tag_parser(Syntax.Reference),
    "column": non_text_tag_parser(Syntax.Reference),
    "fn": non_text_tag_parser(Syntax.Reference),

    # non-text tags
    "code": parse_code_tag,
    "uchar": non_text_tag_parser(Syntax.UnicodeChar),
    "br": non_text_tag_parser(Syntax.Break),
    "icon": non_text_tag_parser(Syntax.Icon),
    "m": non_text_tag_parser(Syntax.Math),
    "raw": non_text_tag_parser(Syntax.Raw),
}
