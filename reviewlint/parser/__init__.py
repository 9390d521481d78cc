"""Re:VIEW parser: chunker, chunk/block builders and inline parser."""

from reviewlint.parser.chunker import parse_as_chunks
from reviewlint.parser.document import parse

__all__ = ["parse", "parse_as_chunks"]
