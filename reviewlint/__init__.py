"""reviewlint: Re:VIEW to textlint-style AST parser."""

from reviewlint.parser import parse, parse_as_chunks

__version__ = "0.3.0"

__all__ = ["__version__", "parse", "parse_as_chunks"]
