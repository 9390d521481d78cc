"""Processors adapt the parser to a linting host."""

from reviewlint.processors.review import ReviewProcessor

__all__ = ["ReviewProcessor"]
