"""Processor protocol: the contract a linting host expects from a parser plugin."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from reviewlint.models import Node


@runtime_checkable
class Processor(Protocol):
    """Pluggable processor contract."""

    name: str
    priority: int  # tie-break when several processors claim an extension
    extensions: tuple[str, ...]  # e.g. (".re",)

    def pre_process(self, text: str, file_path: str | None = None) -> Node:
        """Turn the file contents into an AST.

        Must not touch the file system.
        """
        ...

    def post_process(
        self, messages: list[Any], file_path: str | None = None
    ) -> dict[str, Any]:
        """Attach the originating file path to lint results."""
        ...
