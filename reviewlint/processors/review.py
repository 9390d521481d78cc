"""Built-in processor for Re:VIEW (``.re``) files."""

from __future__ import annotations

from typing import Any

from reviewlint.models import Node
from reviewlint.parser import parse

NO_FILE_PATH = "<text>"


class ReviewProcessor:
    name = "review"
    priority = 100
    extensions: tuple[str, ...] = (".re",)

    @classmethod
    def available_extensions(cls) -> list[str]:
        return list(cls.extensions)

    def pre_process(self, text: str, file_path: str | None = None) -> Node:
        return parse(text)

    def post_process(
        self, messages: list[Any], file_path: str | None = None
    ) -> dict[str, Any]:
        return {
            "messages": messages,
            "filePath": file_path or NO_FILE_PATH,
        }
