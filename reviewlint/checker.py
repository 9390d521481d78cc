"""Checker: parse every Re:VIEW file under a path and collect reports."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

from reviewlint.config import DEFAULT_EXTENSIONS, DEFAULT_MAX_FILE_SIZE_KB
from reviewlint.errors import ReviewParseError
from reviewlint.models import CheckResult, FileReport
from reviewlint.processors.base import Processor
from reviewlint.processors.review import ReviewProcessor

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_DIRS: set[str] = {
    ".git",
    "node_modules",
    "dist",
    "build",
    ".venv",
    "venv",
    "__pycache__",
}


def _matches_any_glob(path: str, globs: list[str]) -> bool:
    """Return True if *path* matches any of the *globs*."""
    return any(fnmatch.fnmatch(path, g) for g in globs)


def collect_files(
    root: str | Path,
    extensions: list[str] | None = None,
    exclude_globs: list[str] | None = None,
    max_file_size_kb: int = DEFAULT_MAX_FILE_SIZE_KB,
) -> list[Path]:
    """Walk *root* and return the files to check, sorted.

    A *root* that is itself a file is returned as-is.
    """
    root_path = Path(root)
    if root_path.is_file():
        return [root_path]
    if not root_path.is_dir():
        return []

    wanted = {e.lower() for e in (extensions or DEFAULT_EXTENSIONS)}
    excludes = list(exclude_globs or [])
    max_bytes = max_file_size_kb * 1024
    collected: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root_path):
        # Prune excluded directories in-place
        dirnames[:] = [
            d for d in dirnames
            if d not in DEFAULT_EXCLUDE_DIRS
            and not _matches_any_glob(d, excludes)
        ]

        for fname in filenames:
            fpath = Path(dirpath) / fname
            if fpath.suffix.lower() not in wanted:
                continue

            rel = str(fpath.relative_to(root_path))
            if _matches_any_glob(rel, excludes) or _matches_any_glob(fname, excludes):
                continue

            try:
                if fpath.stat().st_size > max_bytes:
                    logger.info("Skipping %s: larger than %d KB", fpath, max_file_size_kb)
                    continue
            except OSError:
                continue

            collected.append(fpath)

    collected.sort()
    return collected


def check_file(file_path: Path, processor: Processor | None = None) -> FileReport:
    """Parse one file and report whether it produced a validated AST."""
    processor = processor or ReviewProcessor()
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return FileReport(file_path=str(file_path), ok=False, message=f"cannot read file: {exc}")

    try:
        document = processor.pre_process(text, str(file_path))
    except ReviewParseError as exc:
        logger.debug("Parse failure in %s: %s", file_path, exc)
        return FileReport(file_path=str(file_path), ok=False, message=str(exc), line=exc.line)

    return FileReport(
        file_path=str(file_path),
        ok=True,
        node_count=sum(1 for _ in document.walk()),
    )


def check_path(
    target: str | Path,
    processor: Processor | None = None,
    extensions: list[str] | None = None,
    exclude_globs: list[str] | None = None,
    max_file_size_kb: int = DEFAULT_MAX_FILE_SIZE_KB,
    fail_fast: bool = False,
) -> CheckResult:
    """Check every matching file under *target*."""
    processor = processor or ReviewProcessor()
    result = CheckResult(checked_path=str(target), processor=processor.name)

    for fpath in collect_files(target, extensions or list(processor.extensions),
                               exclude_globs, max_file_size_kb):
        report = check_file(fpath, processor)
        result.reports.append(report)
        if fail_fast and not report.ok:
            break

    return result
