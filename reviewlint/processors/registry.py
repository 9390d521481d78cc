"""Processor registry: loading and selection."""

from __future__ import annotations

import importlib
import logging
from importlib.metadata import entry_points
from pathlib import Path

from reviewlint.processors.base import Processor
from reviewlint.processors.review import ReviewProcessor

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "reviewlint.processors"


def _load_entry_point_processors() -> list[Processor]:
    """Load processors registered via the ``reviewlint.processors`` entry-point group."""
    processors: list[Processor] = []
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            cls = ep.load()
        except (ImportError, AttributeError) as exc:
            logger.warning("Skipping processor entry point %s: %s", ep.name, exc)
            continue
        processors.append(cls() if isinstance(cls, type) else cls)
    return processors


def load_import_processor(import_string: str) -> Processor:
    """Load a processor from ``import:pkg.module:ClassName``.

    The *import_string* is the part after ``import:``.
    """
    module_path, class_name = import_string.rsplit(":", 1)
    mod = importlib.import_module(module_path)
    cls = getattr(mod, class_name)
    return cls() if isinstance(cls, type) else cls


def list_registered_processors() -> list[Processor]:
    """Built-in processor plus entry-point processors, unique by name."""
    by_name: dict[str, Processor] = {ReviewProcessor.name: ReviewProcessor()}
    for processor in _load_entry_point_processors():
        by_name.setdefault(processor.name, processor)
    return list(by_name.values())


def load_processors(processor_spec: str = "auto") -> list[Processor]:
    """Return candidate processors for *processor_spec*.

    ``auto``      : every registered processor
    ``<name>``    : registered processors filtered to that name
    ``import:...``: single processor from import string
    """
    if processor_spec.startswith("import:"):
        return [load_import_processor(processor_spec[len("import:"):])]

    all_processors = list_registered_processors()

    if processor_spec != "auto":
        matched = [p for p in all_processors if p.name == processor_spec]
        if not matched:
            raise ValueError(f"No registered processor named '{processor_spec}'")
        return matched

    return all_processors


def select_processor(
    processors: list[Processor],
    file_path: str,
) -> Processor | None:
    """Pick the processor handling *file_path*'s extension, highest priority first.

    Returns ``None`` if no processor claims the extension.
    """
    suffix = Path(file_path).suffix.lower()
    claimed = [p for p in processors if suffix in (e.lower() for e in p.extensions)]
    if not claimed:
        return None
    return max(claimed, key=lambda p: p.priority)
