"""Configuration loader for reviewlint.

Configuration is resolved in priority order: **project > user > defaults**.

1. **Project-level**: ``.reviewlint.yml`` in (or above) the checked directory.
2. **User-level**: ``~/.reviewlint/config.yml``.
3. **Built-in defaults**: ``extensions: [".re"]`` etc.

Both files share the same format::

    check:
      extensions:
        - .re
      exclude:
        - "vendor/**"
      max_file_size_kb: 512
      fail_fast: false

Project-level values override user-level values.  CLI flags override both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".reviewlint.yml"
USER_CONFIG_DIR = Path.home() / ".reviewlint"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.yml"

DEFAULT_EXTENSIONS = [".re"]
DEFAULT_MAX_FILE_SIZE_KB = 512


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class CheckConfig:
    """``check`` sub-configuration."""

    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: list[str] = field(default_factory=list)
    max_file_size_kb: int = DEFAULT_MAX_FILE_SIZE_KB
    fail_fast: bool = False

    # Where the effective config was loaded from (None = defaults only).
    config_path: str | None = None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    check_path: str | None = None,
    config_path: str | Path | None = None,
) -> CheckConfig:
    """Load and merge configuration.

    Parameters
    ----------
    check_path:
        Directory (or file) to search upwards from for ``.reviewlint.yml``.
        When *None*, only the user-level file (and defaults) are considered.
    config_path:
        Explicit config file path.  When given, *only* this file is
        loaded (no project/user search).
    """
    if config_path is not None:
        raw = _load_yaml(Path(config_path))
        cfg = _raw_to_config(raw)
        cfg.config_path = str(config_path) if raw is not None else None
        return cfg

    user_raw = _load_yaml(USER_CONFIG_PATH)
    user_source = str(USER_CONFIG_PATH) if user_raw is not None else None

    project_raw: dict | None = None
    project_source: str | None = None
    if check_path is not None:
        project_path = _find_project_config(check_path)
        if project_path is not None:
            project_raw = _load_yaml(project_path)
            project_source = str(project_path) if project_raw is not None else None

    cfg = _raw_to_config(_merge_raw(project_raw, user_raw))
    cfg.config_path = project_source or user_source
    return cfg


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _find_project_config(check_path: str) -> Path | None:
    """Search for ``.reviewlint.yml`` in *check_path* and ancestors."""
    p = Path(check_path)
    if p.is_file():
        p = p.parent
    candidates = [p / CONFIG_FILENAME]
    for parent in p.parents:
        candidates.append(parent / CONFIG_FILENAME)
        if (parent / ".git").exists():
            break
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _load_yaml(path: Path) -> dict | None:
    """Load a YAML file, returning *None* on missing/invalid files."""
    path = path.expanduser()
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return None
    return raw if isinstance(raw, dict) else None


def _merge_raw(project: dict | None, user: dict | None) -> dict:
    """Merge project and user raw dicts (project wins, lists are replaced)."""
    merged: dict = {}
    for source in (user, project):
        if not source:
            continue
        section = source.get("check")
        if isinstance(section, dict):
            merged.setdefault("check", {}).update(section)
    return merged


def _raw_to_config(raw: dict | None) -> CheckConfig:
    """Convert a raw YAML dict to a ``CheckConfig``."""
    if not raw:
        return CheckConfig()

    check_raw = raw.get("check", {})
    if not isinstance(check_raw, dict):
        check_raw = {}

    extensions = [_normalize_extension(e) for e in _as_list(check_raw.get("extensions"))]
    return CheckConfig(
        extensions=extensions or list(DEFAULT_EXTENSIONS),
        exclude=_as_list(check_raw.get("exclude", [])),
        max_file_size_kb=int(check_raw.get("max_file_size_kb", DEFAULT_MAX_FILE_SIZE_KB)),
        fail_fast=bool(check_raw.get("fail_fast", False)),
    )


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def _as_list(val: object) -> list[str]:
    """Coerce a value to a list of strings."""
    if isinstance(val, list):
        return [str(v) for v in val]
    if isinstance(val, str):
        return [val]
    return []
