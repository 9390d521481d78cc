"""Gate: exit codes for ``reviewlint check``."""

from __future__ import annotations

import os

from reviewlint.models import CheckResult


def is_ci() -> bool:
    """Heuristic: detect common CI environment variables."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def decide(result: CheckResult, strict: bool = False) -> int:
    """Return the exit code for *result*.

    Exit codes:
        0: every file parsed, or failures only reported
        2: strict mode (flag or CI) and at least one file failed
    """
    should_block = strict or is_ci()
    result.mode = "strict" if should_block else "report"

    if should_block and result.failures:
        return 2
    return 0
