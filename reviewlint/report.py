"""Report rendering for check results and parsed documents."""

from __future__ import annotations

import json
from typing import Any

import reviewlint
from reviewlint.models import CheckResult, Chunk, FileReport, Node

# ---------------------------------------------------------------------------
# Check results: text
# ---------------------------------------------------------------------------

_GREEN = "\033[92m"
_RED = "\033[91m"
_RESET = "\033[0m"


def _status_label(ok: bool, color: bool = True) -> str:
    label = "OK" if ok else "FAIL"
    if color:
        return f"{_GREEN if ok else _RED}{label}{_RESET}"
    return label


def render_text(result: CheckResult, color: bool = True) -> str:
    """Produce human-friendly text output."""
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"reviewlint {reviewlint.__version__} Check Report")
    lines.append("=" * 60)
    lines.append(f"Path:       {result.checked_path}")
    lines.append(f"Processor:  {result.processor}")
    lines.append(f"Mode:       {result.mode}")
    lines.append("")

    if not result.reports:
        lines.append("No files checked.")
    for report in result.sorted_reports:
        lines.append(f"  [{_status_label(report.ok, color)}] {report.file_path}")
        if report.ok:
            lines.append(f"    {report.node_count} nodes")
        else:
            loc = f"line {report.line}: " if report.line else ""
            lines.append(f"    → {loc}{report.message}")

    lines.append("-" * 60)
    failed = len(result.failures)
    lines.append(f"Files: {len(result.reports)} checked, {failed} failed")
    lines.append("=" * 60)

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Check results: JSON
# ---------------------------------------------------------------------------


def _report_to_dict(r: FileReport) -> dict[str, Any]:
    return {
        "file": r.file_path,
        "ok": r.ok,
        "message": r.message,
        "line": r.line,
        "node_count": r.node_count,
    }


def render_json(result: CheckResult) -> str:
    """Produce stable JSON output (deterministic sorting)."""
    doc: dict[str, Any] = {
        "tool": "reviewlint",
        "version": reviewlint.__version__,
        "processor": result.processor,
        "checked_path": result.checked_path,
        "summary": {
            "total_files": len(result.reports),
            "failed": len(result.failures),
            "mode": result.mode,
        },
        "files": [_report_to_dict(r) for r in result.sorted_reports],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Single document
# ---------------------------------------------------------------------------


def render_ast_json(node: Node) -> str:
    return json.dumps(node.to_dict(), indent=2, ensure_ascii=False)


def render_tree(node: Node, indent: int = 0) -> str:
    """Indented outline: one node per line with its location and raw text."""
    lines: list[str] = []
    _render_tree_lines(node, indent, lines)
    return "\n".join(lines)


def _render_tree_lines(node: Node, depth: int, out: list[str]) -> None:
    start, end = node.loc.start, node.loc.end
    head = f"{'  ' * depth}{node.type} {start.line}:{start.column}-{end.line}:{end.column}"
    if node.children is None or node.type == "Str":
        head += f" {_preview(node.raw)}"
    out.append(head)
    for child in node.children or ():
        _render_tree_lines(child, depth + 1, out)


def render_chunks(chunks: list[Chunk]) -> str:
    out: list[str] = []
    for chunk in chunks:
        first, last = chunk.first_line.line_number, chunk.last_line.line_number
        span = f"{first}" if first == last else f"{first}-{last}"
        out.append(f"{str(chunk.type):<16} lines {span:<9} {_preview(chunk.raw)}")
    return "\n".join(out)


def _preview(raw: str, width: int = 40) -> str:
    text = json.dumps(raw, ensure_ascii=False)
    return text if len(text) <= width else text[:width - 4] + '..."'
