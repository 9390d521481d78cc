"""Tests for report rendering."""

import json

import reviewlint
from reviewlint import parse, parse_as_chunks
from reviewlint.models import CheckResult, FileReport
from reviewlint.report import (
    render_ast_json,
    render_chunks,
    render_json,
    render_text,
    render_tree,
)


def _make_result() -> CheckResult:
    return CheckResult(
        checked_path="/book",
        processor="review",
        reports=[
            FileReport("z.re", ok=True, node_count=42),
            FileReport("a.re", ok=False, message="Unterminated block '//list' opened at line 3", line=3),
        ],
    )


class TestTextOutput:
    def test_header(self):
        output = render_text(_make_result(), color=False)
        assert f"reviewlint {reviewlint.__version__} Check Report" in output
        assert "Processor:  review" in output

    def test_failures_listed_first(self):
        output = render_text(_make_result(), color=False)
        assert output.index("[FAIL] a.re") < output.index("[OK] z.re")
        assert "line 3: Unterminated block" in output
        assert "42 nodes" in output

    def test_summary(self):
        output = render_text(_make_result(), color=False)
        assert "Files: 2 checked, 1 failed" in output

    def test_color_codes(self):
        output = render_text(_make_result(), color=True)
        assert "\033[91mFAIL" in output

    def test_no_files(self):
        output = render_text(CheckResult(checked_path="/empty", processor="review"), color=False)
        assert "No files checked." in output


class TestJsonOutput:
    def test_valid_json(self):
        doc = json.loads(render_json(_make_result()))
        assert doc["tool"] == "reviewlint"
        assert doc["version"] == reviewlint.__version__
        assert doc["processor"] == "review"

    def test_summary(self):
        doc = json.loads(render_json(_make_result()))
        assert doc["summary"] == {"total_files": 2, "failed": 1, "mode": "report"}

    def test_files_sorted(self):
        doc = json.loads(render_json(_make_result()))
        assert [f["file"] for f in doc["files"]] == ["a.re", "z.re"]
        assert doc["files"][0]["line"] == 3
        assert doc["files"][1]["node_count"] == 42


class TestDocumentOutput:
    def test_ast_json_matches_record(self):
        doc = parse("= Title\n\nbody")
        assert json.loads(render_ast_json(doc)) == doc.to_dict()

    def test_ast_json_keeps_non_ascii(self):
        assert "漢字" in render_ast_json(parse("漢字"))

    def test_tree(self):
        assert render_tree(parse("test")).splitlines() == [
            "Document 1:0-1:4",
            "  Paragraph 1:0-1:4",
            '    Str 1:0-1:4 "test"',
        ]

    def test_tree_truncates_long_text(self):
        tree = render_tree(parse("x" * 100))
        last = tree.splitlines()[-1]
        assert last.endswith('..."')
        assert len(last.strip().split(" ", 2)[2]) <= 40

    def test_chunks(self):
        listing = render_chunks(parse_as_chunks("= T\n\nbody\nmore\n")).splitlines()
        assert len(listing) == 2
        assert listing[0].startswith("Heading")
        assert "lines 1 " in listing[0]
        assert listing[1].startswith("Paragraph")
        assert "lines 3-4" in listing[1]
