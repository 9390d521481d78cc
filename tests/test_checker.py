"""Tests for file collection and per-file checking."""

from reviewlint.checker import check_file, check_path, collect_files


def _names(paths, root):
    return [str(p.relative_to(root)) for p in paths]


class TestCollectFiles:
    def test_filters_by_extension(self, tmp_path, write_doc):
        write_doc("= A\n", "ch01.re")
        write_doc("# md\n", "README.md")
        write_doc("= B\n", "part/ch02.re")
        assert _names(collect_files(tmp_path), tmp_path) == ["ch01.re", "part/ch02.re"]

    def test_extension_match_is_case_insensitive(self, tmp_path, write_doc):
        write_doc("= A\n", "CH01.RE")
        assert len(collect_files(tmp_path, [".re"])) == 1

    def test_skips_default_excluded_dirs(self, tmp_path, write_doc):
        write_doc("= A\n", "node_modules/pkg/x.re")
        write_doc("= A\n", ".git/y.re")
        write_doc("= A\n", "ok.re")
        assert _names(collect_files(tmp_path), tmp_path) == ["ok.re"]

    def test_exclude_globs(self, tmp_path, write_doc):
        write_doc("= A\n", "drafts/wip.re")
        write_doc("= A\n", "ch01.re")
        write_doc("= A\n", "ch01-old.re")
        files = collect_files(tmp_path, exclude_globs=["drafts", "*-old.re"])
        assert _names(files, tmp_path) == ["ch01.re"]

    def test_skips_large_files(self, tmp_path, write_doc):
        write_doc("a" * 3000, "big.re")
        write_doc("small", "small.re")
        files = collect_files(tmp_path, max_file_size_kb=2)
        assert _names(files, tmp_path) == ["small.re"]

    def test_file_root_returned_as_is(self, write_doc):
        fp = write_doc("text", "notes.txt")
        assert collect_files(fp) == [fp]

    def test_missing_root(self, tmp_path):
        assert collect_files(tmp_path / "nope") == []


class TestCheckFile:
    def test_ok(self, write_doc):
        report = check_file(write_doc("= Title\n\nBody @<b>{text}.\n"))
        assert report.ok is True
        assert report.node_count == 8
        assert report.message == ""

    def test_parse_error_carries_line(self, write_doc):
        report = check_file(write_doc("= Title\n\n//list[a][b]{\ncode\n"))
        assert report.ok is False
        assert report.line == 3
        assert "Unterminated block '//list'" in report.message

    def test_unreadable_file(self, write_doc):
        fp = write_doc("", "bad.re")
        fp.write_bytes(b"\xff\xfe\xfa")
        report = check_file(fp)
        assert report.ok is False
        assert report.message.startswith("cannot read file")


class TestCheckPath:
    def test_collects_reports(self, tmp_path, write_doc, sample_text):
        write_doc(sample_text, "ch01.re")
        write_doc("//note{\nunterminated\n", "ch02.re")
        result = check_path(tmp_path)
        assert result.processor == "review"
        assert result.checked_path == str(tmp_path)
        assert [r.ok for r in result.reports] == [True, False]
        assert len(result.failures) == 1
        assert result.sorted_reports[0].file_path.endswith("ch02.re")

    def test_fail_fast_stops_at_first_failure(self, tmp_path, write_doc):
        write_doc("//note{\n", "a.re")
        write_doc("fine", "b.re")
        result = check_path(tmp_path, fail_fast=True)
        assert len(result.reports) == 1

    def test_custom_extensions(self, tmp_path, write_doc):
        write_doc("fine", "a.review")
        write_doc("fine", "b.re")
        result = check_path(tmp_path, extensions=[".review"])
        assert [r.file_path.endswith("a.review") for r in result.reports] == [True]
