"""Integration tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from reviewlint import config as config_mod
from reviewlint.cli import main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.setattr(config_mod, "USER_CONFIG_PATH", tmp_path / "home" / "config.yml")


@pytest.fixture
def runner():
    return CliRunner()


class TestParseCommand:
    def test_tree(self, runner, write_doc):
        fp = write_doc("= Title\n\nbody\n")
        result = runner.invoke(main, ["parse", str(fp)])
        assert result.exit_code == 0
        assert "Header 1:0-1:7" in result.output
        assert '    Str 3:0-3:4 "body"' in result.output

    def test_json(self, runner, write_doc):
        fp = write_doc("= Title\n\nbody\n")
        result = runner.invoke(main, ["parse", str(fp), "--format", "json"])
        assert result.exit_code == 0
        doc = json.loads(result.output)
        assert doc["type"] == "Document"
        assert [c["type"] for c in doc["children"]] == ["Header", "Paragraph"]

    def test_chunks(self, runner, write_doc):
        fp = write_doc("= Title\n\n#@# note\nbody\n")
        result = runner.invoke(main, ["parse", str(fp), "--chunks"])
        assert result.exit_code == 0
        kinds = [line.split()[0] for line in result.output.splitlines()]
        assert kinds == ["Heading", "Comment", "Paragraph"]

    def test_parse_error(self, runner, write_doc):
        fp = write_doc("//list[a][b]{\ncode\n")
        result = runner.invoke(main, ["parse", str(fp)])
        assert result.exit_code == 1
        assert "Unterminated block" in result.output

    def test_non_utf8_file(self, runner, write_doc):
        fp = write_doc("", "latin1.re")
        fp.write_bytes(b"caf\xe9\n")
        result = runner.invoke(main, ["parse", str(fp)])
        assert result.exit_code == 1
        assert "cannot read file" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["parse", str(tmp_path / "nope.re")])
        assert result.exit_code == 2


class TestCheckCommand:
    def test_report_mode_exits_0(self, runner, tmp_path, write_doc, sample_text):
        write_doc(sample_text, "ch01.re")
        write_doc("//note{\n", "ch02.re")
        result = runner.invoke(main, ["check", str(tmp_path)])
        assert result.exit_code == 0
        assert "Files: 2 checked, 1 failed" in result.output

    def test_strict_exits_2(self, runner, tmp_path, write_doc):
        write_doc("//note{\n", "ch02.re")
        result = runner.invoke(main, ["check", str(tmp_path), "--strict"])
        assert result.exit_code == 2

    def test_strict_clean_exits_0(self, runner, tmp_path, write_doc, sample_text):
        write_doc(sample_text, "ch01.re")
        result = runner.invoke(main, ["check", str(tmp_path), "--strict"])
        assert result.exit_code == 0

    def test_json_format(self, runner, tmp_path, write_doc):
        write_doc("fine\n", "ch01.re")
        result = runner.invoke(main, ["check", str(tmp_path), "--format", "json"])
        doc = json.loads(result.output)
        assert doc["summary"]["total_files"] == 1
        assert doc["summary"]["mode"] == "report"

    def test_json_out(self, runner, tmp_path, write_doc):
        write_doc("fine\n", "book/ch01.re")
        out = tmp_path / "report.json"
        result = runner.invoke(main, ["check", str(tmp_path / "book"), "--json-out", str(out)])
        assert result.exit_code == 0
        assert json.loads(out.read_text())["tool"] == "reviewlint"

    def test_exclude_flag(self, runner, tmp_path, write_doc):
        write_doc("//note{\n", "drafts/wip.re")
        write_doc("fine\n", "ch01.re")
        result = runner.invoke(main, ["check", str(tmp_path), "--strict", "--exclude", "drafts"])
        assert result.exit_code == 0
        assert "Files: 1 checked, 0 failed" in result.output

    def test_config_file_extensions(self, runner, tmp_path, write_doc):
        write_doc("check:\n  extensions: [.review]\n", ".reviewlint.yml")
        write_doc("fine\n", "a.review")
        write_doc("fine\n", "b.re")
        result = runner.invoke(main, ["check", str(tmp_path), "--format", "json"])
        doc = json.loads(result.output)
        assert [f["file"].endswith("a.review") for f in doc["files"]] == [True]

    def test_unknown_processor(self, runner, tmp_path, write_doc):
        write_doc("fine\n", "ch01.re")
        result = runner.invoke(main, ["check", str(tmp_path), "--processor", "nope"])
        assert result.exit_code == 1
        assert "No registered processor" in result.output


class TestProcessorsCommand:
    def test_list(self, runner):
        result = runner.invoke(main, ["processors", "list"])
        assert result.exit_code == 0
        assert "review" in result.output
        assert ".re" in result.output
