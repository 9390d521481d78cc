"""Shared fixtures."""

import pytest

SAMPLE = (
    "={intro} Introduction\n"
    "\n"
    "#@# standalone comment\n"
    "This is @<b>{bold} and @<href>{http://example.com/, a link}.\n"
    "#@warn(check this)\n"
    "Second line with @<ruby>{漢字, かんじ} and @<fn>{note1}.\n"
    "\n"
    " * item @<code>{x = 1}\n"
    " ** nested\n"
    "\n"
    " 1. first\n"
    " 2. second\n"
    "\n"
    " : term\n"
    "    definition\n"
    "\n"
    "//list[sample][Sample @<i>{code}]{\n"
    "puts 'hello'\n"
    "\n"
    "#@# inside code\n"
    "//}\n"
    "\n"
    "//table[env][Environment]{\n"
    "Name\tValue\n"
    "----------\n"
    ".\t@<tt>{PATH}\n"
    "#@# table comment\n"
    "//}\n"
    "\n"
    "//footnote[note1][See: [1\\]]\n"
    "\n"
    "//quote{\n"
    "Seeing is believing.\n"
    "\n"
    "But feeling is the truth.\n"
    "//}\n"
    "\n"
    "//image[fig][A figure]\n"
    "\n"
    "//unknown[x]{\n"
    "ignored\n"
    "//}\n"
    "\n"
    "== Closing\n"
    "Last @<br>{} line\n"
)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE


@pytest.fixture
def write_doc(tmp_path):
    """Helper that writes content to a temp file and returns its Path."""

    def _write(content: str, name: str = "chapter.re"):
        fp = tmp_path / name
        fp.parent.mkdir(parents=True, exist_ok=True)
        fp.write_text(content, encoding="utf-8")
        return fp

    return _write
