"""Tests for the orger command-line interface."""

import io
import json
import logging
from pathlib import Path

import pytest

from orger.cli import main


@pytest.fixture
def notes(tmp_path: Path) -> Path:
    path = tmp_path / "notes.org"
    path.write_text("#+TITLE: Notes\n\n* TODO Task\nSome /text/.\n", encoding="utf-8")
    return path


class TestParseCommand:
    """``orger parse`` prints the AST as JSON."""

    def test_parse(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["parse", str(notes)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["_type"] == "Document"
        assert data["properties"] == {"title": "Notes"}
        assert data["children"][0]["todo_keyword"] == "TODO"

    def test_pretty(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["parse", str(notes), "--pretty"]) == 0
        assert '\n  "_type": "Document"' in capsys.readouterr().out

    def test_todo_keyword(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "wait.org"
        path.write_text("* WAIT Call back\n", encoding="utf-8")
        assert main(["parse", str(path), "--todo-keyword", "WAIT"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["children"][0]["todo_keyword"] == "WAIT"

    def test_source_file_in_locations(
        self, notes: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["parse", str(notes)])
        data = json.loads(capsys.readouterr().out)
        assert data["location"]["source_file"] == str(notes)


class TestRenderCommand:
    """``orger render`` prints HTML, Markdown or Org."""

    def test_html_default(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["render", str(notes)]) == 0
        out = capsys.readouterr().out
        assert out.startswith('<div class="org-document">')
        assert "<em" in out

    def test_full_document(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["render", str(notes), "--full-document"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("<!DOCTYPE html>")
        assert "<title>Notes</title>" in out

    def test_markdown(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["render", str(notes), "-f", "markdown"]) == 0
        assert capsys.readouterr().out == "# **TODO** Task\n\nSome *text*.\n"

    def test_markdown_frontmatter(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["render", str(notes), "-f", "markdown", "--frontmatter"]) == 0
        assert capsys.readouterr().out.startswith('---\ntitle: "Notes"\n---\n')

    def test_org(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["render", str(notes), "-f", "org"]) == 0
        assert capsys.readouterr().out == "#+TITLE: Notes\n\n* TODO Task\n\nSome /text/.\n"

    def test_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("* Hello"))
        assert main(["render", "-", "-f", "org"]) == 0
        assert capsys.readouterr().out == "* Hello\n"

    def test_output_file(
        self, notes: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        target = tmp_path / "out.md"
        assert main(["render", str(notes), "-f", "markdown", "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == "# **TODO** Task\n\nSome *text*.\n"
        captured = capsys.readouterr()
        assert captured.out == ""
        assert f"Wrote {target}" in captured.err

    def test_plugin(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "c.org"
        path.write_text("# secret\n\nvisible\n", encoding="utf-8")
        assert main(["render", str(path), "-f", "org", "--plugin", "drop_comments"]) == 0
        assert capsys.readouterr().out == "visible\n"


class TestErrors:
    """Failures exit non-zero with a message on stderr."""

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["parse", str(tmp_path / "missing.org")]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_unterminated_block(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.org"
        path.write_text("#+BEGIN_SRC python\nx = 1\n", encoding="utf-8")
        assert main(["parse", str(path)]) == 1
        err = capsys.readouterr().err
        assert f"{path}:1:1 Unterminated SRC block" in err

    def test_strict(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "drawer.org"
        path.write_text(":NOTES:\nnever closed\n", encoding="utf-8")
        assert main(["parse", str(path)]) == 0
        capsys.readouterr()
        assert main(["parse", str(path), "--strict"]) == 1
        assert "Unterminated NOTES block" in capsys.readouterr().err

    def test_unknown_plugin(self, notes: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["parse", str(notes), "--plugin", "nope"]) == 1
        assert "Unknown plugin" in capsys.readouterr().err

    def test_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render"])
        assert exc_info.value.code == 2

    def test_unknown_format(self) -> None:
        with pytest.raises(SystemExit):
            main(["render", "x.org", "-f", "pdf"])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "orger 0.1.0" in capsys.readouterr().out


class TestVerbose:
    """``-v`` sends orger log records to stderr."""

    def test_debug_logging(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = logging.getLogger("orger")
        monkeypatch.setattr(root, "handlers", [])
        path = tmp_path / "ragged.org"
        path.write_text("| a | b |\n| c |\n", encoding="utf-8")
        try:
            assert main(["-vv", "parse", str(path)]) == 0
        finally:
            root.setLevel(logging.NOTSET)
        assert "DEBUG | orger.parsing.blocks.table | Padding table row" in capsys.readouterr().err
