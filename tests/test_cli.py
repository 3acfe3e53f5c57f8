"""Tests for the md-parser command-line interface."""

import json
from pathlib import Path

import pytest

from md_parser.cli import main


@pytest.fixture
def doc(tmp_path: Path) -> Path:
    path = tmp_path / "doc.md"
    path.write_text("# Title\n\nSome **bold** text\n", encoding="utf-8")
    return path


class TestParseCommand:
    """md-parser parse <file>."""

    def test_prints_html(self, doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["parse", str(doc)]) == 0
        out = capsys.readouterr().out
        assert f"Parsing markdown file: {doc}" in out
        assert "Parse successful!" in out
        start = out.index("--- Generated HTML ---")
        end = out.index("--- End of HTML ---")
        assert "<h1>Title</h1>\n<p>Some <strong>bold</strong> text</p>" in out[start:end]

    def test_writes_output_file(
        self, doc: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        target = tmp_path / "out.html"
        assert main(["parse", str(doc), "--output", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == (
            "<h1>Title</h1>\n<p>Some <strong>bold</strong> text</p>\n"
        )
        out = capsys.readouterr().out
        assert f"HTML saved to: {target}" in out
        assert "--- Generated HTML ---" not in out

    def test_escape_html(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "lt.md"
        path.write_text("a < b\n", encoding="utf-8")
        assert main(["parse", str(path), "--escape-html"]) == 0
        assert "<p>a &lt; b</p>" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["parse", str(tmp_path / "missing.md")]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_parse_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.md"
        path.write_text("**unclosed\n", encoding="utf-8")
        assert main(["parse", str(path)]) == 1
        err = capsys.readouterr().err
        assert "Error: Failed to parse markdown content:" in err
        assert f"{path}:1:11" in err


class TestOtherCommands:
    """tree, help, credits and usage."""

    def test_tree(self, doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["tree", str(doc)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["root"]["rule"] == "document"
        assert payload["source_file"] == str(doc)

    def test_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["help"]) == 0
        out = capsys.readouterr().out
        assert "SUPPORTED MARKDOWN" in out
        assert "***text***" in out

    def test_credits(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["credits"]) == 0
        assert "MD Parser" in capsys.readouterr().out

    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().err

    def test_unknown_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["frobnicate"]) == 1
        err = capsys.readouterr().err
        assert "usage:" in err
        assert "Error: Unknown command 'frobnicate'" in err

    def test_unknown_command_after_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-v", "render"]) == 1
        assert "Error: Unknown command 'render'" in capsys.readouterr().err
