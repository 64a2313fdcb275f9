"""Tests for the command-line interface."""

from __future__ import annotations

import io
import json

import pytest

from bicameral import __version__
from bicameral.cli import create_parser, main


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test from an empty directory with no config file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("bicameral.config.loader.find_config_file", lambda start: None)
    monkeypatch.setattr("bicameral.commands.config_cmd.find_config_file", lambda start: None)


class TestParser:
    """Argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: bicameral" in capsys.readouterr().out

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_version_command(self, capsys):
        assert main(["version"]) == 0
        assert capsys.readouterr().out.strip() == f"bicameral {__version__}"

    def test_font_size_choices(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["to-graph", "x.txt", "--font-size", "huge"])

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "nope.toml"), "version"]) == 1
        assert "Config file not found" in capsys.readouterr().err


class TestClassify:
    """bicameral classify."""

    def test_tab_output(self, capsys):
        assert main(["classify", "Why?", "plain"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("question\t#")
        assert lines[1].startswith("default\t")

    def test_json(self, capsys):
        assert main(["classify", "-j", "maybe later"]) == 0
        rows = json.loads(capsys.readouterr().out)
        assert rows[0]["category"] == "idea"


class TestConvert:
    """bicameral to-graph / to-text."""

    def test_to_graph_stdout(self, tmp_path, capsys):
        src = tmp_path / "notes.txt"
        src.write_text("one\n\ntwo\n")
        assert main(["to-graph", str(src)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [n["data"]["label"] for n in data["nodes"]] == ["one", "two"]
        assert data["nodes"][0]["data"]["fontFamily"] == "sans"

    def test_to_graph_options(self, tmp_path, capsys):
        src = tmp_path / "notes.txt"
        src.write_text("one")
        out = tmp_path / "board.json"
        assert main(["to-graph", str(src), "--font-size", "large", "-o", str(out)]) == 0
        assert "Wrote 1 nodes and 0 edges" in capsys.readouterr().out
        assert json.loads(out.read_text())["nodes"][0]["data"]["fontSize"] == "large"

    def test_to_graph_empty(self, tmp_path, capsys):
        src = tmp_path / "blank.txt"
        src.write_text("\n   \n")
        assert main(["to-graph", str(src)]) == 1
        assert "No content to convert" in capsys.readouterr().err

    def test_to_graph_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))
        assert main(["to-graph", "-"]) == 0
        assert "from stdin" in capsys.readouterr().out

    def test_round_trip(self, tmp_path, capsys):
        src = tmp_path / "notes.txt"
        src.write_text("alpha\nbeta\ngamma")
        board = tmp_path / "board.json"
        back = tmp_path / "back.txt"
        assert main(["-q", "to-graph", str(src), "-o", str(board)]) == 0
        assert main(["to-text", str(board), "-o", str(back)]) == 0
        assert back.read_text() == "alpha\nbeta\ngamma"

    def test_to_text_invalid_json(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        assert main(["to-text", str(bad)]) == 1
        assert "Invalid graph file" in capsys.readouterr().err

    def test_to_text_empty_board(self, tmp_path, capsys):
        empty = tmp_path / "empty.json"
        empty.write_text('{"nodes": [], "edges": []}')
        assert main(["to-text", str(empty)]) == 1
        assert "No content found" in capsys.readouterr().err

    def test_to_text_dangling_edges_warned(self, tmp_path, capsys, caplog):
        board = tmp_path / "board.json"
        board.write_text(
            json.dumps(
                {
                    "nodes": [{"id": "a", "data": {"label": "A", "originalIndex": 0}}],
                    "edges": [{"id": "e1", "source": "a", "target": "gone"}],
                }
            )
        )
        assert main(["to-text", str(board)]) == 0
        assert capsys.readouterr().out == "A\n"
        assert "gone" in caplog.text


class TestDiff:
    """bicameral diff."""

    def _files(self, tmp_path, old, new):
        a, b = tmp_path / "old.txt", tmp_path / "new.txt"
        a.write_text(old)
        b.write_text(new)
        return str(a), str(b)

    def test_text_output(self, tmp_path, capsys):
        old, new = self._files(tmp_path, "a\nb\nc", "a\nB\nc")
        assert main(["diff", old, new]) == 0
        assert capsys.readouterr().out == "2: B\n"

    def test_json_output(self, tmp_path, capsys):
        old, new = self._files(tmp_path, "a", "a\nb")
        assert main(["diff", "-j", old, new]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["diff"] == "b"
        assert data["has_changes"] is True

    def test_no_changes(self, tmp_path, capsys):
        old, new = self._files(tmp_path, "same", "same")
        assert main(["diff", old, new]) == 0
        assert "No changes" in capsys.readouterr().err


class TestPreview:
    """bicameral preview."""

    def test_stdout(self, tmp_path, capsys):
        src = tmp_path / "notes.txt"
        src.write_text("hello\n\nworld")
        assert main(["preview", str(src)]) == 0
        html = capsys.readouterr().out
        assert "<title>notes.txt</title>" in html
        assert "<br>" in html

    def test_output_file(self, tmp_path, capsys):
        src = tmp_path / "notes.txt"
        src.write_text("hello")
        out = tmp_path / "notes.html"
        assert main(["preview", str(src), "-o", str(out)]) == 0
        assert "Generated:" in capsys.readouterr().out
        assert "hello" in out.read_text()


class TestConfigCommand:
    """bicameral config."""

    def test_show_toml(self, capsys):
        assert main(["config", "show"]) == 0
        out = capsys.readouterr().out
        assert "[editor]" in out
        assert 'font_family = "sans"' in out

    def test_show_json_with_env(self, monkeypatch, capsys):
        monkeypatch.setenv("BICAMERAL_SERVER_PORT", "9999")
        assert main(["config", "show", "-j"]) == 0
        assert json.loads(capsys.readouterr().out)["server"]["port"] == 9999

    def test_path_without_file(self, capsys):
        assert main(["config", "path"]) == 1
        assert "using defaults" in capsys.readouterr().err

    def test_path_explicit(self, tmp_path, capsys):
        cfg = tmp_path / "c.toml"
        cfg.write_text("[editor]\n")
        assert main(["--config", str(cfg), "config", "path"]) == 0
        assert capsys.readouterr().out.strip() == str(cfg.resolve())

    def test_init(self, tmp_path, capsys):
        assert main(["config", "init"]) == 0
        created = tmp_path / ".bicameral.toml"
        assert created.is_file()
        assert "idle_window_ms = 1000" in created.read_text()
        assert main(["config", "init"]) == 1
        assert main(["config", "init", "--force"]) == 0

    def test_no_action(self, capsys):
        assert main(["config"]) == 1
        assert "Usage" in capsys.readouterr().err


class TestServe:
    """bicameral serve (Flask's run is replaced)."""

    def test_serve_loads_file(self, tmp_path, monkeypatch, capsys):
        from flask import Flask

        calls = {}

        def fake_run(self, host=None, port=None, **kwargs):
            calls["host"] = host
            calls["port"] = port
            calls["app"] = self

        monkeypatch.setattr(Flask, "run", fake_run)
        src = tmp_path / "notes.txt"
        src.write_text("a\nb")

        assert main(["serve", str(src), "--port", "5123"]) == 0
        assert calls["host"] == "127.0.0.1"
        assert calls["port"] == 5123

        client = calls["app"].test_client()
        assert client.get("/api/document").get_json()["paragraphs"] == ["a", "b"]
        assert "Serving on" in capsys.readouterr().out
