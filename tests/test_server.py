"""Tests for the command line entry point."""

import json

import server

from conftest import PYTHON_FOR_ELSE


class TestAnalyzeCommand:

    def test_prints_report(self, tmp_path, capsys):
        """Given a source file, should print its report as JSON and exit 0."""
        # Given
        source = tmp_path / "snippet.py"
        source.write_text(PYTHON_FOR_ELSE, encoding="utf-8")

        # When
        exit_code = server.main(["analyze", str(source)])

        # Then
        report = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert report["score"] == 75
        assert report["issues"][0]["severity"] == "high"

    def test_empty_file_is_rejected(self, tmp_path, capsys):
        source = tmp_path / "empty.py"
        source.write_text("", encoding="utf-8")

        assert server.main(["analyze", str(source)]) == 1
        assert "No code provided" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert server.main(["analyze", str(tmp_path / "nope.py")]) == 1
        assert "Cannot read" in capsys.readouterr().err


class TestServeCommand:

    def test_runs_uvicorn_with_overrides(self, monkeypatch):
        calls = []
        monkeypatch.setattr(server.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        assert server.main(["serve", "--host", "127.0.0.1", "--port", "8123"]) == 0

        app, kwargs = calls[0]
        assert app == "app.main:app"
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8123

    def test_bare_invocation_serves_with_settings(self, monkeypatch):
        calls = []
        monkeypatch.setattr(server.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

        server.main([])

        assert calls[0]["host"] == server.settings.HOST
        assert calls[0]["port"] == server.settings.PORT
