"""Tests for the ``followgraph`` CLI."""

from __future__ import annotations

from sqlalchemy import create_engine, inspect
from typer.testing import CliRunner

from followgraph.cli.app import app

runner = CliRunner()


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.stdout.startswith("followgraph ")


class TestDbInit:
    def test_creates_schema(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'cli.db'}"
        result = runner.invoke(app, ["db", "init", "--database-url", url])
        assert result.exit_code == 0, result.output
        engine = create_engine(url)
        try:
            assert "connections" in inspect(engine).get_table_names()
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'cli.db'}"
        assert runner.invoke(app, ["db", "init", "-d", url]).exit_code == 0
        assert runner.invoke(app, ["db", "init", "-d", url]).exit_code == 0


class TestServe:
    def test_runs_uvicorn_on_app_factory(self, monkeypatch):
        import uvicorn

        import followgraph.core.logging as fg_logging

        calls = {}
        monkeypatch.setattr(uvicorn, "run", lambda target, **kw: calls.update(target=target, **kw))
        monkeypatch.setattr(fg_logging, "configure_logging", lambda **kw: calls.update(logging=kw))

        result = runner.invoke(app, ["serve", "--port", "9090", "--log-level", "debug"])
        assert result.exit_code == 0, result.output
        assert calls["target"] == "followgraph.api:create_app"
        assert calls["factory"] is True
        assert calls["port"] == 9090
        assert calls["log_level"] == "debug"
        assert calls["logging"]["level"] == "DEBUG"
