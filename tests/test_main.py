"""Unit tests for main.py - the CLI entry point."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from tododesk import __version__
from tododesk.main import app
from tododesk.utils.exit_codes import ERROR_STORAGE

runner = CliRunner()


def _invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input)


class TestTopLevel:
    def test_help(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        for command in ("tasks", "categories", "config", "stats", "doctor", "version"):
            assert command in result.output

    def test_version(self):
        result = _invoke("version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_typo_suggests_command(self):
        result = _invoke("taks")
        assert result.exit_code == 1
        assert "Did you mean" in result.output
        assert "tasks" in result.output


@pytest.mark.usefixtures("cli_config")
class TestStats:
    def test_empty(self):
        result = _invoke("stats", "-o", "json")
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "total": 0,
            "completed": 0,
            "pending": 0,
            "overdue": 0,
            "completion_percentage": 0.0,
        }

    def test_counts(self):
        for title in ("a", "b", "c", "d"):
            _invoke("tasks", "add", title)
        _invoke("tasks", "add", "late", "--due", "2020-01-01")
        _invoke("tasks", "done", "1")

        data = json.loads(_invoke("stats", "-o", "json").output)
        assert data["total"] == 5
        assert data["completed"] == 1
        assert data["pending"] == 4
        assert data["overdue"] == 1
        assert data["completion_percentage"] == 20.0

    def test_pretty(self):
        result = _invoke("stats")
        assert result.exit_code == 0
        assert "Task statistics" in result.output


class TestDoctor:
    def test_healthy(self, cli_config):
        result = _invoke("doctor", "-o", "json")
        assert result.exit_code == 0
        assert "Database connection OK" in result.output
        assert '"categories": 3' in result.output
        assert '"migrations": [' in result.output

    def test_table_lists_applied_migrations(self, cli_config):
        result = _invoke("doctor")
        assert result.exit_code == 0
        assert "Description" in result.output
        assert "Create" in result.output

    def test_unusable_database(self, cli_config, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        cli_config.set("database_path", str(blocker / "tasks.db"))

        result = _invoke("doctor")
        assert result.exit_code == ERROR_STORAGE
        assert "Database unavailable" in result.output

    def test_commands_report_unusable_database(self, cli_config, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        cli_config.set("database_path", str(blocker / "tasks.db"))

        assert _invoke("tasks", "list").exit_code == ERROR_STORAGE
