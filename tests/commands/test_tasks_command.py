"""Tests for the tasks sub-commands, run against a temporary database."""

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest
from typer.testing import CliRunner

from tododesk.adapters.sqlite import Store
from tododesk.main import app
from tododesk.services.task_service import TaskService
from tododesk.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND

runner = CliRunner()

pytestmark = pytest.mark.usefixtures("cli_config")


def _invoke(*args, input=None):
    return runner.invoke(app, ["tasks", *args], input=input)


def _all_tasks(config):
    with Store(config.database_path) as store:
        return TaskService.from_store(store).get_all_tasks()


class TestAdd:
    def test_add_with_category_name_and_due(self, cli_config):
        result = _invoke(
            "add", "Buy milk", "-c", "personal", "--due", "2025-01-10", "-o", "json"
        )
        assert result.exit_code == 0, result.output
        assert "Task created: #1" in result.output
        assert '"due_date": "2025-01-10"' in result.output

        [task] = _all_tasks(cli_config)
        assert task.category_id == 2
        assert task.due_date == date(2025, 1, 10)

    def test_add_defaults_to_first_category(self, cli_config):
        assert _invoke("add", "Anything").exit_code == 0
        assert _all_tasks(cli_config)[0].category_id == 1

    def test_add_relative_due(self, cli_config):
        assert _invoke("add", "Soon", "--due", "+2").exit_code == 0
        assert _all_tasks(cli_config)[0].due_date == date.today() + timedelta(days=2)

    def test_blank_title(self, cli_config):
        result = _invoke("add", "   ")
        assert result.exit_code == ERROR_INVALID_ARGS
        assert _all_tasks(cli_config) == []

    def test_bad_due_date(self):
        result = _invoke("add", "Title", "--due", "someday")
        assert result.exit_code == ERROR_INVALID_ARGS
        assert "Invalid due date" in result.output

    def test_unknown_category(self):
        result = _invoke("add", "Title", "-c", "Nowhere")
        assert result.exit_code == ERROR_NOT_FOUND


class TestList:
    @pytest.fixture
    def seeded(self, cli_config):
        _invoke("add", "Write report", "-c", "1")
        _invoke("add", "Buy milk", "-c", "2")
        _invoke("add", "Old chore", "-c", "2")
        _invoke("done", "3")

    def test_list_hides_completed_by_default(self, seeded):
        result = _invoke("list", "-o", "json")
        assert result.exit_code == 0
        titles = [t["title"] for t in json.loads(result.output)]
        assert titles == ["Buy milk", "Write report"]

    def test_list_all(self, seeded):
        result = _invoke("list", "--all", "-o", "json")
        assert len(json.loads(result.output)) == 3

    def test_list_by_category_and_search(self, seeded):
        result = _invoke("list", "-c", "Personal", "-s", "MILK", "-o", "json")
        [task] = json.loads(result.output)
        assert task["title"] == "Buy milk"
        assert task["category"] == "👤 Personal"

    def test_configured_show_completed(self, seeded, cli_config):
        cli_config.set("output.show_completed", True)
        result = _invoke("list", "-o", "json")
        assert len(json.loads(result.output)) == 3

    def test_pretty_output(self, seeded):
        result = _invoke("list")
        assert result.exit_code == 0
        assert "Buy milk" in result.output
        assert "2 task(s)" in result.output

    def test_empty_list(self):
        result = _invoke("list")
        assert result.exit_code == 0
        assert "No items found" in result.output


class TestModify:
    @pytest.fixture(autouse=True)
    def one_task(self, cli_config):
        result = _invoke("add", "Draft", "-d", "first pass", "--due", "2025-01-01")
        assert result.exit_code == 0, result.output

    def test_task_is_stored_under_tmp_path(self, cli_config, tmp_path):
        assert cli_config.database_path.is_relative_to(tmp_path)
        assert [task.title for task in _all_tasks(cli_config)] == ["Draft"]

    def test_show(self):
        result = _invoke("show", "1", "-o", "json")
        assert json.loads(result.output)["description"] == "first pass"

    def test_show_missing(self):
        assert _invoke("show", "9").exit_code == ERROR_NOT_FOUND

    def test_edit_title_keeps_other_fields(self, cli_config):
        assert _invoke("edit", "1", "--title", "Final").exit_code == 0
        [task] = _all_tasks(cli_config)
        assert task.title == "Final"
        assert task.description == "first pass"
        assert task.due_date == date(2025, 1, 1)

    def test_edit_clear_due(self, cli_config):
        assert _invoke("edit", "1", "--clear-due").exit_code == 0
        assert _all_tasks(cli_config)[0].due_date is None

    def test_edit_without_changes(self):
        assert _invoke("edit", "1").exit_code == ERROR_INVALID_ARGS

    def test_done_and_undone(self, cli_config):
        assert _invoke("done", "1").exit_code == 0
        assert _all_tasks(cli_config)[0].is_done is True
        assert _invoke("undone", "1").exit_code == 0
        assert _all_tasks(cli_config)[0].is_done is False

    def test_toggle(self):
        result = _invoke("toggle", "1")
        assert result.exit_code == 0
        assert "is now done" in result.output

    def test_toggle_missing(self):
        assert _invoke("toggle", "9").exit_code == ERROR_NOT_FOUND

    def test_delete_with_confirmation(self, cli_config):
        result = _invoke("delete", "1", input="y\n")
        assert result.exit_code == 0
        assert _all_tasks(cli_config) == []

    def test_delete_cancelled(self, cli_config):
        result = _invoke("delete", "1", input="n\n")
        assert result.exit_code == 0
        assert len(_all_tasks(cli_config)) == 1

    def test_clear_completed(self, cli_config):
        _invoke("done", "1")
        result = _invoke("clear-completed", "--yes")
        assert "Deleted 1 completed task(s)" in result.output
        assert _all_tasks(cli_config) == []

    def test_search(self):
        result = _invoke("search", "DRAFT", "-o", "json")
        assert [t["id"] for t in json.loads(result.output)] == [1]

    def test_due(self):
        result = _invoke("due", "-o", "json")
        [task] = json.loads(result.output)
        assert task["is_overdue"] is True
