"""Tests for utils/ui/formatters.py."""

from __future__ import annotations

import json
from datetime import date

import pytest

from tododesk.models import Category, Persisted, Task, TaskStats
from tododesk.utils.ui import formatters


@pytest.fixture
def task():
    return Task(
        identity=Persisted(id=5),
        title="Pay [rent]",
        category_id=2,
        due_date=date(2025, 1, 10),
        created_at=date(2025, 1, 1),
    )


@pytest.fixture
def category():
    return Category(identity=Persisted(id=2), name="Personal", icon="👤")


class TestSerialization:
    def test_task_to_dict(self, task, category):
        data = formatters.task_to_dict(task, category)
        assert data["id"] == 5
        assert data["category"] == "👤 Personal"
        assert data["due_date"] == "2025-01-10"
        assert data["created_at"] == "2025-01-01"
        assert data["is_overdue"] is True

    def test_tasks_to_dicts_unknown_category(self, task):
        [data] = formatters.tasks_to_dicts([task], [])
        assert data["category"] is None

    def test_category_to_dict(self, category):
        assert formatters.category_to_dict(category, 3) == {
            "id": 2,
            "icon": "👤",
            "name": "Personal",
            "tasks": 3,
        }

    def test_stats_to_dict_rounds(self):
        data = formatters.stats_to_dict(TaskStats(total=3, completed=1, pending=2))
        assert data["completion_percentage"] == 33.3


class TestOutput:
    def test_json(self, capsys, task, category):
        formatters.format_output([formatters.task_to_dict(task, category)], "json")
        assert json.loads(capsys.readouterr().out)[0]["title"] == "Pay [rent]"

    def test_yaml(self, capsys, category):
        formatters.format_output(formatters.category_to_dict(category), "yaml")
        assert "name: Personal" in capsys.readouterr().out

    def test_table_escapes_markup(self, capsys):
        formatters.format_output([{"id": 1, "title": "Pay [rent]", "is_done": False}], "table")
        out = capsys.readouterr().out
        assert "Pay [rent]" in out
        assert "✗" in out

    def test_pretty_task_detail(self, capsys, task, category):
        formatters.format_output(formatters.task_to_dict(task, category), "pretty")
        out = capsys.readouterr().out
        assert "Pay [rent]" in out
        assert "overdue" in out

    def test_pretty_stats(self, capsys):
        formatters.format_output(
            formatters.stats_to_dict(TaskStats(total=4, completed=1, pending=3)), "pretty"
        )
        out = capsys.readouterr().out
        assert "25.0%" in out
        assert "▓▓░░░░░░░░" in out


@pytest.mark.parametrize(
    "percentage,bar,color",
    [(0, "░" * 10, "red"), (45, "▓" * 4 + "░" * 6, "yellow"), (100, "▓" * 10, "green")],
)
def test_progress_bar_and_color(percentage, bar, color):
    assert formatters.get_progress_bar(percentage) == bar
    assert formatters.get_completion_color(percentage) == color


@pytest.mark.parametrize(
    "data,expected",
    [
        ({"is_done": True, "is_overdue": True}, "done"),
        ({"is_done": False, "is_overdue": True}, "overdue"),
        ({"is_due_soon": True}, "due_soon"),
        ({}, "open"),
    ],
)
def test_task_status(data, expected):
    assert formatters.task_status(data) == expected
