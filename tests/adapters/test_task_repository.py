"""Tests for SqliteTaskRepository against an in-memory database."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from tododesk.models import Persisted, Task
from tododesk.repositories import NotFound, Ok, StorageError

TODAY = date(2025, 3, 10)


@pytest.fixture
def add(task_repo):
    """Create a task and return it persisted."""

    def _add(title="Task", category_id=1, **kwargs) -> Task:
        return task_repo.create(Task(title=title, category_id=category_id, **kwargs)).value

    return _add


class TestCreate:
    def test_create_assigns_id(self, task_repo):
        task = Task(title="Write report", category_id=1)
        result = task_repo.create(task)
        assert isinstance(result, Ok)
        assert task.id == 1

    def test_create_persisted_task_is_rejected(self, task_repo, add):
        task = add("Once")
        result = task_repo.create(task)
        assert isinstance(result, StorageError)
        assert "already persisted" in result.detail
        assert task.id == 1
        assert task_repo.count() == Ok(1)

    def test_round_trip(self, task_repo, add):
        task = add(
            "Run 5k",
            category_id=2,
            description="Morning run",
            due_date=date(2025, 1, 10),
        )
        found = task_repo.find_by_id(task.id).value
        assert found.title == "Run 5k"
        assert found.description == "Morning run"
        assert found.category_id == 2
        assert found.due_date == date(2025, 1, 10)
        assert found.is_done is False
        assert found.created_at == task.created_at

    def test_unknown_category_is_storage_error(self, task_repo):
        task = Task(title="Orphan", category_id=99)
        assert isinstance(task_repo.create(task), StorageError)
        assert task.is_persisted is False

    def test_due_date_stored_as_iso_text(self, task_repo, add):
        task = add(due_date=date(2025, 1, 10))
        row = task_repo.connection.execute(
            "SELECT due_date FROM tasks WHERE id = ?", (task.id,)
        ).fetchone()
        assert row[0] == "2025-01-10"


class TestQueries:
    def test_find_by_id_missing(self, task_repo):
        assert isinstance(task_repo.find_by_id(1), NotFound)

    def test_find_all_newest_first(self, task_repo, add):
        add("old", created_at=date(2025, 1, 1))
        add("new", created_at=date(2025, 2, 1))
        add("newer same day", created_at=date(2025, 2, 1))
        titles = [t.title for t in task_repo.find_all().value]
        assert titles == ["newer same day", "new", "old"]

    def test_find_by_category(self, task_repo, add):
        add("work", category_id=1)
        add("home", category_id=2)
        assert [t.title for t in task_repo.find_by_category(2).value] == ["home"]

    def test_find_by_status(self, task_repo, add):
        add("open")
        add("closed", is_done=True)
        assert [t.title for t in task_repo.find_by_status(True).value] == ["closed"]
        assert [t.title for t in task_repo.find_by_status(False).value] == ["open"]

    def test_search_is_case_insensitive(self, task_repo, add):
        add("Buy MILK")
        add("Call mom", description="about the milk run")
        add("Unrelated")
        titles = {t.title for t in task_repo.search("Milk").value}
        assert titles == {"Buy MILK", "Call mom"}

    def test_search_handles_non_ascii(self, task_repo, add):
        add("ÄRGER beheben")
        assert [t.title for t in task_repo.search("ärger").value] == ["ÄRGER beheben"]

    def test_search_treats_wildcards_literally(self, task_repo, add):
        add("100% done")
        add("nothing here")
        assert [t.title for t in task_repo.search("%").value] == ["100% done"]

    def test_find_due_tasks(self, task_repo, add):
        add("future", due_date=TODAY + timedelta(days=1))
        add("today", due_date=TODAY)
        add("past", due_date=TODAY - timedelta(days=3))
        add("done past", due_date=TODAY - timedelta(days=3), is_done=True)
        add("no date")
        titles = [t.title for t in task_repo.find_due_tasks(TODAY).value]
        assert titles == ["past", "today"]

    def test_counts(self, task_repo, add):
        add(category_id=1)
        add(category_id=1)
        add(category_id=2)
        assert task_repo.count() == Ok(3)
        assert task_repo.count_by_category(1) == Ok(2)
        assert task_repo.count_by_category(3) == Ok(0)


class TestMutations:
    def test_update(self, task_repo, add):
        task = add("Draft", due_date=date(2025, 1, 1))
        task.title = "Final"
        task.due_date = None
        task.is_done = True
        assert task_repo.update(task) == Ok(True)

        found = task_repo.find_by_id(task.id).value
        assert found.title == "Final"
        assert found.due_date is None
        assert found.is_done is True

    def test_update_unpersisted_is_not_found(self, task_repo):
        assert isinstance(task_repo.update(Task(title="x", category_id=1)), NotFound)

    def test_update_missing_row_is_not_found(self, task_repo):
        ghost = Task(identity=Persisted(id=42), title="x", category_id=1)
        assert isinstance(task_repo.update(ghost), NotFound)

    def test_toggle_done_twice_restores(self, task_repo, add):
        task = add()
        assert task_repo.toggle_done(task.id) == Ok(True)
        assert task_repo.find_by_id(task.id).value.is_done is True
        task_repo.toggle_done(task.id)
        assert task_repo.find_by_id(task.id).value.is_done is False

    def test_toggle_missing_is_not_found(self, task_repo):
        assert isinstance(task_repo.toggle_done(42), NotFound)

    def test_delete(self, task_repo, add):
        task = add()
        assert task_repo.delete(task.id) == Ok(True)
        assert isinstance(task_repo.delete(task.id), NotFound)

    def test_delete_completed(self, task_repo, add):
        add("keep")
        add("drop 1", is_done=True)
        add("drop 2", is_done=True)
        assert task_repo.delete_completed() == Ok(2)
        assert [t.title for t in task_repo.find_all().value] == ["keep"]


class TestInvalidRows:
    def test_corrupt_row_is_storage_error(self, task_repo, add):
        task = add()
        task_repo.connection.execute("UPDATE tasks SET title = '  ' WHERE id = ?", (task.id,))
        task_repo.connection.commit()
        assert isinstance(task_repo.find_by_id(task.id), StorageError)

    def test_malformed_due_date_is_storage_error(self, task_repo, add):
        add()
        task_repo.connection.execute("UPDATE tasks SET due_date = 'soon'")
        task_repo.connection.commit()
        assert isinstance(task_repo.find_all(), StorageError)
        assert isinstance(task_repo.find_due_tasks(TODAY), StorageError)
