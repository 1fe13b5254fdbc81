"""Unit tests for the task persistence adapter."""

import json
from datetime import UTC, datetime, timedelta

import pytest

from tasklist.core.local_storage import InMemoryStorage
from tasklist.domain.task import Task
from tasklist.services.persistence import TaskPersistence
from tests.unit.mocks import FailingStorage


KEY = "todo-app.todos.v1"


def _collection() -> list[Task]:
    created = datetime(2026, 3, 1, 8, 30, 15, 123456, tzinfo=UTC)
    return [
        Task(id="a", title="Buy milk", created_at=created, updated_at=created),
        Task(
            id="b",
            title="Walk dog",
            description="Around the park",
            due_date="2026-03-02",
            completed=True,
            created_at=created + timedelta(minutes=5),
            updated_at=created + timedelta(minutes=9),
        ),
    ]


@pytest.mark.unit
class TestTaskPersistence:
    """Tests for TaskPersistence.load and TaskPersistence.save."""

    def test_round_trip(self, persistence):
        tasks = _collection()

        result = persistence.save(tasks)

        assert result.success is True
        assert persistence.load() == tasks

    def test_record_uses_camel_case_and_omits_absent_fields(self, persistence, storage):
        persistence.save(_collection())

        records = json.loads(storage.get_item(KEY))
        assert set(records[0]) == {"id", "title", "completed", "createdAt", "updatedAt"}
        assert records[1]["dueDate"] == "2026-03-02"
        assert records[1]["description"] == "Around the park"

    def test_missing_key_loads_empty(self, persistence):
        assert persistence.load() == []

    @pytest.mark.parametrize("raw", ["{not json", '{"id": "a"}', '"text"', "42", "null"])
    def test_corrupted_record_loads_empty(self, raw):
        persistence = TaskPersistence(InMemoryStorage({KEY: raw}), key=KEY)

        assert persistence.load() == []

    def test_malformed_entries_and_duplicates_are_dropped(self):
        good = _collection()[0].to_record()
        blank_title = {**good, "id": "blank", "title": "   "}
        raw = json.dumps([good, {"id": "x"}, "junk", blank_title, good])
        persistence = TaskPersistence(InMemoryStorage({KEY: raw}), key=KEY)

        loaded = persistence.load()

        assert [task.id for task in loaded] == ["a"]

    def test_naive_timestamps_are_read_as_utc(self):
        raw = json.dumps(
            [{"id": "a", "title": "Old", "completed": False, "createdAt": "2025-05-01T10:00:00", "updatedAt": "2025-05-01T10:00:00"}]
        )
        persistence = TaskPersistence(InMemoryStorage({KEY: raw}), key=KEY)

        [task] = persistence.load()

        assert task.created_at.tzinfo is not None

    def test_read_failure_loads_empty(self):
        persistence = TaskPersistence(FailingStorage(fail_reads=True), key=KEY)

        assert persistence.load() == []

    def test_write_failure_returns_result(self):
        persistence = TaskPersistence(FailingStorage(fail_writes=True), key=KEY)

        result = persistence.save(_collection())

        assert result.success is False
        assert result.skipped is False
        assert "quota exceeded" in result.error

    def test_no_storage_skips(self):
        persistence = TaskPersistence(None, key=KEY)

        assert persistence.available is False
        assert persistence.load() == []
        assert persistence.save(_collection()).skipped is True
