"""Persistence adapter between the task store and local storage.

Pure serialization boundary: reads degrade to an empty collection and
writes report failure through a ``PersistenceResult`` instead of raising.
"""

import json
import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field, ValidationError

from tasklist.core.local_storage import KeyValueStorage
from tasklist.core.logging import span
from tasklist.domain.task import Task


logger = logging.getLogger(__name__)


class PersistenceResult(BaseModel):
    """Outcome of writing the task collection."""

    success: bool = Field(..., description="Whether the collection was written")
    skipped: bool = Field(default=False, description="True when no storage is available")
    error: str | None = Field(default=None, description="Error message if the write failed")


class TaskPersistence:
    """Reads and writes the task collection under a single storage key."""

    def __init__(self, storage: KeyValueStorage | None, *, key: str) -> None:
        self._storage = storage
        self._key = key

    @property
    def available(self) -> bool:
        return self._storage is not None

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Task]:
        """Load the stored collection.

        Returns an empty list when storage is unavailable, the key is missing,
        the record cannot be parsed, or it is not a JSON array. Individual
        malformed entries and duplicate ids are dropped.
        """
        if self._storage is None:
            return []

        with span("task_persistence.load"):
            try:
                raw = self._storage.get_item(self._key)
            except Exception as e:
                logger.warning("Failed to read tasks from storage: %s", e)
                return []

            if not raw:
                return []

            try:
                parsed = json.loads(raw)
            except ValueError as e:
                logger.warning("Failed to parse tasks from storage: %s", e)
                return []

            if not isinstance(parsed, list):
                logger.warning("Stored tasks are not a list (got %s); ignoring", type(parsed).__name__)
                return []

            return _parse_records(parsed)

    def save(self, tasks: Iterable[Task]) -> PersistenceResult:
        """Serialize and write the full collection. Never raises."""
        if self._storage is None:
            return PersistenceResult(success=False, skipped=True)

        with span("task_persistence.save"):
            try:
                payload = json.dumps([task.to_record() for task in tasks], ensure_ascii=False)
                self._storage.set_item(self._key, payload)
            except Exception as e:
                logger.error("Unable to persist tasks to storage", extra={"key": self._key, "error": str(e)})
                return PersistenceResult(success=False, error=str(e))

            return PersistenceResult(success=True)


def _parse_records(records: list[object]) -> list[Task]:
    tasks: list[Task] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        try:
            task = Task.model_validate(record)
        except ValidationError as e:
            logger.warning("Dropping malformed stored task at index %d: %s", index, e.error_count())
            continue
        if task.id in seen:
            logger.warning("Dropping duplicate stored task id=%s", task.id)
            continue
        seen.add(task.id)
        tasks.append(task)
    return tasks
