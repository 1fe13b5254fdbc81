"""Reactive task store.

Owns the authoritative task collection and the active status filter. Every
successful mutation is a commit: the collection is replaced (never mutated
in place), published synchronously to all subscribers, then persisted on a
best-effort basis. Failures never escape; they become notifications.
"""

import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from tasklist.core.config import Settings, constants
from tasklist.core.config import settings as default_settings
from tasklist.core.errors import (
    ErrorCategory,
    NothingToClearError,
    TaskNotFoundError,
    TaskStoreError,
    TaskValidationError,
    classify_store_error,
)
from tasklist.core.logging import log_with_context, span
from tasklist.core.streams import DerivedStream, StateStream
from tasklist.domain.task import StatusFilter, Task, TaskChanges, TaskPayload, TaskStats
from tasklist.interface.notifier import NotificationSeverity, Notifier, SoundCue
from tasklist.services.persistence import TaskPersistence
from tasklist.services.task_views import DerivedViewEngine


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MSG_TITLE_REQUIRED = "Please provide a title for the task."
MSG_TITLE_EMPTY = "Task title cannot be empty."
MSG_NOT_FOUND = "Task could not be found."
MSG_INVALID_DETAILS = "Task details are invalid."


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class TaskStore:
    """Authoritative task collection with push-based views.

    Streams (each replays its current value on subscribe):
        tasks: full collection, in insertion order
        filter: active StatusFilter
        filtered_tasks: filtered collection, newest first
        stats: counters over the unfiltered collection
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        notifier: Notifier,
        *,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._settings = settings or default_settings
        self._persistence = persistence
        self._notifier = notifier
        self._clock = clock
        self._id_factory = id_factory

        self.tasks: StateStream[tuple[Task, ...]] = StateStream(tuple(persistence.load()), name="tasks")
        self.filter: StateStream[StatusFilter] = StateStream(
            StatusFilter(constants.DEFAULT_STATUS_FILTER), name="filter"
        )

        # Subscribed before anyone else so views are fresh when other subscribers run
        self._views = DerivedViewEngine(self.tasks, self.filter)
        self.filtered_tasks: DerivedStream[tuple[Task, ...]] = self._views.filtered_tasks
        self.stats: DerivedStream[TaskStats] = self._views.stats

        logger.info("TaskStore ready total=%d", len(self.tasks.value))

    # ---- mutations ----

    def add(self, payload: TaskPayload | Mapping[str, Any]) -> None:
        """Create a task from ``payload``; rejects empty or over-long titles."""
        with span("task_store.add"):
            try:
                task = self._build_task(self._coerce(payload, TaskPayload))
            except TaskStoreError as e:
                self._report("add", e)
                return

            self._commit((*self.tasks.value, task))
            log_with_context(logger, "info", "Task added", task_id=task.id, operation="add")
            self._notifier.notify(NotificationSeverity.SUCCESS, "Task added to your list.")
            self._notifier.play(SoundCue.ADD_ITEM)

    def update(self, task_id: str, changes: TaskChanges | Mapping[str, Any]) -> None:
        """Apply the explicitly supplied fields of ``changes`` to one task.

        The whole update aborts if any supplied field is invalid.
        """
        with span("task_store.update"):
            try:
                prepared = self._prepare_changes(self._coerce(changes, TaskChanges))
                if not prepared:
                    logger.debug("Update for task %s carried no changes", task_id)
                    return

                index, current = self._locate(task_id)
            except TaskStoreError as e:
                self._report("update", e, task_id=task_id)
                return

            updated = current.model_copy(update={**prepared, "updated_at": self._stamp(current)})
            next_tasks = list(self.tasks.value)
            next_tasks[index] = updated
            self._commit(tuple(next_tasks))
            log_with_context(
                logger, "info", "Task updated", task_id=task_id, fields=sorted(prepared), operation="update"
            )
            self._notifier.notify(NotificationSeverity.INFO, "Task updated.")

    def toggle(self, task_id: str) -> None:
        """Flip completion; the completion cue plays only on false -> true."""
        with span("task_store.toggle"):
            try:
                index, current = self._locate(task_id)
            except TaskStoreError as e:
                self._report("toggle", e, task_id=task_id)
                return

            now_completed = not current.completed
            next_tasks = list(self.tasks.value)
            next_tasks[index] = current.model_copy(
                update={"completed": now_completed, "updated_at": self._stamp(current)}
            )
            self._commit(tuple(next_tasks))
            log_with_context(
                logger, "info", "Task toggled", task_id=task_id, completed=now_completed, operation="toggle"
            )

            if now_completed:
                self._notifier.notify(NotificationSeverity.SUCCESS, "Task completed. Nice work!")
                self._notifier.play(SoundCue.COMPLETE)
            else:
                self._notifier.notify(NotificationSeverity.SUCCESS, "Task reopened. Keep going!")

    def remove(self, task_id: str) -> None:
        with span("task_store.remove"):
            remaining = tuple(task for task in self.tasks.value if task.id != task_id)
            if len(remaining) == len(self.tasks.value):
                self._report("remove", TaskNotFoundError(MSG_NOT_FOUND), task_id=task_id)
                return

            self._commit(remaining)
            log_with_context(logger, "info", "Task removed", task_id=task_id, operation="remove")
            self._notifier.notify(NotificationSeverity.WARNING, "Task removed.")
            self._notifier.play(SoundCue.DELETE)

    def clear_completed(self) -> None:
        with span("task_store.clear_completed"):
            remaining = tuple(task for task in self.tasks.value if not task.completed)
            removed = len(self.tasks.value) - len(remaining)
            if removed == 0:
                self._report("clear_completed", NothingToClearError("No completed tasks to clear."))
                return

            self._commit(remaining)
            log_with_context(logger, "info", "Completed tasks cleared", removed=removed, operation="clear_completed")
            self._notifier.notify(NotificationSeverity.INFO, "Completed tasks cleared.")

    def set_filter(self, status_filter: StatusFilter | str) -> None:
        try:
            value = StatusFilter(status_filter)
        except ValueError:
            logger.warning("Ignoring unknown status filter %r", status_filter)
            return
        self.filter.publish(value)

    # ---- queries ----

    def select(self, task_id: str) -> DerivedStream[Task | None]:
        """Stream of the task with ``task_id`` (None when absent)."""
        return self._views.select(task_id)

    def get(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks.value if task.id == task_id), None)

    def close(self) -> None:
        """Release derived stream subscriptions."""
        self._views.dispose()

    # ---- internals ----

    def _commit(self, next_tasks: tuple[Task, ...]) -> None:
        self.tasks.publish(next_tasks)
        result = self._persistence.save(next_tasks)
        if not result.success and not result.skipped:
            log_with_context(
                logger,
                "warning",
                "Commit kept in memory only",
                category=ErrorCategory.PERSISTENCE_FAILURE.value,
                error=result.error,
            )

    def _report(self, operation: str, error: TaskStoreError, **context: object) -> None:
        response = classify_store_error(error)
        level = "info" if response.category == ErrorCategory.NO_OP else "warning"
        log_with_context(
            logger,
            level,
            f"{operation} aborted: {response.message}",
            category=response.category.value,
            operation=operation,
            **context,
        )
        self._notifier.notify(response.severity, response.message)

    @staticmethod
    def _coerce(payload: ModelT | Mapping[str, Any], model: type[ModelT]) -> ModelT:
        if isinstance(payload, model):
            return payload
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise TaskValidationError(MSG_INVALID_DETAILS) from e

    def _locate(self, task_id: str) -> tuple[int, Task]:
        for index, task in enumerate(self.tasks.value):
            if task.id == task_id:
                return index, task
        raise TaskNotFoundError(MSG_NOT_FOUND)

    def _validate_title(self, raw: str, *, empty_message: str) -> str:
        title = raw.strip()
        if not title:
            raise TaskValidationError(empty_message)
        limit = self._settings.title_max_length
        if len(title) > limit:
            raise TaskValidationError(f"Task title must be at most {limit} characters.")
        return title

    def _build_task(self, payload: TaskPayload) -> Task:
        title = self._validate_title(payload.title, empty_message=MSG_TITLE_REQUIRED)
        now = self._clock()
        return Task(
            id=self._unique_id(),
            title=title,
            description=(payload.description or "").strip() or None,
            due_date=payload.due_date or None,
            completed=False,
            created_at=now,
            updated_at=now,
        )

    def _prepare_changes(self, changes: TaskChanges) -> dict[str, Any]:
        prepared: dict[str, Any] = {}
        supplied = changes.model_fields_set

        if "title" in supplied:
            if changes.title is None:
                raise TaskValidationError(MSG_TITLE_EMPTY)
            prepared["title"] = self._validate_title(changes.title, empty_message=MSG_TITLE_EMPTY)

        if "description" in supplied:
            prepared["description"] = (changes.description or "").strip() or None

        if "due_date" in supplied:
            prepared["due_date"] = changes.due_date or None

        return prepared

    def _unique_id(self) -> str:
        existing = {task.id for task in self.tasks.value}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id

    def _stamp(self, task: Task) -> datetime:
        """Current time, forced strictly past the task's last update."""
        now = self._clock()
        if now <= task.updated_at:
            return task.updated_at + timedelta(microseconds=1)
        return now
