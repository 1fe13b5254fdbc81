"""Display-layer controllers: task list actions and the add/edit form."""

import logging

from tasklist.domain.task import StatusFilter, Task, TaskChanges, TaskPayload
from tasklist.services.confirmation_service import ConfirmationCoordinator
from tasklist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


class TaskListController:
    """Actions behind the task list and the filter tabs."""

    FILTERS: tuple[tuple[str, StatusFilter], ...] = (
        ("All", StatusFilter.ALL),
        ("Active", StatusFilter.ACTIVE),
        ("Completed", StatusFilter.COMPLETED),
    )

    def __init__(self, store: TaskStore, confirmation: ConfirmationCoordinator) -> None:
        self._store = store
        self._confirmation = confirmation

    def toggle(self, task: Task) -> None:
        self._store.toggle(task.id)

    async def remove(self, task: Task) -> bool:
        """Remove ``task`` once the user confirms.

        Returns:
            True if the user confirmed (and removal was attempted)
        """
        confirmed = await self._confirmation.confirm_deletion(task.title)
        if not confirmed:
            logger.debug("Removal of task %s declined", task.id)
            return False

        self._store.remove(task.id)
        return True

    def clear_completed(self) -> None:
        self._store.clear_completed()

    def select_filter(self, status_filter: StatusFilter) -> None:
        self._store.set_filter(status_filter)


class TaskForm:
    """Add/edit form. Submits ``update`` while editing, otherwise ``add``."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._editing: Task | None = None

    @property
    def editing(self) -> Task | None:
        return self._editing

    @property
    def is_editing(self) -> bool:
        return self._editing is not None

    def edit(self, task: Task) -> None:
        self._editing = task

    def cancel(self) -> None:
        self._editing = None

    def submit(self, title: str, description: str = "", due_date: str = "") -> bool:
        """Submit the form fields.

        Returns:
            False if the title is blank (nothing is sent to the store)
        """
        trimmed_title = title.strip()
        if not trimmed_title:
            return False

        if self._editing is not None:
            self._store.update(
                self._editing.id,
                TaskChanges(title=trimmed_title, description=description.strip(), due_date=due_date or None),
            )
            self._editing = None
            return True

        self._store.add(TaskPayload(title=trimmed_title, description=description.strip(), due_date=due_date or None))
        return True
