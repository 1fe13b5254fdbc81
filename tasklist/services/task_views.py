"""Derived views over the task collection.

Pure functions of ``(tasks, filter)``; the store wires them to its streams
so they are recomputed on every commit and every filter change.
"""

from collections.abc import Sequence

from tasklist.core.streams import DerivedStream, StateStream, combine_latest, map_stream
from tasklist.domain.task import StatusFilter, Task, TaskStats


def filter_tasks(tasks: Sequence[Task], status_filter: StatusFilter) -> tuple[Task, ...]:
    """Apply the status filter and sort newest first by ``created_at``."""
    if status_filter == StatusFilter.ACTIVE:
        selected = [task for task in tasks if not task.completed]
    elif status_filter == StatusFilter.COMPLETED:
        selected = [task for task in tasks if task.completed]
    else:
        selected = list(tasks)

    return tuple(sorted(selected, key=lambda task: task.created_at, reverse=True))


def compute_stats(tasks: Sequence[Task]) -> TaskStats:
    """Count tasks over the unfiltered collection."""
    completed = sum(1 for task in tasks if task.completed)
    return TaskStats(total=len(tasks), active=len(tasks) - completed, completed=completed)


def find_task(tasks: Sequence[Task], task_id: str) -> Task | None:
    return next((task for task in tasks if task.id == task_id), None)


class DerivedViewEngine:
    """Filtered list and stats streams recomputed from the store's raw streams."""

    def __init__(
        self,
        tasks: StateStream[tuple[Task, ...]],
        status_filter: StateStream[StatusFilter],
    ) -> None:
        self._tasks = tasks
        self.filtered_tasks: DerivedStream[tuple[Task, ...]] = combine_latest(
            tasks, status_filter, filter_tasks, name="filtered_tasks"
        )
        self.stats: DerivedStream[TaskStats] = map_stream(tasks, compute_stats, name="stats")
        self._selections: list[DerivedStream[Task | None]] = []

    def select(self, task_id: str) -> DerivedStream[Task | None]:
        """Stream yielding the task with ``task_id``, or None once it is gone."""
        selection = map_stream(self._tasks, lambda tasks: find_task(tasks, task_id), name=f"task:{task_id}")
        self._selections.append(selection)
        return selection

    def dispose(self) -> None:
        self.filtered_tasks.dispose()
        self.stats.dispose()
        for selection in self._selections:
            selection.dispose()
        self._selections.clear()
