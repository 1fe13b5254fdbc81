"""Domain models and DTOs."""

from tasklist.domain.confirmation import (
    ConfirmationContext,
    ConfirmationState,
    ConfirmationTone,
    PendingConfirmation,
)
from tasklist.domain.task import StatusFilter, Task, TaskChanges, TaskPayload, TaskStats


__all__ = [
    "ConfirmationContext",
    "ConfirmationState",
    "ConfirmationTone",
    "PendingConfirmation",
    "StatusFilter",
    "Task",
    "TaskChanges",
    "TaskPayload",
    "TaskStats",
]
