"""Error taxonomy for task store operations.

Store helpers raise these exceptions; the public store operations catch them
at the boundary and turn them into notifications.
"""

from enum import Enum

from pydantic import BaseModel

from tasklist.interface.notifier import NotificationSeverity


class ErrorCategory(Enum):
    """Categories of failures a store operation can end in."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    NO_OP = "no_op"
    PERSISTENCE_FAILURE = "persistence_failure"
    UNKNOWN = "unknown"


class ErrorResponse(BaseModel):
    """Structured error description used for user-facing messaging."""

    category: ErrorCategory
    message: str
    severity: NotificationSeverity


class TaskStoreError(Exception):
    """Base class for failures handled at the store boundary."""

    category: ErrorCategory = ErrorCategory.UNKNOWN
    severity: NotificationSeverity = NotificationSeverity.ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskStoreError):
    """Payload rejected (empty or over-long title)."""

    category = ErrorCategory.VALIDATION


class TaskNotFoundError(TaskStoreError):
    """Mutation targeted an id that is not in the collection."""

    category = ErrorCategory.NOT_FOUND


class NothingToClearError(TaskStoreError):
    """Clear-completed found nothing to remove. Informational only."""

    category = ErrorCategory.NO_OP
    severity = NotificationSeverity.INFO


def classify_store_error(exception: Exception) -> ErrorResponse:
    """Classify an exception raised inside a store operation.

    Args:
        exception: The exception raised while preparing a mutation

    Returns:
        ErrorResponse with category, message and notification severity
    """
    if isinstance(exception, TaskStoreError):
        return ErrorResponse(
            category=exception.category,
            message=exception.message,
            severity=exception.severity,
        )

    return ErrorResponse(
        category=ErrorCategory.UNKNOWN,
        message="Something went wrong. Please try again.",
        severity=NotificationSeverity.ERROR,
    )
