"""Presentation surface port for confirmation prompts (toast or dialog)."""

from typing import Protocol

from tasklist.domain.confirmation import PendingConfirmation


class ConfirmationSurface(Protocol):
    """Shows one confirmation prompt at a time.

    The surface reports the user's decision back through
    ``ConfirmationCoordinator.confirm(request_id)`` or
    ``ConfirmationCoordinator.dismiss(request_id)``.
    """

    def open(self, pending: PendingConfirmation) -> bool:
        """Show the prompt. Return False if it could not be shown."""
        ...

    def close(self, request_id: str) -> None:
        """Hide the prompt for ``request_id`` if it is still visible."""
        ...
