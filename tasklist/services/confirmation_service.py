"""Confirmation coordinator for destructive actions.

At most one confirmation is pending at a time. ``request`` opens the
presentation surface and returns a future resolved exactly once: ``True``
when the user confirms, ``False`` when the surface is dismissed any other
way. Whichever signal arrives first wins; later signals for the same
request are ignored.

Opening a new request preempts the pending one: its surface is closed and
its decision resolves ``False``. Cancelling a decision future releases the
slot and closes its surface.
"""

import asyncio
import logging
import uuid

from tasklist.core.config import Settings, constants
from tasklist.core.config import settings as default_settings
from tasklist.core.logging import span
from tasklist.domain.confirmation import (
    ConfirmationContext,
    ConfirmationState,
    ConfirmationTone,
    PendingConfirmation,
)
from tasklist.interface.confirmation_surface import ConfirmationSurface
from tasklist.interface.notifier import Notifier, SoundCue


logger = logging.getLogger(__name__)


class ConfirmationCoordinator:
    """Single-slot confirmation state machine (idle | pending)."""

    def __init__(
        self,
        surface: ConfirmationSurface,
        notifier: Notifier,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._surface = surface
        self._notifier = notifier
        self._settings = settings or default_settings
        self._pending: PendingConfirmation | None = None

    @property
    def state(self) -> ConfirmationState:
        return ConfirmationState.IDLE if self._pending is None else ConfirmationState.PENDING

    @property
    def pending(self) -> PendingConfirmation | None:
        return self._pending

    def request(self, context: ConfirmationContext | None = None) -> asyncio.Future[bool]:
        """Open a confirmation and return its eventual decision.

        Must be called from a running event loop. The surface opens before
        this method returns, so requests are ordered by call time.
        """
        loop = asyncio.get_running_loop()
        context = context or ConfirmationContext()

        with span("confirmation.request"):
            self._preempt()

            pending = PendingConfirmation(
                request_id=uuid.uuid4().hex,
                context=context,
                decision=loop.create_future(),
            )
            self._pending = pending
            pending.decision.add_done_callback(lambda _: self._on_cancelled(pending))

            if not self._surface.open(pending):
                logger.warning("Confirmation surface did not open; treating request as declined")
                self._resolve(pending, decision=False)
                return pending.decision

            logger.debug("Confirmation %s opened: %s", pending.request_id, context.title)
            self._notifier.play(SoundCue.WARNING)
            return pending.decision

    def confirm_deletion(self, task_title: str) -> asyncio.Future[bool]:
        """Ask the user to confirm removing the task titled ``task_title``."""
        return self.request(
            ConfirmationContext(
                title=constants.DELETE_CONFIRM_TITLE,
                message=f'Are you sure you want to remove "{task_title}"?',
                confirm_label=constants.DELETE_CONFIRM_LABEL,
                cancel_label=constants.CONFIRM_DEFAULT_CANCEL_LABEL,
                tone=ConfirmationTone.DANGER,
            )
        )

    def confirm(self, request_id: str) -> bool:
        """Inbound signal: the user confirmed ``request_id``.

        Resolves the decision as True, plays the confirmation cue and closes
        the surface after a short delay so the cue can play.

        Returns:
            True if this signal resolved the request, False if it was ignored
        """
        pending = self._current(request_id)
        if pending is None:
            return False

        self._resolve(pending, decision=True)
        self._notifier.play(SoundCue.CONFIRMATION)

        delay = self._settings.confirm_close_delay_seconds
        asyncio.get_running_loop().call_later(delay, self._surface.close, request_id)
        return True

    def dismiss(self, request_id: str) -> bool:
        """Inbound signal: the surface for ``request_id`` closed without confirmation.

        Returns:
            True if this signal resolved the request, False if it was ignored
        """
        pending = self._current(request_id)
        if pending is None:
            return False

        self._resolve(pending, decision=False)
        return True

    def _current(self, request_id: str) -> PendingConfirmation | None:
        pending = self._pending
        if pending is None or pending.request_id != request_id or pending.resolved:
            logger.debug("Ignoring signal for stale confirmation %s", request_id)
            return None
        return pending

    def _resolve(self, pending: PendingConfirmation, *, decision: bool) -> None:
        if not pending.decision.done():
            pending.decision.set_result(decision)
        if self._pending is pending:
            self._pending = None
        logger.debug("Confirmation %s resolved: %s", pending.request_id, decision)

    def _on_cancelled(self, pending: PendingConfirmation) -> None:
        """Release the slot when the caller cancels the decision future."""
        if not pending.decision.cancelled():
            return

        logger.info("Confirmation %s cancelled by its caller", pending.request_id)
        if self._pending is pending:
            self._pending = None
            self._surface.close(pending.request_id)

    def _preempt(self) -> None:
        previous = self._pending
        if previous is None:
            return

        logger.info("Confirmation %s preempted by a new request", previous.request_id)
        self._resolve(previous, decision=False)
        self._surface.close(previous.request_id)
