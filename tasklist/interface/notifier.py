"""Notification sink: user-facing messages and audio cues.

The core only calls into a ``Notifier``; it never waits for or depends on
what the sink does with a notification.
"""

import logging
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel


logger = logging.getLogger(__name__)


class NotificationSeverity(StrEnum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class SoundCue(StrEnum):
    """Audio cues emitted alongside notifications."""

    ADD_ITEM = "add_item"
    COMPLETE = "complete"
    DELETE = "delete"
    CONFIRMATION = "confirmation"
    WARNING = "warning"


class Notification(BaseModel):
    """A single user-facing message."""

    severity: NotificationSeverity
    message: str


class Notifier(Protocol):
    """Fire-and-forget notification sink."""

    def notify(self, severity: NotificationSeverity, message: str) -> None: ...

    def play(self, cue: SoundCue) -> None: ...


_LOG_LEVELS: dict[NotificationSeverity, int] = {
    NotificationSeverity.SUCCESS: logging.INFO,
    NotificationSeverity.INFO: logging.INFO,
    NotificationSeverity.WARNING: logging.WARNING,
    NotificationSeverity.ERROR: logging.ERROR,
}


class LoggingNotifier:
    """Notifier that writes notifications to the application log."""

    def __init__(self, *, sound_enabled: bool = True) -> None:
        self._sound_enabled = sound_enabled

    def notify(self, severity: NotificationSeverity, message: str) -> None:
        logger.log(_LOG_LEVELS[severity], message, extra={"severity": severity.value})

    def play(self, cue: SoundCue) -> None:
        if not self._sound_enabled:
            return
        logger.debug("Playing sound cue %s", cue.value)
