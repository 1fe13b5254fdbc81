"""Test doubles for the notification sink, confirmation surface, storage and clock."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from tasklist.domain.confirmation import PendingConfirmation
from tasklist.interface.notifier import Notification, NotificationSeverity, SoundCue


class RecordingNotifier:
    """Notifier that records every notification and cue."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []
        self.cues: list[SoundCue] = []

    def notify(self, severity: NotificationSeverity, message: str) -> None:
        self.notifications.append(Notification(severity=severity, message=message))

    def play(self, cue: SoundCue) -> None:
        self.cues.append(cue)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None

    def messages(self, severity: NotificationSeverity | None = None) -> list[str]:
        return [n.message for n in self.notifications if severity is None or n.severity == severity]

    def reset(self) -> None:
        self.notifications.clear()
        self.cues.clear()


class FakeSurface:
    """Confirmation surface that records opens and closes.

    ``on_hidden`` mimics a toast reporting that it was hidden; wire it to
    ``ConfirmationCoordinator.dismiss`` to reproduce real surface behaviour.
    """

    def __init__(self, *, accept_opens: bool = True) -> None:
        self.accept_opens = accept_opens
        self.opened: list[PendingConfirmation] = []
        self.closed: list[str] = []
        self.on_hidden: Callable[[str], object] | None = None

    def open(self, pending: PendingConfirmation) -> bool:
        if not self.accept_opens:
            return False
        self.opened.append(pending)
        return True

    def close(self, request_id: str) -> None:
        self.closed.append(request_id)
        if self.on_hidden is not None:
            self.on_hidden(request_id)

    @property
    def current(self) -> PendingConfirmation:
        return self.opened[-1]


class FailingStorage:
    """Storage whose reads and/or writes raise."""

    def __init__(self, *, fail_reads: bool = False, fail_writes: bool = True) -> None:
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("storage unavailable")
        return None

    def set_item(self, key: str, value: str) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise OSError("quota exceeded")

    def remove_item(self, key: str) -> None:
        return None


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def tick(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class SequentialIds:
    """Deterministic id factory: task-1, task-2, ..."""

    def __init__(self) -> None:
        self._counter = 0

    def __call__(self) -> str:
        self._counter += 1
        return f"task-{self._counter}"
