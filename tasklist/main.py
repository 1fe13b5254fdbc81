"""tasklist - client-side task list with a reactive store."""

import logging
from dataclasses import dataclass

from tasklist.core.config import Settings
from tasklist.core.config import settings as default_settings
from tasklist.core.local_storage import JsonFileStorage, KeyValueStorage
from tasklist.core.logging import configure_logfire
from tasklist.interface.confirmation_surface import ConfirmationSurface
from tasklist.interface.notifier import LoggingNotifier, Notifier
from tasklist.interface.task_list import TaskForm, TaskListController
from tasklist.services.confirmation_service import ConfirmationCoordinator
from tasklist.services.persistence import TaskPersistence
from tasklist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


@dataclass
class TaskListApp:
    """Everything the display layer needs, constructed once at startup."""

    settings: Settings
    store: TaskStore
    confirmation: ConfirmationCoordinator
    task_list: TaskListController
    form: TaskForm

    def close(self) -> None:
        self.store.close()
        logger.info("tasklist shut down")


def create_app(
    *,
    surface: ConfirmationSurface,
    notifier: Notifier | None = None,
    storage: KeyValueStorage | None = None,
    settings: Settings | None = None,
    configure_logging: bool = False,
) -> TaskListApp:
    """Build the application graph.

    Args:
        surface: Presentation surface for confirmation prompts
        notifier: Notification sink (defaults to a LoggingNotifier)
        storage: Local storage (defaults to a JsonFileStorage at settings.storage_path)
        settings: Settings to use (defaults to the environment-loaded settings)
        configure_logging: Configure Logfire before building anything

    Returns:
        TaskListApp holding the store, coordinator and controllers
    """
    settings = settings or default_settings
    if configure_logging:
        configure_logfire(settings)

    notifier = notifier or LoggingNotifier(sound_enabled=settings.sound_enabled)
    storage = storage if storage is not None else JsonFileStorage(settings.storage_path)

    persistence = TaskPersistence(storage, key=settings.storage_key)
    store = TaskStore(persistence, notifier, settings=settings)
    confirmation = ConfirmationCoordinator(surface, notifier, settings=settings)

    logger.info("tasklist started", extra={"storage_key": settings.storage_key})
    return TaskListApp(
        settings=settings,
        store=store,
        confirmation=confirmation,
        task_list=TaskListController(store, confirmation),
        form=TaskForm(store),
    )
