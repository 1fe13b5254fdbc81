"""Pytest configuration and fixtures for unit tests."""

import pytest

from tasklist.core.config import Settings
from tasklist.core.local_storage import InMemoryStorage
from tasklist.services.confirmation_service import ConfirmationCoordinator
from tasklist.services.persistence import TaskPersistence
from tasklist.services.task_store import TaskStore
from tests.unit.mocks import FakeClock, FakeSurface, RecordingNotifier, SequentialIds


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the developer's environment."""
    return Settings(
        storage_path=tmp_path / "storage.json",
        storage_key="todo-app.todos.v1",
        confirm_close_delay_ms=10,
        _env_file=None,
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def storage():
    """Provides a fresh InMemoryStorage for each test."""
    return InMemoryStorage()


@pytest.fixture
def persistence(storage, test_settings):
    return TaskPersistence(storage, key=test_settings.storage_key)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(persistence, notifier, test_settings, clock):
    """TaskStore over in-memory storage with a deterministic clock and ids."""
    task_store = TaskStore(persistence, notifier, settings=test_settings, clock=clock, id_factory=SequentialIds())
    yield task_store
    task_store.close()


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def coordinator(surface, notifier, test_settings):
    """Coordinator whose surface reports hides back as dismissals."""
    confirmation = ConfirmationCoordinator(surface, notifier, settings=test_settings)
    surface.on_hidden = confirmation.dismiss
    return confirmation
