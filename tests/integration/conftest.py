"""Pytest configuration and fixtures for integration tests."""

import pytest

from tasklist.core.config import Settings
from tasklist.main import create_app
from tests.unit.mocks import FakeSurface, RecordingNotifier


@pytest.fixture
def app_settings(tmp_path):
    """Settings backed by a JSON storage file in a temporary directory."""
    return Settings(
        storage_path=tmp_path / "tasklist" / "storage.json",
        confirm_close_delay_ms=10,
        _env_file=None,
    )


@pytest.fixture
def make_app(app_settings):
    """Factory building a fully wired app; every app built is closed on teardown."""
    apps = []

    def _make(**overrides):
        surface = overrides.pop("surface", FakeSurface())
        notifier = overrides.pop("notifier", RecordingNotifier())
        app = create_app(surface=surface, notifier=notifier, settings=app_settings, **overrides)
        if surface.on_hidden is None:
            surface.on_hidden = app.confirmation.dismiss
        apps.append(app)
        return app, surface, notifier

    yield _make

    for app in apps:
        app.close()
