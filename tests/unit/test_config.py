"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tasklist.core.config import Constants, Settings


@pytest.mark.unit
class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch) -> None:
        for name in ("STORAGE_PATH", "STORAGE_KEY", "TITLE_MAX_LENGTH", "CONFIRM_CLOSE_DELAY_MS", "SOUND_ENABLED"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.storage_path == Path(".local/tasklist/storage.json")
        assert settings.storage_key == "todo-app.todos.v1"
        assert settings.title_max_length == 120
        assert settings.confirm_close_delay_ms == 150
        assert settings.sound_enabled is True
        assert settings.logfire_token is None

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("STORAGE_KEY", "custom.key")
        monkeypatch.setenv("TITLE_MAX_LENGTH", "40")
        monkeypatch.setenv("SOUND_ENABLED", "false")

        settings = Settings(_env_file=None)

        assert settings.storage_key == "custom.key"
        assert settings.title_max_length == 40
        assert settings.sound_enabled is False

    @pytest.mark.parametrize(("delay_ms", "expected"), [(150, 0.15), (0, 0.0), (-20, 0.0)])
    def test_confirm_close_delay_seconds(self, delay_ms: int, expected: float) -> None:
        settings = Settings(confirm_close_delay_ms=delay_ms, _env_file=None)

        assert settings.confirm_close_delay_seconds == pytest.approx(expected)


@pytest.mark.unit
def test_confirmation_defaults() -> None:
    """Default confirmation copy matches the prompt shown to users."""
    assert Constants.CONFIRM_DEFAULT_TITLE == "Delete item?"
    assert Constants.CONFIRM_DEFAULT_MESSAGE == "Are you sure you want to continue?"
    assert Constants.CONFIRM_DEFAULT_CONFIRM_LABEL == "Confirm"
    assert Constants.CONFIRM_DEFAULT_CANCEL_LABEL == "Cancel"
    assert Constants.DEFAULT_STATUS_FILTER == "all"
