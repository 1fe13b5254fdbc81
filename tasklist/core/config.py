"""Configuration management for tasklist."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Local storage
    storage_path: Path = Field(
        default=Path(".local/tasklist/storage.json"),
        description="JSON file backing the local key-value storage",
    )
    storage_key: str = Field(default="todo-app.todos.v1", description="Storage key holding the task collection")

    # Task validation
    title_max_length: int = Field(default=120, description="Maximum task title length after trimming")

    # Confirmation
    confirm_close_delay_ms: int = Field(
        default=150,
        description="Delay before closing the confirmation surface after an affirmative decision",
    )

    # Feedback
    sound_enabled: bool = Field(default=True, description="Enable/disable audio cues")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment reported to Logfire")

    @property
    def confirm_close_delay_seconds(self) -> float:
        """Confirmation close delay in seconds."""
        return max(self.confirm_close_delay_ms, 0) / 1000


# Application Constants
class Constants:
    """Application-wide constants."""

    # Filter shown on startup
    DEFAULT_STATUS_FILTER: str = "all"

    # Confirmation defaults
    CONFIRM_DEFAULT_TITLE: str = "Delete item?"
    CONFIRM_DEFAULT_MESSAGE: str = "Are you sure you want to continue?"
    CONFIRM_DEFAULT_CONFIRM_LABEL: str = "Confirm"
    CONFIRM_DEFAULT_CANCEL_LABEL: str = "Cancel"

    # Deletion confirmation
    DELETE_CONFIRM_TITLE: str = "Delete task?"
    DELETE_CONFIRM_LABEL: str = "Delete"


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
