"""Task domain models and enums."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class StatusFilter(StrEnum):
    """View selector applied to the task collection."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class Task(BaseModel):
    """A single to-do item.

    Instances are immutable; every mutation produces a new copy. On the wire
    field names are camelCase (``dueDate``, ``createdAt``, ``updatedAt``).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Opaque unique task ID")
    title: str = Field(..., min_length=1, description="Trimmed, non-empty task title")
    description: str | None = Field(default=None, description="Optional trimmed description")
    due_date: str | None = Field(default=None, description="Caller-supplied due date")
    completed: bool = Field(default=False, description="Completion state")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last mutation timestamp (UTC)")

    @field_validator("title")
    @classmethod
    def _reject_blank_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def to_record(self) -> dict[str, object]:
        """Serialize to the storage record shape (absent optionals omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskPayload(BaseModel):
    """Fields supplied when creating a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = ""
    description: str | None = None
    due_date: str | None = None


class TaskChanges(BaseModel):
    """Partial update of a task.

    Only fields explicitly supplied (``model_fields_set``) are applied, so an
    empty string clears a field while an omitted field is left untouched.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    description: str | None = None
    due_date: str | None = None


class TaskStats(BaseModel):
    """Aggregate counters over the whole (unfiltered) collection."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    active: int = 0
    completed: int = 0
