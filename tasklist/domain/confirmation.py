"""Confirmation request models."""

import asyncio
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, Field

from tasklist.core.config import Constants


class ConfirmationTone(StrEnum):
    """Visual tone of a confirmation prompt."""

    DEFAULT = "default"
    DANGER = "danger"


class ConfirmationState(StrEnum):
    """Coordinator state."""

    IDLE = "idle"
    PENDING = "pending"


class ConfirmationContext(BaseModel):
    """What the presentation surface shows for one decision.

    Omitted values fall back to the generic confirmation defaults.
    """

    title: str = Field(default=Constants.CONFIRM_DEFAULT_TITLE)
    message: str = Field(default=Constants.CONFIRM_DEFAULT_MESSAGE)
    confirm_label: str = Field(default=Constants.CONFIRM_DEFAULT_CONFIRM_LABEL)
    cancel_label: str = Field(default=Constants.CONFIRM_DEFAULT_CANCEL_LABEL)
    tone: ConfirmationTone = Field(default=ConfirmationTone.DEFAULT)


@dataclass
class PendingConfirmation:
    """The single outstanding request while the coordinator is pending."""

    request_id: str
    context: ConfirmationContext
    decision: asyncio.Future[bool]

    @property
    def resolved(self) -> bool:
        return self.decision.done()
