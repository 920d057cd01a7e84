"""
Notification surface.

The form controller reports the outcome of a submit as Notification
events. A presentation layer (toasts, alerts) subscribes by passing a
Notifier; LoggingNotifier is the default and keeps a history.
"""

import logging
from typing import Literal, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger("dynaform.notifications")

SUBMIT_SUCCESS_MESSAGE = "Form saved successfully!"
SUBMIT_FAILURE_MESSAGE = "Submission failed"


class Notification(BaseModel):
    """A user-facing success or failure event."""

    level: Literal["success", "error"] = Field(..., description="Event level")
    message: str = Field(..., description="Human-readable text")
    detail: str | None = Field(default=None, description="Underlying error, if any")


class Notifier(Protocol):
    def __call__(self, notification: Notification) -> None: ...


class LoggingNotifier:
    """Notifier that logs every event and remembers it."""

    def __init__(self) -> None:
        self.history: list[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self.history.append(notification)
        if notification.level == "error":
            logger.error(f"{notification.message}: {notification.detail}")
        else:
            logger.info(notification.message)

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None
