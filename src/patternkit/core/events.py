"""Event records emitted by subjects.

All events inherit from BaseEvent and are Pydantic models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .ids import new_id, utc_now


class BaseEvent(BaseModel):
    """Base for all events. Provides identity and time."""

    event_id: str = Field(default_factory=new_id)
    timestamp: datetime = Field(default_factory=utc_now)
    source: str = ""


class StateChanged(BaseEvent):
    """A subject moved from ``previous`` to ``state``.

    ``event_id`` doubles as the delivery id of the notification pass.
    """

    previous: Any = None
    state: Any = None
    listener_count: int = 0
