"""Optional settings shared by every scheduling call."""

from typing import Any

from pydantic import Field

from reminders.enums import RepeatInterval
from reminders.schemas.base_schema_model import BaseSchemaModel


class ScheduleOptions(BaseSchemaModel):
    """Display and ownership options for a new scheduled notification.

    ``icon``, ``badge`` and ``tag`` fall back to the configured defaults when
    left empty. ``repeat`` is only honoured by the general ``schedule`` call;
    the daily and weekly helpers set it themselves.
    """

    icon: str | None = Field(None, max_length=255)
    badge: str | None = Field(None, max_length=255)
    tag: str | None = Field(None, max_length=100)
    repeat: RepeatInterval | None = Field(None, description="Recurrence")
    user_id: str | None = Field(None, max_length=64)
    data: dict[str, Any] = Field(default_factory=dict)
