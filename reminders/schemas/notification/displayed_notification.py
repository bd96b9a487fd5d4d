"""What the notification surface is asked to show."""

from typing import Any

from pydantic import Field

from reminders.schemas.base_schema_model import BaseSchemaModel


class DisplayedNotification(BaseSchemaModel):
    """A notification handed to a notification surface.

    Every display field is resolved; ``data`` is carried through to the click
    handler and holds at least ``url``.
    """

    title: str
    body: str
    icon: str
    badge: str
    tag: str
    require_interaction: bool = False
    data: dict[str, Any] = Field(default_factory=dict)
