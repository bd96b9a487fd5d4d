"""Payload sent to a user's browsers through Web Push."""

from typing import Any

from pydantic import Field

from reminders.schemas.base_schema_model import BaseSchemaModel


class PushPayload(BaseSchemaModel):
    """Web Push message body. Missing display fields are filled from defaults."""

    title: str | None = None
    body: str | None = None
    icon: str | None = None
    badge: str | None = None
    tag: str | None = None
    url: str | None = None
    require_interaction: bool | None = None
    data: dict[str, Any] = Field(default_factory=dict)
