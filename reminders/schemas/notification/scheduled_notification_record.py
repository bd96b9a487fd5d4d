"""Wire and in-memory representation of a scheduled notification."""

from typing import Any

from pydantic import Field, field_validator

from reminders.enums import RepeatInterval
from reminders.schemas.base_schema_model import BaseSchemaModel


class ScheduledNotificationRecord(BaseSchemaModel):
    """One scheduled notification as exchanged over the bridge and the API.

    Serializes with camelCase keys (``scheduledTime``, ``userId``). A ``null``
    repeat coming over the wire is read as a one-shot record.
    """

    id: str = Field(..., min_length=1, description="Opaque notification identifier")
    title: str = Field(..., description="Display title")
    body: str = Field(..., description="Display body")
    icon: str | None = Field(None, description="Icon resource path")
    badge: str | None = Field(None, description="Badge resource path")
    tag: str | None = Field(None, description="Collapse key")
    scheduled_time: int = Field(
        ..., ge=0, description="Next fire instant in milliseconds since the epoch"
    )
    repeat: RepeatInterval = Field(
        RepeatInterval.NONE,
        validate_default=True,
        description="Recurrence (none, daily, weekly)",
    )
    enabled: bool = Field(True, description="Disabled records never fire")
    user_id: str | None = Field(None, description="Owner of the reminder")
    data: dict[str, Any] = Field(
        default_factory=dict, description="Payload carried into the notification"
    )

    @field_validator("repeat", mode="before")
    @classmethod
    def null_repeat_is_one_shot(cls, value: Any) -> Any:
        """Read a missing repeat value as ``none``."""
        return RepeatInterval.NONE if value is None else value

    @field_validator("data", mode="before")
    @classmethod
    def null_data_is_empty(cls, value: Any) -> Any:
        """Read a missing data payload as an empty mapping."""
        return {} if value is None else value

    @property
    def repeat_interval(self) -> RepeatInterval:
        """Recurrence as an enum member."""
        return RepeatInterval(self.repeat)

    def to_model_fields(self) -> dict[str, Any]:
        """Return the keyword arguments for the ``ScheduledNotification`` model."""
        fields = self.model_dump()
        fields["repeat"] = self.repeat_interval.value
        return fields
