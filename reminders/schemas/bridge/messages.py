"""Messages exchanged between foreground contexts and the delivery worker.

Every message carries a ``type`` discriminator. Messages travel as JSON
through a mailbox, so ``parse_message`` accepts either the decoded mapping
or the raw JSON text.
"""

from collections.abc import Iterable, Iterator
import datetime
from typing import Annotated, Any, Literal, Union

import structlog
from pydantic import Field, TypeAdapter, ValidationError

from reminders.schemas.base_schema_model import BaseSchemaModel
from reminders.schemas.notification import (
    DisplayedNotification,
    ScheduledNotificationRecord,
)

logger = structlog.get_logger(__name__)


class ScheduledNotificationsListMessage(BaseSchemaModel):
    """Authoritative full record set (foreground to worker).

    Entries are kept as raw mappings so one corrupt record cannot void the
    rest of the list; ``records()`` validates them one by one.
    """

    type: Literal["SCHEDULED_NOTIFICATIONS_LIST"] = "SCHEDULED_NOTIFICATIONS_LIST"
    notifications: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_records(
        cls, records: Iterable[ScheduledNotificationRecord]
    ) -> "ScheduledNotificationsListMessage":
        """Build the message from validated records."""
        return cls(notifications=[record.to_wire() for record in records])

    def records(self) -> Iterator[ScheduledNotificationRecord]:
        """Yield the valid records, logging and skipping corrupt entries."""
        for raw in self.notifications:
            try:
                yield ScheduledNotificationRecord.model_validate(raw)
            except ValidationError as e:
                logger.warning(
                    "corrupt_record_skipped",
                    notification_id=raw.get("id"),
                    errors=e.errors(include_url=False),
                )


class ScheduleNotificationMessage(BaseSchemaModel):
    """Single freshly created record (foreground to worker)."""

    type: Literal["SCHEDULE_NOTIFICATION"] = "SCHEDULE_NOTIFICATION"
    notification: ScheduledNotificationRecord


class ScheduleUpdateMessage(BaseSchemaModel):
    """Hint that the record set changed (foreground to worker)."""

    type: Literal["SCHEDULE_UPDATE"] = "SCHEDULE_UPDATE"


class NotificationClickMessage(BaseSchemaModel):
    """The user activated a displayed notification (foreground to worker)."""

    type: Literal["NOTIFICATION_CLICK"] = "NOTIFICATION_CLICK"
    notification: DisplayedNotification


class GetScheduledNotificationsMessage(BaseSchemaModel):
    """Request for a full list push (worker to foreground)."""

    type: Literal["GET_SCHEDULED_NOTIFICATIONS"] = "GET_SCHEDULED_NOTIFICATIONS"


class CheckDailyChallengeReminderMessage(BaseSchemaModel):
    """Ask the foreground to run the daily challenge check for one user."""

    type: Literal["CHECK_DAILY_CHALLENGE_REMINDER"] = "CHECK_DAILY_CHALLENGE_REMINDER"
    user_id: str = Field(..., min_length=1)
    date: datetime.date


class NotificationClickedMessage(BaseSchemaModel):
    """The user activated a notification while this window had focus."""

    type: Literal["NOTIFICATION_CLICKED"] = "NOTIFICATION_CLICKED"
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationFiredMessage(BaseSchemaModel):
    """A worker without store access fired a record (worker to foreground).

    ``next_scheduled_time`` is the advanced slot of a repeating record. It is
    None for a one-shot record, which the foreground then deletes.
    """

    type: Literal["NOTIFICATION_FIRED"] = "NOTIFICATION_FIRED"
    id: str = Field(..., min_length=1)
    scheduled_time: int
    next_scheduled_time: int | None = None


BridgeMessage = Annotated[
    Union[
        ScheduledNotificationsListMessage,
        ScheduleNotificationMessage,
        ScheduleUpdateMessage,
        NotificationClickMessage,
        GetScheduledNotificationsMessage,
        CheckDailyChallengeReminderMessage,
        NotificationClickedMessage,
        NotificationFiredMessage,
    ],
    Field(discriminator="type"),
]

_bridge_message_adapter: TypeAdapter[BridgeMessage] = TypeAdapter(BridgeMessage)


def parse_message(raw: str | bytes | dict[str, Any]) -> BridgeMessage:
    """Validate a bridge message.

    Args:
        raw: JSON text or an already decoded mapping

    Returns:
        The typed message

    Raises:
        ValidationError: If the message is malformed or of an unknown type
    """
    if isinstance(raw, (str, bytes)):
        return _bridge_message_adapter.validate_json(raw)
    return _bridge_message_adapter.validate_python(raw)


def serialize_message(message: BaseSchemaModel) -> str:
    """Encode a bridge message as JSON with camelCase keys."""
    return message.model_dump_json(by_alias=True)
