"""Bridge message schemas."""

from reminders.schemas.bridge.messages import (
    BridgeMessage,
    CheckDailyChallengeReminderMessage,
    GetScheduledNotificationsMessage,
    NotificationClickedMessage,
    NotificationClickMessage,
    NotificationFiredMessage,
    ScheduledNotificationsListMessage,
    ScheduleNotificationMessage,
    ScheduleUpdateMessage,
    parse_message,
    serialize_message,
)

__all__ = [
    "BridgeMessage",
    "CheckDailyChallengeReminderMessage",
    "GetScheduledNotificationsMessage",
    "NotificationClickMessage",
    "NotificationClickedMessage",
    "NotificationFiredMessage",
    "ScheduleNotificationMessage",
    "ScheduleUpdateMessage",
    "ScheduledNotificationsListMessage",
    "parse_message",
    "serialize_message",
]
