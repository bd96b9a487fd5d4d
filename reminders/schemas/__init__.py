"""Schemas for the reminders app."""

from reminders.schemas.bridge import (
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
from reminders.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from reminders.schemas.notification import (
    DisplayedNotification,
    PushDeliveryResult,
    PushPayload,
    PushSubscriptionDeleteRequest,
    PushSubscriptionRequest,
    ScheduleDailyRequest,
    ScheduledNotificationRecord,
    ScheduleOptions,
    ScheduleRequest,
    ScheduleWeeklyRequest,
)

__all__ = [
    "CheckDailyChallengeReminderMessage",
    "DependencyHealth",
    "DisplayedNotification",
    "GetScheduledNotificationsMessage",
    "LivenessResponse",
    "NotificationClickMessage",
    "NotificationClickedMessage",
    "NotificationFiredMessage",
    "PushDeliveryResult",
    "PushPayload",
    "PushSubscriptionDeleteRequest",
    "PushSubscriptionRequest",
    "ReadinessResponse",
    "ScheduleDailyRequest",
    "ScheduleNotificationMessage",
    "ScheduleOptions",
    "ScheduleRequest",
    "ScheduleUpdateMessage",
    "ScheduleWeeklyRequest",
    "ScheduledNotificationRecord",
    "ScheduledNotificationsListMessage",
    "parse_message",
    "serialize_message",
]
