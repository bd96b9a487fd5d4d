"""Scheduled notification and push schemas."""

from reminders.schemas.notification.daily_reminder import (
    DailyReminderResult,
    DailyReminderSweepResult,
    IncompleteChallenge,
)
from reminders.schemas.notification.displayed_notification import (
    DisplayedNotification,
)
from reminders.schemas.notification.push_delivery_result import PushDeliveryResult
from reminders.schemas.notification.push_payload import PushPayload
from reminders.schemas.notification.push_subscription_request import (
    PushSubscriptionDeleteRequest,
    PushSubscriptionKeys,
    PushSubscriptionRequest,
)
from reminders.schemas.notification.schedule_options import ScheduleOptions
from reminders.schemas.notification.schedule_request import (
    ScheduleDailyRequest,
    ScheduleRequest,
    ScheduleWeeklyRequest,
)
from reminders.schemas.notification.scheduled_notification_record import (
    ScheduledNotificationRecord,
)

__all__ = [
    "DailyReminderResult",
    "DailyReminderSweepResult",
    "DisplayedNotification",
    "IncompleteChallenge",
    "PushDeliveryResult",
    "PushPayload",
    "PushSubscriptionDeleteRequest",
    "PushSubscriptionKeys",
    "PushSubscriptionRequest",
    "ScheduleDailyRequest",
    "ScheduleOptions",
    "ScheduleRequest",
    "ScheduleWeeklyRequest",
    "ScheduledNotificationRecord",
]
