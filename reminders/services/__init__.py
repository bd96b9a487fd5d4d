"""Services for the reminders app."""

from reminders.services.daily_reminder_service import (
    DailyReminderService,
    daily_reminder_service,
)
from reminders.services.health_service import HealthService, health_service
from reminders.services.notification_scheduler import (
    NotificationScheduler,
    generate_notification_id,
    next_occurrence,
    notification_scheduler,
)
from reminders.services.push_notification_service import (
    PushNotificationService,
    push_notification_service,
)

__all__ = [
    "DailyReminderService",
    "HealthService",
    "NotificationScheduler",
    "PushNotificationService",
    "daily_reminder_service",
    "generate_notification_id",
    "health_service",
    "next_occurrence",
    "notification_scheduler",
    "push_notification_service",
]
