"""Persistence access for the reminders app."""

from reminders.repositories.push_subscription_repository import (
    PushSubscriptionRepository,
)
from reminders.repositories.scheduled_notification_store import (
    ScheduledNotificationStore,
    scheduled_notification_store,
)

__all__ = [
    "PushSubscriptionRepository",
    "ScheduledNotificationStore",
    "scheduled_notification_store",
]
