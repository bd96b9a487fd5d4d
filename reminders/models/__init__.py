"""Database models for the reminders app."""

from reminders.models.push_subscription import PushSubscription
from reminders.models.scheduled_notification import ScheduledNotification

__all__ = ["PushSubscription", "ScheduledNotification"]
