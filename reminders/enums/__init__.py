"""Enumerations for the reminders app."""

from reminders.enums.health_status import HealthStatus
from reminders.enums.message_type import MessageType
from reminders.enums.notification_permission import NotificationPermission
from reminders.enums.repeat_interval import RepeatInterval

__all__ = ["HealthStatus", "MessageType", "NotificationPermission", "RepeatInterval"]
