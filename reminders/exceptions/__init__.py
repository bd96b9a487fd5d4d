"""Exception handling utilities for the reminder service."""

from reminders.exceptions.handlers import custom_exception_handler
from reminders.exceptions.reminder_exceptions import (
    InvalidScheduleParametersError,
    PushConfigurationError,
    PushDeliveryError,
    PushSubscriptionGoneError,
    ReminderError,
    StorageUnavailableError,
)

__all__ = [
    "InvalidScheduleParametersError",
    "PushConfigurationError",
    "PushDeliveryError",
    "PushSubscriptionGoneError",
    "ReminderError",
    "StorageUnavailableError",
    "custom_exception_handler",
]
