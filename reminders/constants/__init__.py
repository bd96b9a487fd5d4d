"""Constants package for the reminders app."""

from reminders.constants.http import (
    PROCESS_TIME_HEADER,
    REQUEST_ID_HEADER,
    SLOW_REQUEST_THRESHOLD,
)
from reminders.constants.notifications import (
    DEFAULT_NOTIFICATION_SETTINGS,
    NOTIFICATION_ID_PREFIX,
    SCOPE_ADMIN,
    SCOPE_USER,
)

__all__ = [
    "DEFAULT_NOTIFICATION_SETTINGS",
    "NOTIFICATION_ID_PREFIX",
    "PROCESS_TIME_HEADER",
    "REQUEST_ID_HEADER",
    "SCOPE_ADMIN",
    "SCOPE_USER",
    "SLOW_REQUEST_THRESHOLD",
]
