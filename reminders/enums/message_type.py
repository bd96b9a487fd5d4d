"""Message types exchanged between foreground contexts and the worker."""

from enum import Enum


class MessageType(str, Enum):
    """Bridge message discriminators.

    Foreground to worker:
        SCHEDULED_NOTIFICATIONS_LIST, SCHEDULE_NOTIFICATION, SCHEDULE_UPDATE,
        NOTIFICATION_CLICK

    Worker to foreground:
        GET_SCHEDULED_NOTIFICATIONS, CHECK_DAILY_CHALLENGE_REMINDER,
        NOTIFICATION_CLICKED, NOTIFICATION_FIRED
    """

    SCHEDULED_NOTIFICATIONS_LIST = "SCHEDULED_NOTIFICATIONS_LIST"
    SCHEDULE_NOTIFICATION = "SCHEDULE_NOTIFICATION"
    SCHEDULE_UPDATE = "SCHEDULE_UPDATE"
    NOTIFICATION_CLICK = "NOTIFICATION_CLICK"
    GET_SCHEDULED_NOTIFICATIONS = "GET_SCHEDULED_NOTIFICATIONS"
    CHECK_DAILY_CHALLENGE_REMINDER = "CHECK_DAILY_CHALLENGE_REMINDER"
    NOTIFICATION_CLICKED = "NOTIFICATION_CLICKED"
    NOTIFICATION_FIRED = "NOTIFICATION_FIRED"
