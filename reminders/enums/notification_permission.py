"""Notification display permission states."""

from enum import Enum


class NotificationPermission(str, Enum):
    """Whether the notification surface may show notifications."""

    GRANTED = "granted"
    DENIED = "denied"
    DEFAULT = "default"
