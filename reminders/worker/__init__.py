"""Background delivery of scheduled notifications."""

from reminders.worker.clients import OpenedWindow, WindowClient, WindowClients
from reminders.worker.delivery_worker import DeliveryWorker, NavigationResult
from reminders.worker.surface import (
    InMemoryNotificationSurface,
    NotificationSurface,
    WebPushNotificationSurface,
)

__all__ = [
    "DeliveryWorker",
    "InMemoryNotificationSurface",
    "NavigationResult",
    "NotificationSurface",
    "OpenedWindow",
    "WebPushNotificationSurface",
    "WindowClient",
    "WindowClients",
]
