"""Notification surfaces: where the worker's fired notifications appear.

``InMemoryNotificationSurface`` keeps the visible notifications in process
and collapses them by tag like a desktop notification center does.
``WebPushNotificationSurface`` forwards them to the owner's browsers.
"""

import threading
from abc import ABC, abstractmethod

import structlog

from reminders.enums import NotificationPermission
from reminders.repositories.push_subscription_repository import (
    PushSubscriptionRepository,
)
from reminders.schemas.notification import DisplayedNotification, PushPayload
from reminders.services.push_notification_service import (
    PushNotificationService,
    push_notification_service,
)

logger = structlog.get_logger(__name__)


class NotificationSurface(ABC):
    """Displays notifications on behalf of the delivery worker."""

    @abstractmethod
    def permission(self, user_id: str | None = None) -> NotificationPermission:
        """Whether notifications for ``user_id`` may be shown."""

    @abstractmethod
    def show(
        self, notification: DisplayedNotification, user_id: str | None = None
    ) -> None:
        """Display a notification, replacing any visible one with the same tag."""

    @abstractmethod
    def close(self, tag: str) -> None:
        """Remove the visible notification with ``tag``, if any."""


class InMemoryNotificationSurface(NotificationSurface):
    """Process-local surface with tag collapsing.

    Attributes:
        granted: Current permission state, ``GRANTED`` by default
        history: Every notification ever shown, in order
    """

    def __init__(
        self, permission: NotificationPermission = NotificationPermission.GRANTED
    ) -> None:
        self.granted = NotificationPermission(permission)
        self.history: list[DisplayedNotification] = []
        self._visible: dict[str, DisplayedNotification] = {}
        self._lock = threading.Lock()

    def permission(self, user_id: str | None = None) -> NotificationPermission:
        return self.granted

    def show(
        self, notification: DisplayedNotification, user_id: str | None = None
    ) -> None:
        with self._lock:
            self.history.append(notification)
            # Same tag replaces the previous entry instead of stacking
            self._visible.pop(notification.tag, None)
            self._visible[notification.tag] = notification
        logger.info("notification_displayed", tag=notification.tag, user_id=user_id)

    def close(self, tag: str) -> None:
        with self._lock:
            self._visible.pop(tag, None)

    def visible(self) -> list[DisplayedNotification]:
        """Return the notifications currently visible, oldest first."""
        with self._lock:
            return list(self._visible.values())


class WebPushNotificationSurface(NotificationSurface):
    """Surface that delivers notifications through Web Push.

    Permission is granted for a user once they registered at least one
    browser subscription. Closing is left to the browser.
    """

    def __init__(self, push_service: PushNotificationService | None = None) -> None:
        self.push_service = push_service or push_notification_service

    def permission(self, user_id: str | None = None) -> NotificationPermission:
        if user_id and PushSubscriptionRepository.has_subscription(user_id):
            return NotificationPermission.GRANTED
        return NotificationPermission.DEFAULT

    def show(
        self, notification: DisplayedNotification, user_id: str | None = None
    ) -> None:
        if not user_id:
            logger.warning("push_skipped_no_owner", tag=notification.tag)
            return
        payload = PushPayload(
            title=notification.title,
            body=notification.body,
            icon=notification.icon,
            badge=notification.badge,
            tag=notification.tag,
            url=notification.data.get("url"),
            require_interaction=notification.require_interaction,
            data=notification.data,
        )
        self.push_service.send_to_user(user_id, payload)

    def close(self, tag: str) -> None:
        logger.debug("push_close_not_supported", tag=tag)
