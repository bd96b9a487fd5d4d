"""Web Push delivery to a user's registered browsers."""

import json
from typing import Any

from django.conf import settings

import structlog
from pywebpush import WebPushException, webpush

from reminders.conf import get_notification_defaults
from reminders.exceptions import (
    PushConfigurationError,
    PushDeliveryError,
    PushSubscriptionGoneError,
)
from reminders.models import PushSubscription
from reminders.repositories.push_subscription_repository import (
    PushSubscriptionRepository,
)
from reminders.schemas.notification import PushDeliveryResult, PushPayload

logger = structlog.get_logger(__name__)


class PushNotificationService:
    """Sends Web Push messages signed with the configured VAPID keys."""

    def build_message(self, payload: PushPayload) -> dict[str, Any]:
        """Fill missing display fields from the notification defaults.

        Args:
            payload: Requested push content

        Returns:
            JSON-ready message as read by the browser's push handler
        """
        defaults = get_notification_defaults()
        require_interaction = payload.require_interaction
        if require_interaction is None:
            require_interaction = defaults.require_interaction
        return {
            "title": payload.title or defaults.default_title,
            "body": payload.body or defaults.default_body,
            "icon": payload.icon or defaults.icon,
            "badge": payload.badge or defaults.badge,
            "tag": payload.tag or defaults.push_tag,
            "requireInteraction": require_interaction,
            "data": payload.data,
            "url": payload.url or defaults.default_url,
        }

    def send_to_user(self, user_id: str, payload: PushPayload) -> PushDeliveryResult:
        """Push a message to every subscription of a user.

        Subscriptions the push service reports as gone are deleted. A failure
        on one subscription does not stop delivery to the others.

        Args:
            user_id: Recipient
            payload: Push content

        Returns:
            PushDeliveryResult with per-outcome counts

        Raises:
            PushConfigurationError: If the VAPID keys are not configured
        """
        vapid_private_key, vapid_claims = self._vapid_credentials()
        subscriptions = list(PushSubscriptionRepository.get_for_user(user_id))
        if not subscriptions:
            logger.info("push_no_subscriptions", user_id=user_id)
            return PushDeliveryResult()

        message = json.dumps(self.build_message(payload))
        result = PushDeliveryResult(total=len(subscriptions))
        for subscription in subscriptions:
            try:
                self._send(subscription, message, vapid_private_key, vapid_claims)
                result.sent += 1
            except PushSubscriptionGoneError:
                logger.info(
                    "push_subscription_expired",
                    user_id=user_id,
                    subscription_id=str(subscription.id),
                )
                PushSubscriptionRepository.delete_by_id(subscription.id)
                result.expired += 1
            except PushDeliveryError as e:
                logger.warning(
                    "push_delivery_failed",
                    user_id=user_id,
                    subscription_id=str(subscription.id),
                    error=str(e),
                )
                result.failed += 1

        logger.info(
            "push_sent",
            user_id=user_id,
            sent=result.sent,
            failed=result.failed,
            expired=result.expired,
            total=result.total,
        )
        return result

    def _send(
        self,
        subscription: PushSubscription,
        message: str,
        vapid_private_key: str,
        vapid_claims: dict[str, str],
    ) -> None:
        try:
            webpush(
                subscription_info=subscription.to_subscription_info(),
                data=message,
                vapid_private_key=vapid_private_key,
                vapid_claims=dict(vapid_claims),
                ttl=get_notification_defaults().push_ttl_seconds,
            )
        except WebPushException as e:
            response = getattr(e, "response", None)
            if response is not None and response.status_code in (404, 410):
                raise PushSubscriptionGoneError(subscription.endpoint) from e
            raise PushDeliveryError(subscription.endpoint, str(e)) from e

    @staticmethod
    def _vapid_credentials() -> tuple[str, dict[str, str]]:
        private_key = getattr(settings, "VAPID_PRIVATE_KEY", "")
        public_key = getattr(settings, "VAPID_PUBLIC_KEY", "")
        if not private_key or not public_key:
            raise PushConfigurationError()
        contact = getattr(settings, "VAPID_CONTACT_EMAIL", "noreply@example.com")
        return private_key, {"sub": f"mailto:{contact}"}


# Global push notification service instance
push_notification_service = PushNotificationService()
