"""Repository for Web Push subscription queries."""

from django.db.models import QuerySet

from reminders.models import PushSubscription


class PushSubscriptionRepository:
    """Repository encapsulating push subscription database access."""

    @staticmethod
    def get_for_user(user_id: str) -> QuerySet[PushSubscription]:
        """Return every subscription of a user.

        Args:
            user_id: Owner of the subscriptions

        Returns:
            QuerySet of the user's subscriptions
        """
        return PushSubscription.objects.filter(user_id=user_id)

    @staticmethod
    def has_subscription(user_id: str) -> bool:
        """Check whether a user registered at least one browser."""
        return PushSubscription.objects.filter(user_id=user_id).exists()

    @staticmethod
    def upsert(user_id: str, endpoint: str, p256dh: str, auth: str) -> PushSubscription:
        """Create or refresh the subscription for ``(user_id, endpoint)``.

        Returns:
            The stored subscription
        """
        subscription, _ = PushSubscription.objects.update_or_create(
            user_id=user_id,
            endpoint=endpoint,
            defaults={"p256dh": p256dh, "auth": auth},
        )
        return subscription

    @staticmethod
    def delete(user_id: str, endpoint: str) -> int:
        """Remove a user's subscription by endpoint.

        Returns:
            Number of rows deleted
        """
        deleted, _ = PushSubscription.objects.filter(
            user_id=user_id, endpoint=endpoint
        ).delete()
        return deleted

    @staticmethod
    def delete_by_id(subscription_id) -> None:
        """Remove one subscription, used when the push service reports it gone."""
        PushSubscription.objects.filter(id=subscription_id).delete()

    @staticmethod
    def subscribed_user_ids() -> list[str]:
        """Return the distinct ids of users with at least one subscription."""
        return list(
            PushSubscription.objects.order_by()
            .values_list("user_id", flat=True)
            .distinct()
        )
