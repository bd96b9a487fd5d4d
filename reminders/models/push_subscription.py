"""Web Push subscription model."""

import uuid
from typing import ClassVar

from django.db import models


class PushSubscription(models.Model):
    """A browser's Web Push subscription for one user.

    Attributes:
        id: Unique identifier.
        user_id: User the subscription belongs to.
        endpoint: Push service URL.
        p256dh: Client public key (base64url).
        auth: Client auth secret (base64url).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64, db_index=True)
    endpoint = models.TextField()
    p256dh = models.CharField(max_length=255)
    auth = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "push_subscriptions"
        ordering: ClassVar[list[str]] = ["-created_at"]
        unique_together: ClassVar[list[list[str]]] = [["user_id", "endpoint"]]

    def __str__(self) -> str:
        """Return string representation of the subscription."""
        return f"push subscription for {self.user_id}"

    def to_subscription_info(self) -> dict[str, object]:
        """Return the ``subscription_info`` mapping expected by pywebpush."""
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }
