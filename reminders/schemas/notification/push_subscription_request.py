"""Request schemas for Web Push subscription registration."""

from pydantic import Field

from reminders.schemas.base_schema_model import BaseSchemaModel


class PushSubscriptionKeys(BaseSchemaModel):
    """Client keys of a push subscription."""

    p256dh: str = Field(..., min_length=1, max_length=255)
    auth: str = Field(..., min_length=1, max_length=255)


class PushSubscriptionRequest(BaseSchemaModel):
    """Browser ``PushSubscription.toJSON()`` body."""

    endpoint: str = Field(..., min_length=1, description="Push service URL")
    keys: PushSubscriptionKeys


class PushSubscriptionDeleteRequest(BaseSchemaModel):
    """Identify the subscription to remove by its endpoint."""

    endpoint: str = Field(..., min_length=1)
