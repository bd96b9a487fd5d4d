"""Outcome of a push fan-out to one user's subscriptions."""

from pydantic import Field

from reminders.schemas.base_schema_model import BaseSchemaModel


class PushDeliveryResult(BaseSchemaModel):
    """Counts of a ``send_to_user`` call."""

    sent: int = Field(0, ge=0, description="Subscriptions that accepted the push")
    failed: int = Field(0, ge=0, description="Subscriptions that errored")
    expired: int = Field(
        0, ge=0, description="Subscriptions reported gone and deleted"
    )
    total: int = Field(0, ge=0, description="Subscriptions attempted")
