"""Schemas for the daily challenge reminder sweep."""

import datetime

from pydantic import Field

from reminders.schemas.base_schema_model import BaseSchemaModel
from reminders.schemas.notification.push_delivery_result import PushDeliveryResult


class IncompleteChallenge(BaseSchemaModel):
    """A challenge the user has not completed for the day."""

    id: int | str
    title: str = Field(..., min_length=1)


class DailyReminderResult(BaseSchemaModel):
    """Outcome of checking one user."""

    user_id: str
    date: datetime.date
    incomplete_challenges: list[IncompleteChallenge] = Field(default_factory=list)
    notified: bool = False
    delivery: PushDeliveryResult | None = None


class DailyReminderSweepResult(BaseSchemaModel):
    """Outcome of checking every subscribed user."""

    date: datetime.date
    users_checked: int = 0
    notifications_sent: int = 0
    failures: int = 0
