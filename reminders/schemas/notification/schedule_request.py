"""Request schemas for creating scheduled notifications."""

from datetime import datetime
from typing import Any

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from pydantic import Field, field_validator

from reminders.schemas.notification.schedule_options import ScheduleOptions


def _to_epoch_ms(value: datetime) -> int:
    if timezone.is_naive(value):
        value = timezone.make_aware(value, timezone.get_current_timezone())
    return int(value.timestamp() * 1000)


class ScheduleRequest(ScheduleOptions):
    """Schedule a notification at an absolute instant.

    ``scheduledTime`` accepts milliseconds since the epoch, a datetime, or an
    ISO 8601 string. Naive datetimes are read in the current time zone. A
    time in the past is accepted and fires on the worker's next check.
    """

    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    scheduled_time: int = Field(..., ge=0)

    @field_validator("scheduled_time", mode="before")
    @classmethod
    def coerce_scheduled_time(cls, value: Any) -> Any:
        """Convert datetimes and ISO strings to epoch milliseconds."""
        if isinstance(value, datetime):
            return _to_epoch_ms(value)
        if isinstance(value, str) and not value.strip().isdigit():
            parsed = parse_datetime(value.strip())
            if parsed is None:
                raise ValueError("scheduledTime is not a valid datetime")
            return _to_epoch_ms(parsed)
        return value


class ScheduleDailyRequest(ScheduleOptions):
    """Schedule a notification every day at a local wall-clock time."""

    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(0, ge=0, le=59)


class ScheduleWeeklyRequest(ScheduleDailyRequest):
    """Schedule a notification every week on a weekday (0 is Monday)."""

    weekday: int = Field(..., ge=0, le=6)
