"""Scheduling of reminder notifications.

Turns "remind me once at T" or "remind me every day at 09:00" into a
validated ``ScheduledNotificationRecord``, persists it through the store and
tells the delivery worker about it. Times are epoch milliseconds; wall-clock
computations use Django's current time zone.
"""

import secrets
import string
import time
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from django.utils import timezone

import structlog
from pydantic import ValidationError

from reminders.bridge.mailbox import Mailbox, get_mailbox
from reminders.conf import get_notification_defaults
from reminders.constants import NOTIFICATION_ID_PREFIX
from reminders.enums import RepeatInterval
from reminders.exceptions import InvalidScheduleParametersError
from reminders.repositories.scheduled_notification_store import (
    ScheduledNotificationStore,
    scheduled_notification_store,
)
from reminders.schemas.bridge import (
    ScheduledNotificationsListMessage,
    ScheduleNotificationMessage,
)
from reminders.schemas.notification import (
    ScheduleDailyRequest,
    ScheduledNotificationRecord,
    ScheduleOptions,
    ScheduleRequest,
    ScheduleWeeklyRequest,
)

logger = structlog.get_logger(__name__)

DAY_MS = 24 * 60 * 60 * 1000

_ID_ALPHABET = string.digits + string.ascii_lowercase


def current_time_ms() -> int:
    """Return the current instant in epoch milliseconds."""
    return int(time.time() * 1000)


def to_local_datetime(epoch_ms: int) -> datetime:
    """Convert epoch milliseconds to an aware datetime in the current time zone."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.get_current_timezone())


def to_epoch_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds, reading naive values as local."""
    if timezone.is_naive(value):
        value = timezone.make_aware(value, timezone.get_current_timezone())
    return int(value.timestamp() * 1000)


def generate_notification_id(now_ms: int | None = None) -> str:
    """Return a new ``notification-<ms>-<9 base36 chars>`` identifier."""
    if now_ms is None:
        now_ms = current_time_ms()
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{NOTIFICATION_ID_PREFIX}-{now_ms}-{suffix}"


def next_occurrence(
    original_time: int,
    repeat: RepeatInterval | str | None,
    now: int | None = None,
) -> int:
    """Return the first occurrence of a repeating schedule strictly after now.

    Steps one (daily) or seven (weekly) calendar days in local wall-clock
    time, so a 09:00 reminder stays at 09:00 across DST changes. Missed
    occurrences are skipped, never back-filled. One-shot schedules and times
    already in the future are returned unchanged.

    Args:
        original_time: Current scheduled instant in epoch milliseconds
        repeat: Recurrence of the schedule
        now: Reference instant, defaults to the current time

    Returns:
        Epoch milliseconds of the next occurrence
    """
    interval = RepeatInterval(repeat) if repeat is not None else RepeatInterval.NONE
    if interval == RepeatInterval.NONE:
        return original_time
    if now is None:
        now = current_time_ms()
    if original_time > now:
        return original_time

    step_days = interval.step_days
    # Jump over whole missed periods first; DST can only shift by an hour.
    skipped = (now - original_time) // (step_days * DAY_MS)
    candidate = to_local_datetime(original_time) + timedelta(days=skipped * step_days)
    while to_epoch_ms(candidate) <= now:
        candidate += timedelta(days=step_days)
    return to_epoch_ms(candidate)


def _validation_error(e: ValidationError) -> InvalidScheduleParametersError:
    return InvalidScheduleParametersError(
        message="Invalid schedule parameters",
        errors=e.errors(include_url=False, include_context=False),
    )


class NotificationScheduler:
    """Creates and removes scheduled notifications."""

    def __init__(
        self,
        store: ScheduledNotificationStore | None = None,
        mailbox: Mailbox | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            store: Notification store, defaults to the global store
            mailbox: Worker mailbox, resolved from settings if omitted
            clock: Returns the current instant in epoch milliseconds
        """
        self.store = store or scheduled_notification_store
        self._mailbox = mailbox
        self.clock = clock or current_time_ms

    @property
    def mailbox(self) -> Mailbox:
        """Worker mailbox."""
        if self._mailbox is not None:
            return self._mailbox
        return get_mailbox(get_notification_defaults().worker_mailbox)

    def schedule(
        self,
        title: str,
        body: str,
        when: int | datetime,
        options: ScheduleOptions | dict[str, Any] | None = None,
    ) -> str:
        """Schedule a notification at an absolute instant.

        A time in the past is accepted; the worker fires it on its next check.

        Args:
            title: Display title
            body: Display body
            when: Epoch milliseconds or datetime of the (first) fire
            options: Display, recurrence and ownership options

        Returns:
            Id of the new record

        Raises:
            InvalidScheduleParametersError: If any parameter is invalid
            StorageUnavailableError: If the record cannot be persisted
        """
        try:
            request = ScheduleRequest.model_validate(
                {
                    **self._options_dict(options),
                    "title": title,
                    "body": body,
                    "scheduled_time": when,
                }
            )
        except ValidationError as e:
            raise _validation_error(e) from e

        return self._create(
            request,
            scheduled_time=request.scheduled_time,
            repeat=request.repeat or RepeatInterval.NONE,
        )

    def schedule_once(
        self,
        title: str,
        body: str,
        when: int | datetime,
        options: ScheduleOptions | dict[str, Any] | None = None,
    ) -> str:
        """Schedule a one-shot notification. See ``schedule``."""
        merged = {**self._options_dict(options), "repeat": RepeatInterval.NONE}
        return self.schedule(title, body, when, merged)

    def schedule_daily(
        self,
        title: str,
        body: str,
        hour: int,
        minute: int = 0,
        options: ScheduleOptions | dict[str, Any] | None = None,
    ) -> str:
        """Schedule a notification every day at ``hour:minute`` local time.

        The first fire is today if that time is still ahead, otherwise
        tomorrow.

        Raises:
            InvalidScheduleParametersError: If hour or minute is out of range
            StorageUnavailableError: If the record cannot be persisted
        """
        try:
            request = ScheduleDailyRequest.model_validate(
                {
                    **self._options_dict(options),
                    "title": title,
                    "body": body,
                    "hour": hour,
                    "minute": minute,
                }
            )
        except ValidationError as e:
            raise _validation_error(e) from e

        now = self.clock()
        candidate = to_local_datetime(now).replace(
            hour=request.hour, minute=request.minute, second=0, microsecond=0
        )
        if to_epoch_ms(candidate) <= now:
            candidate += timedelta(days=1)

        return self._create(
            request,
            scheduled_time=to_epoch_ms(candidate),
            repeat=RepeatInterval.DAILY,
        )

    def schedule_weekly(
        self,
        title: str,
        body: str,
        weekday: int,
        hour: int,
        minute: int = 0,
        options: ScheduleOptions | dict[str, Any] | None = None,
    ) -> str:
        """Schedule a notification every week on ``weekday`` (0 is Monday).

        Raises:
            InvalidScheduleParametersError: If weekday, hour or minute is out of range
            StorageUnavailableError: If the record cannot be persisted
        """
        try:
            request = ScheduleWeeklyRequest.model_validate(
                {
                    **self._options_dict(options),
                    "title": title,
                    "body": body,
                    "weekday": weekday,
                    "hour": hour,
                    "minute": minute,
                }
            )
        except ValidationError as e:
            raise _validation_error(e) from e

        now = self.clock()
        today = to_local_datetime(now)
        candidate = today.replace(
            hour=request.hour, minute=request.minute, second=0, microsecond=0
        ) + timedelta(days=(request.weekday - today.weekday()) % 7)
        if to_epoch_ms(candidate) <= now:
            candidate += timedelta(days=7)

        return self._create(
            request,
            scheduled_time=to_epoch_ms(candidate),
            repeat=RepeatInterval.WEEKLY,
        )

    def remove(self, notification_id: str) -> None:
        """Delete a record and push the remaining schedule to the worker.

        Raises:
            StorageUnavailableError: If the record cannot be deleted
        """
        self.store.delete(notification_id, notify=False)
        logger.info("notification_unscheduled", notification_id=notification_id)
        self._post(ScheduledNotificationsListMessage.from_records(self.store.get_all()))

    def get_all(self) -> list[ScheduledNotificationRecord]:
        """Return every stored record."""
        return self.store.get_all()

    def _create(
        self,
        request: ScheduleOptions,
        scheduled_time: int,
        repeat: RepeatInterval | str,
    ) -> str:
        defaults = get_notification_defaults()
        record = ScheduledNotificationRecord(
            id=generate_notification_id(self.clock()),
            title=request.title,
            body=request.body,
            icon=request.icon or defaults.icon,
            badge=request.badge or defaults.badge,
            tag=request.tag or defaults.scheduled_tag,
            scheduled_time=scheduled_time,
            repeat=repeat,
            enabled=True,
            user_id=request.user_id,
            data=request.data,
        )
        self.store.save(record)
        logger.info(
            "notification_scheduled",
            notification_id=record.id,
            scheduled_time=record.scheduled_time,
            repeat=record.repeat,
        )
        self._post(ScheduleNotificationMessage(notification=record))
        return record.id

    def _post(self, message) -> None:
        try:
            self.mailbox.post(message)
        except Exception:
            logger.exception("worker_push_failed", message_type=message.type)

    @staticmethod
    def _options_dict(
        options: ScheduleOptions | dict[str, Any] | None,
    ) -> dict[str, Any]:
        if options is None:
            return {}
        if isinstance(options, ScheduleOptions):
            return options.model_dump(exclude_unset=True)
        return dict(options)


# Global scheduler instance
notification_scheduler = NotificationScheduler()
