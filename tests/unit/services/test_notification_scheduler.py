"""Unit tests for NotificationScheduler."""

import re
from datetime import UTC, datetime
from unittest.mock import Mock, patch

import pytest

from reminders.enums import MessageType, RepeatInterval
from reminders.exceptions import (
    InvalidScheduleParametersError,
    StorageUnavailableError,
)
from reminders.repositories import ScheduledNotificationStore
from reminders.schemas.notification import ScheduleOptions
from reminders.services.notification_scheduler import (
    NotificationScheduler,
    generate_notification_id,
)
from tests.fakes import DAY_MS, HOUR_MS, epoch_ms

ID_PATTERN = re.compile(r"^notification-(\d+)-[0-9a-z]{9}$")


def at(*parts):
    return epoch_ms(datetime(*parts, tzinfo=UTC))


@pytest.fixture
def store():
    """Store whose sync notifications are recorded instead of posted."""
    return ScheduledNotificationStore(notifier=Mock())


@pytest.fixture
def scheduler(store, worker_mailbox, clock):
    """Scheduler wired to the test store, mailbox and clock."""
    return NotificationScheduler(store=store, mailbox=worker_mailbox, clock=clock)


def test_generate_notification_id_format():
    """Test that ids embed the creation time and a base36 suffix."""
    notification_id = generate_notification_id(1773129600000)

    match = ID_PATTERN.match(notification_id)
    assert match is not None
    assert match.group(1) == "1773129600000"


def test_generate_notification_id_is_unique():
    """Test that ids created in the same millisecond differ."""
    ids = {generate_notification_id(1773129600000) for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.django_db
class TestScheduleDaily:
    """Tests for daily scheduling."""

    def test_time_later_today_fires_today(self, scheduler, store, clock):
        """Test that 09:00 scheduled at 08:00 fires today at 09:00."""
        notification_id = scheduler.schedule_daily("Log your run", "Keep going", 9, 0)

        record = store.get(notification_id)
        assert record.scheduled_time == at(2026, 3, 10, 9, 0)
        assert record.repeat == RepeatInterval.DAILY
        assert record.enabled is True

    def test_time_already_passed_fires_tomorrow(self, scheduler, store, clock):
        """Test that 09:00 scheduled at 10:00 fires tomorrow at 09:00."""
        clock.set(datetime(2026, 3, 10, 10, 0, tzinfo=UTC))

        notification_id = scheduler.schedule_daily("Log your run", "Keep going", 9, 0)

        record = store.get(notification_id)
        assert record.scheduled_time == at(2026, 3, 11, 9, 0)

    def test_time_equal_to_now_fires_tomorrow(self, scheduler, store, clock):
        """Test that the first fire is strictly in the future."""
        notification_id = scheduler.schedule_daily("Log your run", "Keep going", 8, 0)

        record = store.get(notification_id)
        assert record.scheduled_time == clock.now + DAY_MS

    @pytest.mark.parametrize(
        ("hour", "minute"), [(24, 0), (-1, 0), (9, 60), (9, -5)]
    )
    def test_out_of_range_time_is_rejected(self, scheduler, store, hour, minute):
        """Test that invalid times raise and persist nothing."""
        with pytest.raises(InvalidScheduleParametersError) as exc_info:
            scheduler.schedule_daily("Log your run", "Keep going", hour, minute)

        assert exc_info.value.errors
        assert store.get_all() == []

    def test_empty_title_is_rejected(self, scheduler, store):
        """Test that a blank title is a validation error."""
        with pytest.raises(InvalidScheduleParametersError):
            scheduler.schedule_daily("   ", "Keep going", 9)

        assert store.get_all() == []


@pytest.mark.django_db
class TestScheduleWeekly:
    """Tests for weekly scheduling; the clock is on a Tuesday."""

    def test_next_monday(self, scheduler, store):
        """Test that Monday 09:00 from a Tuesday lands six days later."""
        notification_id = scheduler.schedule_weekly("Weekly review", "Plan", 0, 9)

        record = store.get(notification_id)
        assert record.scheduled_time == at(2026, 3, 16, 9, 0)
        assert record.repeat == RepeatInterval.WEEKLY

    def test_same_weekday_later_today(self, scheduler, store):
        """Test that Tuesday 09:00 from Tuesday 08:00 is today."""
        notification_id = scheduler.schedule_weekly("Weekly review", "Plan", 1, 9)

        record = store.get(notification_id)
        assert record.scheduled_time == at(2026, 3, 10, 9, 0)

    def test_same_weekday_already_passed(self, scheduler, store):
        """Test that Tuesday 07:00 from Tuesday 08:00 is next week."""
        notification_id = scheduler.schedule_weekly("Weekly review", "Plan", 1, 7)

        record = store.get(notification_id)
        assert record.scheduled_time == at(2026, 3, 17, 7, 0)

    def test_invalid_weekday_is_rejected(self, scheduler, store):
        """Test that weekday 7 raises and persists nothing."""
        with pytest.raises(InvalidScheduleParametersError):
            scheduler.schedule_weekly("Weekly review", "Plan", 7, 9)

        assert store.get_all() == []


@pytest.mark.django_db
class TestSchedule:
    """Tests for absolute-time scheduling."""

    def test_schedule_once_persists_one_shot_with_defaults(
        self, scheduler, store, clock
    ):
        """Test that display fields fall back to the configured defaults."""
        when = clock.now + HOUR_MS

        notification_id = scheduler.schedule_once("Stretch", "Five minutes", when)

        record = store.get(notification_id)
        assert ID_PATTERN.match(notification_id).group(1) == str(clock.now)
        assert record.scheduled_time == when
        assert record.repeat == RepeatInterval.NONE
        assert record.icon == "/icon-192.png"
        assert record.badge == "/icon-192.png"
        assert record.tag == "scheduled-notification"
        assert record.data == {}

    def test_schedule_once_ignores_repeat_option(self, scheduler, store, clock):
        """Test that schedule_once always creates a one-shot record."""
        notification_id = scheduler.schedule_once(
            "Stretch", "Five minutes", clock.now + HOUR_MS, {"repeat": "daily"}
        )

        assert store.get(notification_id).repeat == RepeatInterval.NONE

    def test_schedule_accepts_datetime(self, scheduler, store):
        """Test that an aware datetime is converted to epoch milliseconds."""
        when = datetime(2026, 3, 12, 18, 30, tzinfo=UTC)

        notification_id = scheduler.schedule("Stretch", "Five minutes", when)

        assert store.get(notification_id).scheduled_time == epoch_ms(when)

    def test_past_time_is_accepted(self, scheduler, store, clock):
        """Test that a time in the past is stored as given."""
        when = clock.now - HOUR_MS

        notification_id = scheduler.schedule("Stretch", "Five minutes", when)

        assert store.get(notification_id).scheduled_time == when

    def test_options_are_carried(self, scheduler, store, clock):
        """Test that explicit options override the defaults."""
        options = ScheduleOptions(
            tag="challenge-42",
            icon="/run.png",
            repeat=RepeatInterval.WEEKLY,
            user_id="user-7",
            data={"challengeId": 42},
        )

        notification_id = scheduler.schedule(
            "Run", "Go outside", clock.now + HOUR_MS, options
        )

        record = store.get(notification_id)
        assert record.tag == "challenge-42"
        assert record.icon == "/run.png"
        assert record.badge == "/icon-192.png"
        assert record.repeat == RepeatInterval.WEEKLY
        assert record.user_id == "user-7"
        assert record.data == {"challengeId": 42}

    def test_negative_time_is_rejected(self, scheduler, store):
        """Test that a negative instant is invalid."""
        with pytest.raises(InvalidScheduleParametersError):
            scheduler.schedule("Stretch", "Five minutes", -1)

        assert store.get_all() == []

    def test_unknown_repeat_is_rejected(self, scheduler, store, clock):
        """Test that only none, daily and weekly are accepted."""
        with pytest.raises(InvalidScheduleParametersError):
            scheduler.schedule(
                "Stretch", "Five minutes", clock.now, {"repeat": "monthly"}
            )

        assert store.get_all() == []

    def test_new_record_is_sent_to_worker(self, scheduler, worker_mailbox, clock):
        """Test that the created record is posted to the worker mailbox."""
        notification_id = scheduler.schedule_once(
            "Stretch", "Five minutes", clock.now + HOUR_MS
        )

        message = worker_mailbox.receive(timeout=0)
        assert message.type == MessageType.SCHEDULE_NOTIFICATION
        assert message.notification.id == notification_id
        assert message.notification.scheduled_time == clock.now + HOUR_MS

    def test_save_triggers_sync_notification(self, scheduler, store, clock):
        """Test that creating a record notifies the worker of the change."""
        scheduler.schedule_once("Stretch", "Five minutes", clock.now + HOUR_MS)

        store.notifier.schedule_changed.assert_called_once()

    def test_storage_failure_propagates(self, scheduler, store, worker_mailbox, clock):
        """Test that a failed save raises and nothing is sent to the worker."""
        with patch.object(
            store, "save", side_effect=StorageUnavailableError("save", "disk full")
        ):
            with pytest.raises(StorageUnavailableError):
                scheduler.schedule_once("Stretch", "Five minutes", clock.now)

        assert worker_mailbox.pending() == 0


@pytest.mark.django_db
class TestRemoveAndGetAll:
    """Tests for removing and listing records."""

    def test_remove_deletes_and_pushes_remaining_list(
        self, scheduler, store, worker_mailbox, clock
    ):
        """Test that the worker receives the full remaining record set."""
        keep_id = scheduler.schedule_daily("Keep", "Stays", 9)
        drop_id = scheduler.schedule_daily("Drop", "Goes", 10)
        while worker_mailbox.receive(timeout=0) is not None:
            pass

        scheduler.remove(drop_id)

        assert [record.id for record in scheduler.get_all()] == [keep_id]
        message = worker_mailbox.receive(timeout=0)
        assert message.type == MessageType.SCHEDULED_NOTIFICATIONS_LIST
        assert [record.id for record in message.records()] == [keep_id]

    def test_remove_unknown_id_is_not_an_error(self, scheduler, worker_mailbox):
        """Test that removing an absent record still pushes the list."""
        scheduler.remove("notification-0-missing00")

        message = worker_mailbox.receive(timeout=0)
        assert message.type == MessageType.SCHEDULED_NOTIFICATIONS_LIST
        assert message.notifications == []

    def test_get_all_empty(self, scheduler):
        """Test that an empty store lists nothing."""
        assert scheduler.get_all() == []
