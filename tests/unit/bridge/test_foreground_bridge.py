"""Unit tests for ForegroundBridge and SyncNotifier."""

from datetime import date
from unittest.mock import Mock

from django.test import TestCase

from reminders.bridge import LocalMailbox, SyncNotifier, get_mailbox
from reminders.bridge.foreground import ForegroundBridge, MailboxWindowClient
from reminders.enums import MessageType, RepeatInterval
from reminders.exceptions import StorageUnavailableError
from reminders.repositories import ScheduledNotificationStore
from reminders.schemas.bridge import (
    CheckDailyChallengeReminderMessage,
    GetScheduledNotificationsMessage,
    NotificationClickedMessage,
    NotificationFiredMessage,
    ScheduleUpdateMessage,
)
from tests.fakes import make_record


class TestForegroundBridge(TestCase):
    """Test cases for the foreground side of the bridge."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = ScheduledNotificationStore(notifier=Mock())
        self.worker_mailbox = LocalMailbox("worker")
        self.inbox = LocalMailbox("foreground")
        self.reminder_service = Mock()
        self.bridge = ForegroundBridge(
            store=self.store,
            worker_mailbox=self.worker_mailbox,
            inbox=self.inbox,
            reminder_service=self.reminder_service,
        )

    def test_start_pushes_full_schedule(self):
        """Test that startup sends the authoritative list to the worker."""
        self.store.save(make_record(id="a"))
        self.store.save(make_record(id="b", enabled=False))

        self.bridge.start()

        message = self.worker_mailbox.receive(timeout=0)
        self.assertEqual(message.type, MessageType.SCHEDULED_NOTIFICATIONS_LIST)
        self.assertEqual(sorted(r.id for r in message.records()), ["a", "b"])

    def test_schedule_request_is_answered_with_list(self):
        """Test that GET_SCHEDULED_NOTIFICATIONS triggers a full push."""
        self.bridge.post_message(GetScheduledNotificationsMessage())

        handled = self.bridge.process_pending()

        self.assertEqual(handled, 1)
        message = self.worker_mailbox.receive(timeout=0)
        self.assertEqual(message.type, MessageType.SCHEDULED_NOTIFICATIONS_LIST)
        self.assertEqual(message.notifications, [])

    def test_daily_check_is_delegated(self):
        """Test that the daily challenge check runs for the requested user and day."""
        self.bridge.handle_message(
            CheckDailyChallengeReminderMessage(user_id="user-3", date=date(2026, 3, 10))
        )

        self.reminder_service.check_user.assert_called_once_with(
            "user-3", date(2026, 3, 10)
        )

    def test_daily_check_failure_is_contained(self):
        """Test that a failing check does not escape the handler."""
        self.reminder_service.check_user.side_effect = RuntimeError("provider down")

        self.bridge.handle_message(
            CheckDailyChallengeReminderMessage(user_id="user-3", date=date(2026, 3, 10))
        )

    def test_click_is_recorded(self):
        """Test that forwarded clicks are kept for the page."""
        self.bridge.handle_message(NotificationClickedMessage(data={"challengeId": 42}))

        self.assertEqual(self.bridge.clicked, [{"challengeId": 42}])

    def test_fired_one_shot_is_deleted(self):
        """Test that a reported one-shot fire removes the record."""
        self.store.save(
            make_record(id="a", scheduled_time=1000, repeat=RepeatInterval.NONE)
        )
        self.store.notifier.reset_mock()

        self.bridge.handle_message(
            NotificationFiredMessage(id="a", scheduled_time=1000)
        )

        self.assertIsNone(self.store.get("a"))
        self.store.notifier.schedule_changed.assert_not_called()

    def test_fired_repeating_record_moves_to_next_slot(self):
        """Test that a reported repeating fire is saved at its next slot."""
        record = make_record(id="a", scheduled_time=1000)
        self.store.save(record)

        self.bridge.post_message(
            NotificationFiredMessage(
                id="a", scheduled_time=1000, next_scheduled_time=2000
            )
        )
        self.bridge.process_pending()

        stored = self.store.get("a")
        self.assertEqual(stored.scheduled_time, 2000)
        self.assertEqual(stored.title, record.title)

    def test_fire_report_for_edited_record_is_ignored(self):
        """Test that a record rescheduled after the fire keeps its new time."""
        self.store.save(
            make_record(id="a", scheduled_time=5000, repeat=RepeatInterval.NONE)
        )

        changed = self.bridge.record_fire(
            NotificationFiredMessage(id="a", scheduled_time=1000)
        )

        self.assertFalse(changed)
        self.assertEqual(self.store.get("a").scheduled_time, 5000)

    def test_fire_report_for_unknown_record_is_ignored(self):
        """Test that a report for a deleted record changes nothing."""
        self.assertFalse(
            self.bridge.record_fire(NotificationFiredMessage(id="a", scheduled_time=1))
        )

    def test_fire_report_storage_failure_reports_false(self):
        """Test that an unreadable store leaves the report unapplied."""
        self.store.get = Mock(side_effect=StorageUnavailableError("get"))

        self.assertFalse(
            self.bridge.record_fire(NotificationFiredMessage(id="a", scheduled_time=1))
        )

    def test_focus_is_counted(self):
        """Test that the worker can focus the bridge window."""
        self.bridge.focus()
        self.bridge.focus()

        self.assertEqual(self.bridge.focus_count, 2)

    def test_storage_failure_reports_false(self):
        """Test that an unreadable store is not pushed."""
        self.store.get_all = Mock(side_effect=StorageUnavailableError("get_all"))

        self.assertFalse(self.bridge.push_schedule())
        self.assertEqual(self.worker_mailbox.pending(), 0)

    def test_default_url_is_app_root(self):
        """Test that the bridge window sits at the application root."""
        self.assertEqual(self.bridge.url, "https://app.example.com/")


class TestMailboxWindowClient(TestCase):
    """Test cases for the remote window client."""

    def test_post_message_goes_to_mailbox(self):
        """Test that messages for a remote window land in its mailbox."""
        mailbox = LocalMailbox("remote")
        client = MailboxWindowClient(url="https://app.example.com/", mailbox=mailbox)

        client.post_message(GetScheduledNotificationsMessage())
        client.focus()

        self.assertEqual(
            mailbox.receive(timeout=0).type, MessageType.GET_SCHEDULED_NOTIFICATIONS
        )


class TestSyncNotifier(TestCase):
    """Test cases for the store's sync notifier."""

    def test_posts_schedule_update(self):
        """Test that a change is announced with SCHEDULE_UPDATE."""
        mailbox = LocalMailbox("worker")

        SyncNotifier(mailbox=mailbox).schedule_changed()

        self.assertIsInstance(mailbox.receive(timeout=0), ScheduleUpdateMessage)

    def test_post_failure_is_swallowed(self):
        """Test that an unreachable worker does not fail the write."""
        mailbox = Mock()
        mailbox.post.side_effect = ConnectionError("redis down")

        SyncNotifier(mailbox=mailbox).schedule_changed()

        mailbox.post.assert_called_once()

    def test_resolves_configured_worker_mailbox(self):
        """Test that without a mailbox the configured worker mailbox is used."""
        SyncNotifier().schedule_changed()

        worker_mailbox = get_mailbox("reminders:worker")
        self.assertEqual(
            worker_mailbox.receive(timeout=0).type, MessageType.SCHEDULE_UPDATE
        )
