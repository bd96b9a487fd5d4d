"""Foreground side of the sync bridge.

The foreground owns store access. It pushes the authoritative record set to
the worker on startup and whenever the worker asks for it, it answers the
worker's domain requests and it persists the fires of a worker that has no
store access. The bridge is itself a window client, so a worker running in
the same process can focus it and post messages to it.
"""

import threading

import structlog

from reminders.bridge.mailbox import Mailbox, get_mailbox
from reminders.conf import get_notification_defaults
from reminders.enums import MessageType
from reminders.exceptions import StorageUnavailableError
from reminders.repositories.scheduled_notification_store import (
    ScheduledNotificationStore,
    scheduled_notification_store,
)
from reminders.schemas.base_schema_model import BaseSchemaModel
from reminders.schemas.bridge import (
    NotificationFiredMessage,
    ScheduledNotificationsListMessage,
)
from reminders.services.daily_reminder_service import (
    DailyReminderService,
    daily_reminder_service,
)

logger = structlog.get_logger(__name__)


class MailboxWindowClient:
    """Window client in another process, reached through its mailbox."""

    def __init__(self, url: str, mailbox: Mailbox) -> None:
        self.url = url
        self.mailbox = mailbox

    def focus(self) -> None:
        logger.debug("remote_focus_requested", url=self.url)

    def post_message(self, message: BaseSchemaModel) -> None:
        self.mailbox.post(message)


class ForegroundBridge:
    """Serves the worker from a foreground context.

    Attributes:
        url: URL this foreground window is open at
        clicked: Data of every notification click forwarded by the worker
        focus_count: How often the worker focused this window
    """

    def __init__(
        self,
        store: ScheduledNotificationStore | None = None,
        worker_mailbox: Mailbox | None = None,
        inbox: Mailbox | None = None,
        reminder_service: DailyReminderService | None = None,
        url: str | None = None,
    ) -> None:
        """Initialize the bridge.

        Args:
            store: Notification store, defaults to the global store
            worker_mailbox: Mailbox the worker listens on
            inbox: Mailbox this foreground listens on
            reminder_service: Handles daily challenge reminder checks
            url: Window URL, defaults to the application root
        """
        defaults = get_notification_defaults()
        self.store = store or scheduled_notification_store
        self.worker_mailbox = worker_mailbox or get_mailbox(defaults.worker_mailbox)
        self.inbox = inbox or get_mailbox(defaults.foreground_mailbox)
        self.reminder_service = reminder_service or daily_reminder_service
        self.url = url or defaults.app_url
        self.clicked: list[dict] = []
        self.focus_count = 0
        self._stopped = threading.Event()

    def start(self) -> None:
        """Push the full record set so the worker starts from the truth."""
        self._stopped.clear()
        self.push_schedule()

    def push_schedule(self) -> bool:
        """Send the complete current record set to the worker.

        Returns:
            True if the list was posted
        """
        try:
            records = self.store.get_all()
        except StorageUnavailableError as e:
            logger.warning("schedule_push_failed", error=str(e))
            return False
        try:
            self.worker_mailbox.post(
                ScheduledNotificationsListMessage.from_records(records)
            )
        except Exception:
            logger.exception("schedule_push_failed")
            return False
        logger.info("schedule_pushed", records=len(records))
        return True

    def handle_message(self, message) -> None:
        """Apply one message from the worker. Errors are logged, never raised."""
        try:
            if message.type == MessageType.GET_SCHEDULED_NOTIFICATIONS:
                self.push_schedule()
            elif message.type == MessageType.CHECK_DAILY_CHALLENGE_REMINDER:
                self.reminder_service.check_user(message.user_id, message.date)
            elif message.type == MessageType.NOTIFICATION_CLICKED:
                self.clicked.append(message.data)
                logger.info("notification_click_received", data=message.data)
            elif message.type == MessageType.NOTIFICATION_FIRED:
                self.record_fire(message)
            else:
                logger.debug("message_ignored", message_type=message.type)
        except Exception:
            logger.exception("message_handling_failed", message_type=message.type)

    def record_fire(self, message: NotificationFiredMessage) -> bool:
        """Persist a fire reported by a worker without store access.

        A one-shot record is deleted and a repeating record moves to the
        reported next slot. A report for a slot the record no longer holds is
        ignored, so an edit saved after the fire wins.

        Returns:
            True if the store was changed
        """
        try:
            record = self.store.get(message.id)
            if record is None or record.scheduled_time != message.scheduled_time:
                logger.debug("stale_fire_report", notification_id=message.id)
                return False
            if message.next_scheduled_time is None:
                self.store.delete(message.id, notify=False)
            else:
                self.store.save(
                    record.model_copy(
                        update={"scheduled_time": message.next_scheduled_time}
                    ),
                    notify=False,
                )
        except StorageUnavailableError as e:
            logger.warning(
                "fire_report_failed", notification_id=message.id, error=str(e)
            )
            return False
        logger.info(
            "fire_recorded",
            notification_id=message.id,
            next_scheduled_time=message.next_scheduled_time,
        )
        return True

    def process_pending(self, timeout: float = 0.0) -> int:
        """Handle messages already waiting in the inbox.

        Args:
            timeout: Seconds to wait for each message

        Returns:
            Number of messages handled
        """
        handled = 0
        while True:
            message = self.inbox.receive(timeout=timeout)
            if message is None:
                return handled
            self.handle_message(message)
            handled += 1

    def run(self, poll_seconds: float | None = None) -> None:
        """Handle inbox messages until ``stop()`` is called."""
        poll = poll_seconds or get_notification_defaults().worker_poll_seconds
        while not self._stopped.is_set():
            message = self.inbox.receive(timeout=poll)
            if message is not None:
                self.handle_message(message)

    def stop(self) -> None:
        """End ``run()``."""
        self._stopped.set()

    # Window client

    def focus(self) -> None:
        """Record that the worker brought this window to the front."""
        self.focus_count += 1

    def post_message(self, message: BaseSchemaModel) -> None:
        """Queue a message from the worker for this foreground."""
        self.inbox.post(message)
