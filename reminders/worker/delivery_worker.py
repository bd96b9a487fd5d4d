"""Background delivery worker.

The worker keeps one armed timer per enabled record and displays the
notification when the timer elapses. Its timer set is a disposable cache:
every full resync cancels all timers and rebuilds them from the authoritative
record set, either read from the store or pushed by a foreground context.

Per record the worker moves through Unarmed, Armed and Fired. After a fire a
repeating record is advanced to its next future occurrence, persisted and
re-armed; a one-shot record is deleted.
"""

import itertools
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import structlog

from reminders.bridge.mailbox import Mailbox, get_mailbox
from reminders.conf import NotificationDefaults, get_notification_defaults
from reminders.enums import MessageType, NotificationPermission, RepeatInterval
from reminders.exceptions import StorageUnavailableError
from reminders.logging import notification_context
from reminders.repositories.scheduled_notification_store import (
    ScheduledNotificationStore,
)
from reminders.schemas.base_schema_model import BaseSchemaModel
from reminders.schemas.bridge import (
    CheckDailyChallengeReminderMessage,
    GetScheduledNotificationsMessage,
    NotificationClickedMessage,
    NotificationFiredMessage,
)
from reminders.schemas.notification import (
    DisplayedNotification,
    ScheduledNotificationRecord,
)
from reminders.services.notification_scheduler import (
    current_time_ms,
    next_occurrence,
    to_local_datetime,
)
from reminders.worker.clients import WindowClients
from reminders.worker.surface import InMemoryNotificationSurface, NotificationSurface

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NavigationResult:
    """Where a notification click took the user.

    Attributes:
        action: ``focus`` when an open window was reused, ``open`` otherwise
        url: URL of the focused or opened window
    """

    action: str
    url: str


@dataclass
class _ArmedTimer:
    generation: int
    record: ScheduledNotificationRecord
    timer: Any


class DeliveryWorker:
    """Arms timers for scheduled notifications and fires them."""

    def __init__(
        self,
        mailbox: Mailbox | None = None,
        surface: NotificationSurface | None = None,
        clients: WindowClients | None = None,
        store: ScheduledNotificationStore | None = None,
        clock: Callable[[], int] | None = None,
        timer_factory: Callable[..., Any] | None = None,
        defaults: NotificationDefaults | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            mailbox: Mailbox the worker receives bridge messages on
            surface: Where fired notifications are displayed
            clients: Open application windows
            store: Direct store access; without it the worker asks the
                foreground for the record set
            clock: Returns the current instant in epoch milliseconds
            timer_factory: ``threading.Timer`` compatible factory
            defaults: Display fallbacks and runtime options
        """
        self.defaults = defaults or get_notification_defaults()
        self.mailbox = mailbox or get_mailbox(self.defaults.worker_mailbox)
        self.surface = surface or InMemoryNotificationSurface()
        self.clients = clients or WindowClients()
        self.store = store
        self.clock = clock or current_time_ms
        self.timer_factory = timer_factory or threading.Timer

        self._lock = threading.RLock()
        self._timers: dict[str, _ArmedTimer] = {}
        self._fired_slots: dict[str, int] = {}
        self._generations = itertools.count(1)
        self._stopped = threading.Event()
        self._last_resync = 0.0

    # Lifecycle

    def start(self) -> None:
        """Rebuild all timers from scratch."""
        self._stopped.clear()
        logger.info("worker_started", has_store=self.store is not None)
        self.resync()

    def run(self) -> None:
        """Process mailbox messages until ``stop()`` is called.

        Also resyncs from the store every ``worker_resync_seconds`` so fires
        missed while the host slept are caught up.
        """
        poll = self.defaults.worker_poll_seconds
        while not self._stopped.is_set():
            try:
                message = self.mailbox.receive(timeout=poll)
            except Exception:
                logger.exception("mailbox_receive_failed", mailbox=self.mailbox.name)
                self._stopped.wait(poll)
                continue

            if message is not None:
                self.handle_message(message)

            if self._resync_due():
                self.resync()
        logger.info("worker_stopped")

    def stop(self) -> None:
        """Cancel every timer and end ``run()``."""
        self._stopped.set()
        with self._lock:
            for armed in self._timers.values():
                armed.timer.cancel()
            self._timers.clear()

    # Messages

    def handle_message(self, message) -> None:
        """Apply one bridge message. Errors are logged, never raised."""
        try:
            if message.type == MessageType.SCHEDULED_NOTIFICATIONS_LIST:
                self.replace_all(message.records())
            elif message.type == MessageType.SCHEDULE_NOTIFICATION:
                self.arm(message.notification)
            elif message.type == MessageType.SCHEDULE_UPDATE:
                self.resync()
            elif message.type == MessageType.NOTIFICATION_CLICK:
                self.handle_notification_click(message.notification)
            else:
                logger.debug("message_ignored", message_type=message.type)
        except Exception:
            logger.exception("message_handling_failed", message_type=message.type)

    def resync(self) -> None:
        """Rebuild timers from the store, or ask the foreground for the list."""
        self._last_resync = time.monotonic()
        if self.store is None:
            self.request_schedule()
            return
        try:
            records = self.store.get_all()
        except StorageUnavailableError as e:
            # Keep what is armed; the next resync retries
            logger.warning("resync_failed", error=str(e))
            return
        self.replace_all(records)

    def request_schedule(self) -> None:
        """Ask every known window to push the full record set."""
        clients = self.post_to_clients(GetScheduledNotificationsMessage())
        logger.info("schedule_requested", clients=clients)

    def post_to_clients(self, message: BaseSchemaModel) -> int:
        """Post a message to every known window.

        Returns:
            Number of windows the message was offered to
        """
        clients = self.clients.match_all()
        for client in clients:
            try:
                client.post_message(message)
            except Exception:
                logger.exception(
                    "client_post_failed",
                    client_url=client.url,
                    message_type=message.type,
                )
        return len(clients)

    # Timers

    def replace_all(self, records: Iterable[ScheduledNotificationRecord]) -> int:
        """Discard every timer and arm the given records.

        Returns:
            Number of timers armed
        """
        records = list(records)
        with self._lock:
            for armed in self._timers.values():
                armed.timer.cancel()
            self._timers.clear()
            known = {record.id for record in records}
            self._fired_slots = {
                notification_id: slot
                for notification_id, slot in self._fired_slots.items()
                if notification_id in known
            }
            armed_count = sum(1 for record in records if self.arm(record))
        logger.info("schedule_replaced", records=len(records), armed=armed_count)
        return armed_count

    def arm(self, record: ScheduledNotificationRecord) -> bool:
        """Arm (or re-arm) the timer of one record.

        Disabled records are disarmed. A record whose slot already fired is
        moved to its next occurrence, or left unarmed if it is one-shot.

        Returns:
            True if a timer is now armed for the record
        """
        with self._lock:
            existing = self._timers.pop(record.id, None)
            if existing is not None:
                existing.timer.cancel()

            if not record.enabled:
                logger.debug("record_disabled", notification_id=record.id)
                return False

            fired_slot = self._fired_slots.get(record.id)
            if fired_slot is not None and record.scheduled_time <= fired_slot:
                if record.repeat_interval == RepeatInterval.NONE:
                    logger.debug("record_already_fired", notification_id=record.id)
                    return False
                record = record.model_copy(
                    update={
                        "scheduled_time": next_occurrence(
                            record.scheduled_time, record.repeat, now=fired_slot
                        )
                    }
                )

            delay_ms = max(0, record.scheduled_time - self.clock())
            generation = next(self._generations)
            timer = self.timer_factory(
                delay_ms / 1000, self._on_timer, args=(record.id, generation)
            )
            timer.daemon = True
            self._timers[record.id] = _ArmedTimer(generation, record, timer)
            timer.start()

        logger.debug(
            "record_armed",
            notification_id=record.id,
            scheduled_time=record.scheduled_time,
            delay_ms=delay_ms,
        )
        return True

    def armed_ids(self) -> list[str]:
        """Ids of the records with an armed timer."""
        with self._lock:
            return sorted(self._timers)

    def armed_record(self, notification_id: str) -> ScheduledNotificationRecord | None:
        """The record an armed timer will fire, if any."""
        with self._lock:
            armed = self._timers.get(notification_id)
            return armed.record if armed else None

    def _on_timer(self, notification_id: str, generation: int) -> None:
        with self._lock:
            armed = self._timers.get(notification_id)
            if armed is None or armed.generation != generation:
                logger.debug("stale_timer_ignored", notification_id=notification_id)
                return
            del self._timers[notification_id]
        self.fire(armed.record)

    # Firing

    def fire(self, record: ScheduledNotificationRecord) -> None:
        """Display a record and reschedule or delete it.

        Never raises: failures are logged and a repeating record is re-armed
        at its next occurrence even when the display or the save failed.
        A worker without store access reports the fire to the foreground,
        which persists the outcome.
        """
        fired_at = max(self.clock(), record.scheduled_time)
        with self._lock:
            self._fired_slots[record.id] = record.scheduled_time

        with notification_context(record.id, user_id=record.user_id):
            try:
                self._display(record, fired_at)
            except Exception:
                logger.exception("display_failed")

            if record.data.get("type") == "daily-reminder":
                self._request_daily_check(record, fired_at)

            if record.repeat_interval == RepeatInterval.NONE:
                self._remove_fired(record)
            else:
                self._reschedule(record, fired_at)

    def build_notification(
        self, record: ScheduledNotificationRecord, fired_at: int
    ) -> DisplayedNotification:
        """Resolve what the surface shows for a fire at ``fired_at``."""
        tag = record.tag or self.defaults.scheduled_tag
        fire_date = to_local_datetime(fired_at).date().isoformat()
        return DisplayedNotification(
            title=record.title or self.defaults.default_title,
            body=record.body or self.defaults.default_body,
            icon=record.icon or self.defaults.icon,
            badge=record.badge or self.defaults.badge,
            tag=f"{tag}-{fire_date}",
            require_interaction=self.defaults.require_interaction,
            data={
                "type": "scheduled",
                "id": record.id,
                "url": self.defaults.default_url,
                **record.data,
            },
        )

    def _display(self, record: ScheduledNotificationRecord, fired_at: int) -> None:
        permission = self.surface.permission(record.user_id)
        if permission != NotificationPermission.GRANTED:
            logger.info("display_skipped_permission", permission=permission)
            return
        notification = self.build_notification(record, fired_at)
        self.surface.show(notification, user_id=record.user_id)
        logger.info("notification_fired", tag=notification.tag)

    def _request_daily_check(
        self, record: ScheduledNotificationRecord, fired_at: int
    ) -> None:
        user_id = record.data.get("userId") or record.user_id
        if not user_id:
            logger.debug("daily_check_skipped_no_user")
            return
        message = CheckDailyChallengeReminderMessage(
            user_id=str(user_id), date=to_local_datetime(fired_at).date()
        )
        clients = self.post_to_clients(message)
        logger.info("daily_check_requested", date=message.date, clients=clients)

    def _report_fired(
        self, record: ScheduledNotificationRecord, next_time: int | None
    ) -> None:
        message = NotificationFiredMessage(
            id=record.id,
            scheduled_time=record.scheduled_time,
            next_scheduled_time=next_time,
        )
        clients = self.post_to_clients(message)
        logger.info("fire_reported", next_scheduled_time=next_time, clients=clients)

    def _remove_fired(self, record: ScheduledNotificationRecord) -> None:
        if self.store is None:
            self._report_fired(record, None)
            return
        try:
            self.store.delete(record.id, notify=False)
        except StorageUnavailableError as e:
            logger.warning("fired_record_delete_failed", error=str(e))

    def _reschedule(self, record: ScheduledNotificationRecord, fired_at: int) -> None:
        next_time = next_occurrence(record.scheduled_time, record.repeat, now=fired_at)
        updated = record.model_copy(update={"scheduled_time": next_time})
        if self.store is None:
            self._report_fired(record, next_time)
        else:
            try:
                self.store.save(updated, notify=False)
            except StorageUnavailableError as e:
                logger.warning("rescheduled_record_save_failed", error=str(e))
        logger.info("notification_rescheduled", scheduled_time=next_time)
        self.arm(updated)

    # Interaction

    def handle_notification_click(
        self, notification: DisplayedNotification
    ) -> NavigationResult:
        """Close a clicked notification and bring the app to the front.

        Focuses a window open at the application's root and forwards it the
        notification data. Without one, opens the dashboard, carrying the
        challenge id of the notification when it has one.
        """
        self.surface.close(notification.tag)

        app_url = self.defaults.app_url
        for client in self.clients.match_all():
            if client.url == app_url:
                client.focus()
                try:
                    client.post_message(
                        NotificationClickedMessage(data=notification.data)
                    )
                except Exception:
                    logger.exception("click_forward_failed", client_url=client.url)
                logger.info("notification_click_focused", url=client.url)
                return NavigationResult(action="focus", url=client.url)

        url = self.defaults.absolute_url(self.defaults.default_url)
        challenge_id = notification.data.get("challengeId")
        if challenge_id is not None:
            url = f"{url}?{urlencode({'challengeId': challenge_id})}"
        self.clients.open_window(url)
        logger.info("notification_click_opened", url=url)
        return NavigationResult(action="open", url=url)

    def _resync_due(self) -> bool:
        if self.store is None:
            return False
        elapsed = time.monotonic() - self._last_resync
        return elapsed >= self.defaults.worker_resync_seconds
