"""Durable storage for scheduled notifications.

The store is the single source of truth for the schedule. Each call runs in
its own database transaction; there is no cross-record transaction. Every
mutation triggers a best-effort sync notification to the delivery worker
unless the caller is the worker itself.
"""

from django.db import DatabaseError, transaction

import structlog
from pydantic import ValidationError

from reminders.bridge.sync_notifier import SyncNotifier
from reminders.exceptions import StorageUnavailableError
from reminders.models import ScheduledNotification
from reminders.schemas.notification import ScheduledNotificationRecord

logger = structlog.get_logger(__name__)


class ScheduledNotificationStore:
    """CRUD for ``ScheduledNotification`` rows, exchanged as records."""

    def __init__(self, notifier: SyncNotifier | None = None) -> None:
        """Initialize the store.

        Args:
            notifier: Sync notifier used after mutations
        """
        self.notifier = notifier or SyncNotifier()

    def save(self, record: ScheduledNotificationRecord, notify: bool = True) -> None:
        """Create or replace a record by id.

        Args:
            record: Record to persist
            notify: Post a sync notification to the worker afterwards

        Raises:
            StorageUnavailableError: If the database cannot be written
        """
        fields = record.to_model_fields()
        notification_id = fields.pop("id")
        try:
            with transaction.atomic():
                ScheduledNotification.objects.update_or_create(
                    id=notification_id, defaults=fields
                )
        except DatabaseError as e:
            logger.error(
                "store_save_failed", notification_id=notification_id, error=str(e)
            )
            raise StorageUnavailableError(operation="save", reason=str(e)) from e

        logger.debug("store_saved", notification_id=notification_id)
        if notify:
            self.notifier.schedule_changed()

    def get_all(self) -> list[ScheduledNotificationRecord]:
        """Return every stored record, empty list when there are none.

        Rows that no longer validate are logged and left out.

        Raises:
            StorageUnavailableError: If the database cannot be read
        """
        try:
            rows = list(ScheduledNotification.objects.all())
        except DatabaseError as e:
            logger.error("store_get_all_failed", error=str(e))
            raise StorageUnavailableError(operation="get_all", reason=str(e)) from e
        records = []
        for row in rows:
            try:
                records.append(ScheduledNotificationRecord.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "corrupt_record_skipped",
                    notification_id=row.id,
                    errors=e.errors(include_url=False, include_context=False),
                )
        return records

    def get(self, notification_id: str) -> ScheduledNotificationRecord | None:
        """Return one record, or None if the id is unknown.

        Raises:
            StorageUnavailableError: If the database cannot be read
        """
        try:
            row = ScheduledNotification.objects.filter(id=notification_id).first()
        except DatabaseError as e:
            logger.error(
                "store_get_failed", notification_id=notification_id, error=str(e)
            )
            raise StorageUnavailableError(operation="get", reason=str(e)) from e
        if row is None:
            return None
        return ScheduledNotificationRecord.model_validate(row)

    def delete(self, notification_id: str, notify: bool = True) -> None:
        """Remove a record. Deleting an unknown id is not an error.

        Args:
            notification_id: Id of the record to remove
            notify: Post a sync notification to the worker afterwards

        Raises:
            StorageUnavailableError: If the database cannot be written
        """
        try:
            with transaction.atomic():
                deleted, _ = ScheduledNotification.objects.filter(
                    id=notification_id
                ).delete()
        except DatabaseError as e:
            logger.error(
                "store_delete_failed", notification_id=notification_id, error=str(e)
            )
            raise StorageUnavailableError(operation="delete", reason=str(e)) from e

        logger.debug(
            "store_deleted", notification_id=notification_id, existed=bool(deleted)
        )
        if notify:
            self.notifier.schedule_changed()


# Global store instance
scheduled_notification_store = ScheduledNotificationStore()
