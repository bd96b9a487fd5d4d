"""Tell the delivery worker that the stored schedule changed."""

import structlog

from reminders.bridge.mailbox import Mailbox, get_mailbox
from reminders.conf import get_notification_defaults
from reminders.schemas.bridge import ScheduleUpdateMessage

logger = structlog.get_logger(__name__)


class SyncNotifier:
    """Posts ``SCHEDULE_UPDATE`` to the worker mailbox after a store mutation.

    Delivery is best effort: a failed post is logged and swallowed, the
    worker's periodic resync picks the change up later.
    """

    def __init__(self, mailbox: Mailbox | None = None) -> None:
        """Initialize the notifier.

        Args:
            mailbox: Worker mailbox, resolved from settings on first use if omitted
        """
        self._mailbox = mailbox

    @property
    def mailbox(self) -> Mailbox:
        """Worker mailbox."""
        if self._mailbox is not None:
            return self._mailbox
        return get_mailbox(get_notification_defaults().worker_mailbox)

    def schedule_changed(self) -> None:
        """Post a resync hint to the worker."""
        try:
            self.mailbox.post(ScheduleUpdateMessage())
        except Exception:
            logger.exception("sync_notification_failed")
