"""Message passing between foreground contexts and the delivery worker."""

from reminders.bridge.mailbox import (
    LocalMailbox,
    Mailbox,
    RedisMailbox,
    get_mailbox,
    reset_local_mailboxes,
)
from reminders.bridge.sync_notifier import SyncNotifier

# Note: ForegroundBridge is not exported here because it depends on the store,
# which itself depends on SyncNotifier. Import it from reminders.bridge.foreground.

__all__ = [
    "LocalMailbox",
    "Mailbox",
    "RedisMailbox",
    "SyncNotifier",
    "get_mailbox",
    "reset_local_mailboxes",
]
