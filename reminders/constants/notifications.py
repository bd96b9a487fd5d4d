"""Default values for scheduled and pushed notifications.

These are the fallbacks merged with ``settings.REMINDERS`` by
``reminders.conf.get_notification_defaults``. Nothing else should read them
directly.
"""

NOTIFICATION_ID_PREFIX = "notification"

SCOPE_USER = "reminder:user"
SCOPE_ADMIN = "reminder:admin"

DEFAULT_NOTIFICATION_SETTINGS: dict[str, object] = {
    "DEFAULT_TITLE": "Daily Challenge Reminder",
    "DEFAULT_BODY": "Don't forget to complete your daily challenge!",
    "ICON": "/icon-192.png",
    "BADGE": "/icon-192.png",
    "SCHEDULED_TAG": "scheduled-notification",
    "PUSH_TAG": "challenge-reminder",
    "REQUIRE_INTERACTION": False,
    "DEFAULT_URL": "/dashboard",
    "APP_URL": "http://localhost:5173/",
    "PUSH_TTL_SECONDS": 86400,
    "WORKER_POLL_SECONDS": 1.0,
    "WORKER_RESYNC_SECONDS": 300,
    "MAILBOX_BACKEND": "local",
    "WORKER_MAILBOX": "reminders:worker",
    "FOREGROUND_MAILBOX": "reminders:foreground",
    "INCOMPLETE_CHALLENGES_PROVIDER": "",
}
