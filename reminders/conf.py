"""Central configuration for the reminder subsystem.

The scheduler, the delivery worker and the push service all read their
display fallbacks and runtime options from one ``NotificationDefaults``
instance so the values cannot drift apart between call sites.
"""

from dataclasses import dataclass

from django.conf import settings

from reminders.constants import DEFAULT_NOTIFICATION_SETTINGS


@dataclass(frozen=True)
class NotificationDefaults:
    """Resolved reminder settings.

    Attributes:
        default_title: Title used when a pushed notification has none.
        default_body: Body used when a pushed notification has none.
        icon: Icon resource path.
        badge: Badge resource path.
        scheduled_tag: Collapse key for locally scheduled records.
        push_tag: Collapse key for server-sent pushes.
        require_interaction: Whether displayed notifications stay until acted on.
        default_url: Click destination inside the app.
        app_url: Canonical application root, used to find an open window.
        push_ttl_seconds: Time-to-live handed to the push service.
        worker_poll_seconds: Mailbox receive timeout for the worker loop.
        worker_resync_seconds: Interval of the worker's periodic full resync.
        mailbox_backend: ``local`` or ``redis``.
        worker_mailbox: Mailbox name the worker listens on.
        foreground_mailbox: Mailbox name foreground contexts listen on.
        incomplete_challenges_provider: Dotted path to the provider callable.
    """

    default_title: str
    default_body: str
    icon: str
    badge: str
    scheduled_tag: str
    push_tag: str
    require_interaction: bool
    default_url: str
    app_url: str
    push_ttl_seconds: int
    worker_poll_seconds: float
    worker_resync_seconds: float
    mailbox_backend: str
    worker_mailbox: str
    foreground_mailbox: str
    incomplete_challenges_provider: str

    def absolute_url(self, path: str) -> str:
        """Join an in-app path onto the canonical application root."""
        return f"{self.app_url.rstrip('/')}/{path.lstrip('/')}"


def get_notification_defaults() -> NotificationDefaults:
    """Build the defaults from ``settings.REMINDERS`` over the built-in values.

    Returns:
        NotificationDefaults with every key resolved.
    """
    merged = {**DEFAULT_NOTIFICATION_SETTINGS, **getattr(settings, "REMINDERS", {})}
    return NotificationDefaults(
        default_title=str(merged["DEFAULT_TITLE"]),
        default_body=str(merged["DEFAULT_BODY"]),
        icon=str(merged["ICON"]),
        badge=str(merged["BADGE"]),
        scheduled_tag=str(merged["SCHEDULED_TAG"]),
        push_tag=str(merged["PUSH_TAG"]),
        require_interaction=bool(merged["REQUIRE_INTERACTION"]),
        default_url=str(merged["DEFAULT_URL"]),
        app_url=str(merged["APP_URL"]),
        push_ttl_seconds=int(merged["PUSH_TTL_SECONDS"]),
        worker_poll_seconds=float(merged["WORKER_POLL_SECONDS"]),
        worker_resync_seconds=float(merged["WORKER_RESYNC_SECONDS"]),
        mailbox_backend=str(merged["MAILBOX_BACKEND"]),
        worker_mailbox=str(merged["WORKER_MAILBOX"]),
        foreground_mailbox=str(merged["FOREGROUND_MAILBOX"]),
        incomplete_challenges_provider=str(merged["INCOMPLETE_CHALLENGES_PROVIDER"]),
    )
