"""Django application configuration for reminders."""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class RemindersConfig(AppConfig):
    """Configuration class for the reminders application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "reminders"
    verbose_name = "Challenge reminders"

    def ready(self) -> None:
        """Log the reminder configuration once the app registry is ready."""
        from reminders.conf import get_notification_defaults  # noqa: PLC0415

        defaults = get_notification_defaults()
        logger.info(
            f"Reminders ready (mailbox backend: {defaults.mailbox_backend}, "
            f"app url: {defaults.app_url})"
        )
