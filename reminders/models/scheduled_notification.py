"""ScheduledNotification model, the only persisted scheduling entity.

Each row is one reminder: what to display and the instant it should next
fire. Repeating rows are rewritten with their next occurrence after every
fire; one-shot rows are deleted once fired.
"""

from typing import ClassVar

from django.db import models

from reminders.enums import RepeatInterval


class ScheduledNotification(models.Model):
    """A notification scheduled to fire at an absolute instant.

    Attributes:
        id: Opaque identifier (``notification-<ms>-<random>``), primary key.
        title: Display title.
        body: Display body.
        icon: Icon resource path, filled from defaults when created.
        badge: Badge resource path, filled from defaults when created.
        tag: Collapse key used by the notification surface.
        scheduled_time: Next fire instant in milliseconds since the epoch.
        repeat: Recurrence, one of ``none``, ``daily``, ``weekly``.
        enabled: Disabled rows are retained but never fire.
        user_id: Owner of the reminder, selects push subscriptions.
        data: Opaque payload carried into the displayed notification.
        created_at: When the row was created.
        updated_at: When the row was last written.
    """

    id = models.CharField(
        primary_key=True,
        max_length=64,
        editable=False,
        help_text="Opaque notification identifier",
    )
    title = models.CharField(max_length=255, help_text="Display title")
    body = models.TextField(help_text="Display body")
    icon = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Icon resource path",
    )
    badge = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Badge resource path",
    )
    tag = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text="Collapse key for the notification surface",
    )
    scheduled_time = models.BigIntegerField(
        help_text="Next fire instant in milliseconds since the epoch",
    )
    repeat = models.CharField(
        max_length=10,
        choices=[(interval.value, interval.value) for interval in RepeatInterval],
        default=RepeatInterval.NONE.value,
        help_text="Recurrence (none, daily, weekly)",
    )
    enabled = models.BooleanField(
        default=True,
        help_text="Disabled notifications are kept but never fire",
    )
    user_id = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        help_text="Owner of the reminder",
    )
    data = models.JSONField(
        default=dict,
        blank=True,
        help_text="Payload carried into the displayed notification",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "scheduled_notifications"
        ordering: ClassVar[list[str]] = ["scheduled_time"]
        indexes: ClassVar[list] = [
            models.Index(fields=["enabled", "scheduled_time"]),
            models.Index(fields=["user_id"]),
        ]

    def __str__(self) -> str:
        """Return string representation of the scheduled notification."""
        return f"{self.title} at {self.scheduled_time} ({self.repeat})"

    def __repr__(self) -> str:
        """Return detailed representation of the scheduled notification."""
        return (
            f"<ScheduledNotification(id={self.id}, "
            f"scheduled_time={self.scheduled_time}, "
            f"repeat={self.repeat}, "
            f"enabled={self.enabled})>"
        )
