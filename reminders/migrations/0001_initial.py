import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PushSubscription",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("user_id", models.CharField(db_index=True, max_length=64)),
                ("endpoint", models.TextField()),
                ("p256dh", models.CharField(max_length=255)),
                ("auth", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "push_subscriptions",
                "ordering": ["-created_at"],
                "unique_together": {("user_id", "endpoint")},
            },
        ),
        migrations.CreateModel(
            name="ScheduledNotification",
            fields=[
                (
                    "id",
                    models.CharField(
                        editable=False,
                        help_text="Opaque notification identifier",
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("title", models.CharField(help_text="Display title", max_length=255)),
                ("body", models.TextField(help_text="Display body")),
                (
                    "icon",
                    models.CharField(
                        blank=True,
                        help_text="Icon resource path",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "badge",
                    models.CharField(
                        blank=True,
                        help_text="Badge resource path",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "tag",
                    models.CharField(
                        blank=True,
                        help_text="Collapse key for the notification surface",
                        max_length=100,
                        null=True,
                    ),
                ),
                (
                    "scheduled_time",
                    models.BigIntegerField(
                        help_text="Next fire instant in milliseconds since the epoch"
                    ),
                ),
                (
                    "repeat",
                    models.CharField(
                        choices=[
                            ("none", "none"),
                            ("daily", "daily"),
                            ("weekly", "weekly"),
                        ],
                        default="none",
                        help_text="Recurrence (none, daily, weekly)",
                        max_length=10,
                    ),
                ),
                (
                    "enabled",
                    models.BooleanField(
                        default=True,
                        help_text="Disabled notifications are kept but never fire",
                    ),
                ),
                (
                    "user_id",
                    models.CharField(
                        blank=True,
                        help_text="Owner of the reminder",
                        max_length=64,
                        null=True,
                    ),
                ),
                (
                    "data",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Payload carried into the displayed notification",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "scheduled_notifications",
                "ordering": ["scheduled_time"],
                "indexes": [
                    models.Index(
                        fields=["enabled", "scheduled_time"],
                        name="scheduled_n_enabled_6f2c1a_idx",
                    ),
                    models.Index(
                        fields=["user_id"], name="scheduled_n_user_id_0b7d4e_idx"
                    ),
                ],
            },
        ),
    ]
