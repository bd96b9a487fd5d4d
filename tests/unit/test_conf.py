"""Unit tests for reminder configuration."""

from django.test import SimpleTestCase, override_settings

from reminders.conf import get_notification_defaults


class TestNotificationDefaults(SimpleTestCase):
    """Test cases for resolving NotificationDefaults."""

    def test_built_in_values(self):
        """Test the display fallbacks when settings do not override them."""
        defaults = get_notification_defaults()

        self.assertEqual(defaults.default_title, "Daily Challenge Reminder")
        self.assertEqual(defaults.icon, "/icon-192.png")
        self.assertEqual(defaults.scheduled_tag, "scheduled-notification")
        self.assertEqual(defaults.push_tag, "challenge-reminder")
        self.assertEqual(defaults.default_url, "/dashboard")
        self.assertFalse(defaults.require_interaction)
        self.assertEqual(defaults.worker_mailbox, "reminders:worker")

    def test_settings_override_defaults(self):
        """Test that REMINDERS entries win over the built-in values."""
        app_url = get_notification_defaults().app_url
        self.assertEqual(app_url, "https://app.example.com/")

        with override_settings(
            REMINDERS={"ICON": "/logo.png", "PUSH_TTL_SECONDS": "60"}
        ):
            defaults = get_notification_defaults()

        self.assertEqual(defaults.icon, "/logo.png")
        self.assertEqual(defaults.push_ttl_seconds, 60)
        self.assertEqual(defaults.badge, "/icon-192.png")

    def test_absolute_url(self):
        """Test joining in-app paths onto the application root."""
        defaults = get_notification_defaults()

        self.assertEqual(
            defaults.absolute_url("/dashboard"), "https://app.example.com/dashboard"
        )
        self.assertEqual(
            defaults.absolute_url("challenges/4"),
            "https://app.example.com/challenges/4",
        )
