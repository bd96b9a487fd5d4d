"""Push a reminder to every user with incomplete challenges today.

Meant to be run by cron once a day, e.g. at 18:00 local time.
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from reminders.logging import setup_logging
from reminders.services.daily_reminder_service import DailyReminderService


class Command(BaseCommand):
    """Run the daily challenge reminder sweep."""

    help = "Send daily challenge reminders to users with incomplete challenges"

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            help="Day to check as YYYY-MM-DD (default: today)",
        )
        parser.add_argument(
            "--user",
            help="Only check this user id",
        )

    def handle(self, *args, **options):
        setup_logging("daily-reminder")

        check_date = None
        if options["date"]:
            try:
                check_date = date.fromisoformat(options["date"])
            except ValueError as e:
                raise CommandError(f"Invalid --date: {options['date']}") from e

        service = DailyReminderService()
        if options["user"]:
            result = service.check_user(options["user"], check_date)
            self.stdout.write(
                f"{result.user_id}: {len(result.incomplete_challenges)} incomplete, "
                f"notified={result.notified}"
            )
            return

        sweep = service.run_for_all_users(check_date)
        self.stdout.write(
            self.style.SUCCESS(
                f"{sweep.date}: checked {sweep.users_checked} users, "
                f"sent {sweep.notifications_sent} reminders, "
                f"{sweep.failures} failures"
            )
        )
