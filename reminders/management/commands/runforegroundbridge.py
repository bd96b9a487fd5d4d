"""Run the foreground side of the sync bridge on its own."""

import signal

from django.core.management.base import BaseCommand

from reminders.bridge.foreground import ForegroundBridge
from reminders.conf import get_notification_defaults
from reminders.logging import setup_logging


class Command(BaseCommand):
    """Answer delivery worker messages until interrupted.

    Pairs with ``rundeliveryworker`` when the worker runs in another process:
    it serves schedule requests, daily challenge checks and the fire reports
    of a worker started with ``--no-store``.
    """

    help = "Serve delivery worker messages from the foreground mailbox"

    def handle(self, *args, **options):
        setup_logging("foreground")

        bridge = ForegroundBridge()

        def _shutdown(signum, _frame):
            self.stdout.write(f"Received signal {signum}, stopping bridge")
            bridge.stop()

        signal.signal(signal.SIGTERM, _shutdown)
        signal.signal(signal.SIGINT, _shutdown)

        defaults = get_notification_defaults()
        self.stdout.write(
            self.style.SUCCESS(
                f"Foreground bridge listening on {defaults.foreground_mailbox} "
                f"({defaults.mailbox_backend} mailbox)"
            )
        )
        bridge.start()
        bridge.run()
