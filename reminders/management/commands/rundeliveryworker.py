"""Run the background delivery worker."""

import signal

from django.core.management.base import BaseCommand

from reminders.bridge.foreground import MailboxWindowClient
from reminders.bridge.mailbox import get_mailbox
from reminders.conf import get_notification_defaults
from reminders.logging import cleanup_old_logs, setup_logging
from reminders.repositories import scheduled_notification_store
from reminders.worker import (
    DeliveryWorker,
    InMemoryNotificationSurface,
    WebPushNotificationSurface,
    WindowClients,
)


class Command(BaseCommand):
    """Arm and fire scheduled notifications until interrupted."""

    help = "Run the scheduled notification delivery worker"

    def add_arguments(self, parser):
        parser.add_argument(
            "--surface",
            choices=["webpush", "memory"],
            default="webpush",
            help="Where fired notifications are displayed (default: webpush)",
        )
        parser.add_argument(
            "--no-store",
            action="store_true",
            help="Do not read the database; request the schedule from the foreground",
        )

    def handle(self, *args, **options):
        cleanup_old_logs(setup_logging("worker"))

        defaults = get_notification_defaults()
        clients = WindowClients()
        clients.register(
            MailboxWindowClient(
                url=defaults.app_url,
                mailbox=get_mailbox(defaults.foreground_mailbox),
            )
        )
        if options["surface"] == "memory":
            surface = InMemoryNotificationSurface()
        else:
            surface = WebPushNotificationSurface()

        worker = DeliveryWorker(
            surface=surface,
            clients=clients,
            store=None if options["no_store"] else scheduled_notification_store,
            defaults=defaults,
        )

        def _shutdown(signum, _frame):
            self.stdout.write(f"Received signal {signum}, stopping worker")
            worker.stop()

        signal.signal(signal.SIGTERM, _shutdown)
        signal.signal(signal.SIGINT, _shutdown)

        self.stdout.write(
            self.style.SUCCESS(
                f"Delivery worker listening on {worker.mailbox.name} "
                f"({defaults.mailbox_backend} mailbox, {options['surface']} surface)"
            )
        )
        worker.start()
        worker.run()
