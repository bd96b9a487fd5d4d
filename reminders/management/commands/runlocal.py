"""Development server with an in-process delivery worker.

The worker, a foreground bridge and the web server share one process and
talk through local mailboxes, so scheduling can be tried end to end without
Redis.
"""

import threading

from django.core.management.commands.runserver import Command as RunServer

from reminders.bridge.foreground import ForegroundBridge
from reminders.repositories import scheduled_notification_store
from reminders.worker import DeliveryWorker, InMemoryNotificationSurface, WindowClients


class Command(RunServer):
    """Runserver that also starts the delivery worker in a thread."""

    help = "Start development server with an in-process delivery worker"

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument(
            "--no-worker",
            action="store_true",
            help="Do not start the in-process delivery worker",
        )

    def inner_run(self, *args, **options):
        if not options.get("no_worker"):
            self._start_worker()
        super().inner_run(*args, **options)

    def _start_worker(self):
        bridge = ForegroundBridge()
        clients = WindowClients()
        clients.register(bridge)
        worker = DeliveryWorker(
            surface=InMemoryNotificationSurface(),
            clients=clients,
            store=scheduled_notification_store,
        )
        worker.start()
        bridge.start()
        threads = (("delivery-worker", worker.run), ("foreground-bridge", bridge.run))
        for name, target in threads:
            threading.Thread(target=target, name=name, daemon=True).start()
        self.stdout.write(self.style.SUCCESS("In-process delivery worker started"))
