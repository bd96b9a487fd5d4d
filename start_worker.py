"""Startup script for the background delivery worker.

Runs one long-lived worker process next to the API processes. Both sides
must use the redis mailbox backend (REMINDERS_MAILBOX_BACKEND=redis).
"""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Start the delivery worker with the given extra arguments."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "reminder_service.settings")
    execute_from_command_line([sys.argv[0], "rundeliveryworker", *sys.argv[1:]])


if __name__ == "__main__":
    main()
