#!/usr/bin/env python
"""Script to run the development server with an in-process delivery worker."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the development server.

    Uses the custom 'runlocal' command, which starts the delivery worker and
    a foreground bridge next to the web server on local mailboxes.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "reminder_service.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
