"""WSGI config for the reminder service.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import os

from django.core.wsgi import get_wsgi_application

from reminders.logging import setup_logging

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "reminder_service.settings")

setup_logging()

application = get_wsgi_application()
