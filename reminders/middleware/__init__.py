"""Middleware components for the reminder service."""

from reminders.middleware.process_time import ProcessTimeMiddleware
from reminders.middleware.request_id import RequestIDMiddleware

__all__ = ["ProcessTimeMiddleware", "RequestIDMiddleware"]
