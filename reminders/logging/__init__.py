"""Logging utilities for the reminder service."""

from reminders.logging.config import cleanup_old_logs, log_file_for, setup_logging
from reminders.logging.context import (
    get_execution_context,
    get_request_id,
    notification_context,
    set_execution_context,
    set_request_id,
)

__all__ = [
    "cleanup_old_logs",
    "get_execution_context",
    "get_request_id",
    "log_file_for",
    "notification_context",
    "set_execution_context",
    "set_request_id",
    "setup_logging",
]
