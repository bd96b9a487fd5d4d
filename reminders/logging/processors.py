"""Structlog processors adding reminder context, and the console renderer."""

import os
import threading

from colorama import Fore, Style, init
from structlog.typing import EventDict, WrappedLogger

from reminders.logging.context import get_execution_context, get_request_id

LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

CONTEXT_COLORS = {
    "foreground": Fore.CYAN,
    "worker": Fore.MAGENTA,
}

# Rendered in the console prefix, or only useful in the JSON file
_PREFIX_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "logger",
        "event",
        "execution_context",
        "request_id",
        "notification_id",
        "process_id",
        "thread_name",
        "service_name",
        "environment",
    }
)


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach the execution context label and, inside a request, its id."""
    event_dict["execution_context"] = get_execution_context()
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict["service_name"] = os.getenv("SERVICE_NAME", "reminder-service")
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach the process id and the thread name (timers are ``Thread-N``)."""
    event_dict["process_id"] = os.getpid()
    event_dict["thread_name"] = threading.current_thread().name
    return event_dict


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render one colored console line.

    Format: [LEVEL] timestamp | context | request_id or notification_id |
    logger | event key=value...
    """
    init(autoreset=True)

    level = str(event_dict.get("level", "info")).upper()
    context = event_dict.get("execution_context", "-")
    subject = event_dict.get("request_id") or event_dict.get("notification_id") or "-"

    line = (
        f"{LEVEL_COLORS.get(level, Fore.WHITE)}[{level:<8}]{Style.RESET_ALL} "
        f"{event_dict.get('timestamp', '')} | "
        f"{CONTEXT_COLORS.get(context, Fore.WHITE)}{context}{Style.RESET_ALL} | "
        f"{subject} | "
        f"{Fore.BLUE}{event_dict.get('logger', 'root')}{Style.RESET_ALL} | "
        f"{event_dict.get('event', '')}"
    )

    extras = " ".join(
        f"{key}={value}"
        for key, value in event_dict.items()
        if key not in _PREFIX_FIELDS
    )
    if extras:
        line += f" {Fore.YELLOW}{extras}{Style.RESET_ALL}"
    return line
