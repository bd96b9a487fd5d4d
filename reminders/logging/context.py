"""Log context for requests, processes and in-flight notifications.

Three kinds of context end up on every event:

* the request id of the HTTP request being served (thread-local)
* the execution context label of the process (``foreground``, ``worker``,
  ``daily-reminder``); process-wide so timer threads inherit it
* the notification being fired or pushed, bound as a structlog contextvar
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

FOREGROUND = "foreground"

_request_context = threading.local()
_execution_context = {"name": FOREGROUND}


def set_request_id(request_id: str) -> None:
    """Store the request ID for the current thread."""
    _request_context.request_id = request_id


def get_request_id() -> str | None:
    """Return the request ID of the current thread, or None."""
    return getattr(_request_context, "request_id", None)


def clear_request_id() -> None:
    if hasattr(_request_context, "request_id"):
        delattr(_request_context, "request_id")


def set_execution_context(name: str) -> None:
    """Label every subsequent log event of this process.

    Args:
        name: Context label, e.g. ``foreground`` or ``worker``.
    """
    _execution_context["name"] = name


def get_execution_context() -> str:
    return _execution_context["name"]


@contextmanager
def notification_context(notification_id: str, **extra) -> Iterator[None]:
    """Bind ``notification_id`` (and any extras) to events logged inside.

    Timer callbacks run on their own threads, each with a fresh contextvars
    context, so bindings never leak between two fires.
    """
    with structlog.contextvars.bound_contextvars(
        notification_id=notification_id, **extra
    ):
        yield
