"""Mailboxes carrying bridge messages between execution contexts.

A mailbox is a named one-way channel. The worker listens on one mailbox and
foreground contexts listen on another; neither side ever calls the other
directly. ``LocalMailbox`` serves a single process (tests, ``runlocal``) and
``RedisMailbox`` connects separate web and worker processes.
"""

import math
import queue
import threading
from abc import ABC, abstractmethod

import django_rq
import structlog
from pydantic import ValidationError

from reminders.conf import get_notification_defaults
from reminders.schemas.base_schema_model import BaseSchemaModel
from reminders.schemas.bridge import BridgeMessage, parse_message, serialize_message

logger = structlog.get_logger(__name__)


class Mailbox(ABC):
    """Named message channel with at-most-once delivery."""

    def __init__(self, name: str) -> None:
        """Initialize the mailbox.

        Args:
            name: Channel name shared by sender and receiver
        """
        self.name = name
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        """Whether ``close()`` has been called."""
        return self._closed.is_set()

    def post(self, message: BaseSchemaModel) -> None:
        """Send a message. Messages posted after ``close()`` are dropped.

        Args:
            message: Bridge message to send
        """
        if self.closed:
            logger.warning(
                "message_dropped_mailbox_closed",
                mailbox=self.name,
                message_type=getattr(message, "type", None),
            )
            return
        self._push(serialize_message(message))

    def receive(self, timeout: float | None = None) -> BridgeMessage | None:
        """Wait for the next message.

        Malformed messages are logged and dropped, so a ``None`` result does
        not imply the timeout elapsed.

        Args:
            timeout: Seconds to wait, ``None`` to block until a message arrives

        Returns:
            The next message, or None on timeout, drop, or close
        """
        if self.closed:
            return None
        raw = self._pop(timeout)
        if raw is None or self.closed:
            return None
        try:
            return parse_message(raw)
        except ValidationError as e:
            logger.warning(
                "malformed_message_dropped",
                mailbox=self.name,
                errors=e.errors(include_url=False),
            )
            return None

    def close(self) -> None:
        """Stop delivering messages."""
        self._closed.set()

    @abstractmethod
    def _push(self, payload: str) -> None:
        """Append an encoded message to the channel."""

    @abstractmethod
    def _pop(self, timeout: float | None) -> str | bytes | None:
        """Remove and return the oldest encoded message, or None on timeout."""


class LocalMailbox(Mailbox):
    """In-process mailbox backed by ``queue.Queue``.

    Messages are stored encoded so a local mailbox behaves exactly like a
    Redis one, including dropping malformed payloads.
    """

    def __init__(self, name: str) -> None:
        """Initialize the local mailbox."""
        super().__init__(name)
        self._queue: queue.Queue[str] = queue.Queue()

    def _push(self, payload: str) -> None:
        self._queue.put(payload)

    def _pop(self, timeout: float | None) -> str | None:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def pending(self) -> int:
        """Number of messages waiting to be received."""
        return self._queue.qsize()

    def close(self) -> None:
        """Stop delivering messages and wake a blocked receiver."""
        super().close()
        self._queue.put("")


class RedisMailbox(Mailbox):
    """Mailbox stored in a Redis list (``LPUSH`` to send, ``BRPOP`` to receive)."""

    KEY_PREFIX = "mailbox:"

    def __init__(self, name: str, connection=None) -> None:
        """Initialize the Redis mailbox.

        Args:
            name: Channel name
            connection: Redis connection, defaults to the django-rq default one
        """
        super().__init__(name)
        self.connection = connection or django_rq.get_connection("default")
        self.key = f"{self.KEY_PREFIX}{name}"

    def _push(self, payload: str) -> None:
        self.connection.lpush(self.key, payload)

    def _pop(self, timeout: float | None) -> bytes | None:
        # BRPOP treats 0 as "block forever" and wants whole seconds
        wait = 0 if timeout is None else max(1, math.ceil(timeout))
        result = self.connection.brpop([self.key], timeout=wait)
        if result is None:
            return None
        _, payload = result
        return payload


_local_mailboxes: dict[str, LocalMailbox] = {}
_local_mailboxes_lock = threading.Lock()


def get_mailbox(name: str, backend: str | None = None) -> Mailbox:
    """Return the mailbox for ``name`` on the configured backend.

    Local mailboxes are shared per process, so the sender and the receiver
    obtain the same queue.

    Args:
        name: Channel name
        backend: ``local`` or ``redis``; defaults to ``REMINDERS["MAILBOX_BACKEND"]``

    Returns:
        Mailbox instance

    Raises:
        ValueError: If the backend is unknown
    """
    backend = backend or get_notification_defaults().mailbox_backend
    if backend == "redis":
        return RedisMailbox(name)
    if backend == "local":
        with _local_mailboxes_lock:
            mailbox = _local_mailboxes.get(name)
            if mailbox is None or mailbox.closed:
                mailbox = LocalMailbox(name)
                _local_mailboxes[name] = mailbox
            return mailbox
    raise ValueError(f"Unknown mailbox backend: {backend}")


def reset_local_mailboxes() -> None:
    """Close and forget every local mailbox of this process."""
    with _local_mailboxes_lock:
        for mailbox in _local_mailboxes.values():
            mailbox.close()
        _local_mailboxes.clear()
