"""Registry of application windows the worker can focus, message or open."""

import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import structlog

from reminders.schemas.base_schema_model import BaseSchemaModel

logger = structlog.get_logger(__name__)


@runtime_checkable
class WindowClient(Protocol):
    """An open application window reachable from the worker."""

    url: str

    def focus(self) -> None:
        """Bring the window to the front."""

    def post_message(self, message: BaseSchemaModel) -> None:
        """Deliver a bridge message to the window."""


class OpenedWindow:
    """Window opened by the worker itself.

    Messages posted to it are kept until a foreground context attaches.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.focused = False
        self.messages: list[BaseSchemaModel] = []

    def focus(self) -> None:
        self.focused = True

    def post_message(self, message: BaseSchemaModel) -> None:
        self.messages.append(message)

    def __repr__(self) -> str:
        return f"<OpenedWindow(url={self.url})>"


class WindowClients:
    """Windows currently known to the worker."""

    def __init__(self, opener: Callable[[str], WindowClient] | None = None) -> None:
        """Initialize the registry.

        Args:
            opener: Creates a window for a URL, defaults to ``OpenedWindow``
        """
        self._opener = opener or OpenedWindow
        self._clients: list[WindowClient] = []
        self._lock = threading.Lock()

    def register(self, client: WindowClient) -> None:
        """Make a window visible to the worker."""
        with self._lock:
            if client not in self._clients:
                self._clients.append(client)

    def unregister(self, client: WindowClient) -> None:
        """Forget a window. Unknown windows are ignored."""
        with self._lock:
            if client in self._clients:
                self._clients.remove(client)

    def match_all(self) -> list[WindowClient]:
        """Return a snapshot of every known window."""
        with self._lock:
            return list(self._clients)

    def open_window(self, url: str) -> WindowClient:
        """Open a new window at ``url`` and register it."""
        client = self._opener(url)
        self.register(client)
        logger.info("window_opened", url=url)
        return client
