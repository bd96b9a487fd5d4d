"""Component tests for POST /notifications/click."""

import json

from django.test import Client

from reminders.bridge import get_mailbox
from reminders.enums import MessageType
from reminders.worker import DeliveryWorker, InMemoryNotificationSurface, WindowClients
from tests.auth import auth_header
from tests.base import BaseComponentTest
from tests.fakes import StubWindow

CLICK_URL = "/api/v1/reminders/notifications/click"

CLICKED = {
    "title": "Log your run",
    "body": "Don't miss today",
    "icon": "/icon-192.png",
    "badge": "/icon-192.png",
    "tag": "scheduled-notification-2026-03-10",
    "requireInteraction": False,
    "data": {"type": "scheduled", "id": "a", "url": "/dashboard", "challengeId": 42},
}


class TestNotificationClick(BaseComponentTest):
    """Component tests for handing clicks to the delivery worker."""

    def setUp(self):
        """Set up test fixtures."""
        super().setUp()
        self.client = Client()
        self.worker_mailbox = get_mailbox("reminders:worker")

    def _post(self, body, headers=None):
        return self.client.post(
            CLICK_URL,
            data=json.dumps(body),
            content_type="application/json",
            **(auth_header() if headers is None else headers),
        )

    def test_click_is_queued_for_worker(self):
        """Test that a valid click lands in the worker mailbox."""
        response = self._post(CLICKED)

        self.assertEqual(response.status_code, 202)
        message = self.worker_mailbox.receive(timeout=0)
        self.assertEqual(message.type, MessageType.NOTIFICATION_CLICK)
        self.assertEqual(message.notification.tag, CLICKED["tag"])
        self.assertEqual(message.notification.data["challengeId"], 42)

    def test_worker_focuses_app_window_for_queued_click(self):
        """Test the click reaching an open app window through the worker."""
        app = StubWindow("https://app.example.com/")
        clients = WindowClients()
        clients.register(app)
        surface = InMemoryNotificationSurface()
        worker = DeliveryWorker(
            mailbox=self.worker_mailbox, surface=surface, clients=clients
        )

        self._post(CLICKED)
        worker.handle_message(self.worker_mailbox.receive(timeout=0))

        self.assertEqual(app.focused, 1)
        self.assertEqual(app.messages[0].type, MessageType.NOTIFICATION_CLICKED)
        self.assertEqual(app.messages[0].data["challengeId"], 42)

    def test_worker_opens_dashboard_without_app_window(self):
        """Test that the worker opens the challenge when no window is open."""
        clients = WindowClients()
        worker = DeliveryWorker(mailbox=self.worker_mailbox, clients=clients)

        self._post(CLICKED)
        worker.handle_message(self.worker_mailbox.receive(timeout=0))

        self.assertEqual(
            [client.url for client in clients.match_all()],
            ["https://app.example.com/dashboard?challengeId=42"],
        )

    def test_malformed_notification_is_400(self):
        """Test that a click without a tag is rejected."""
        body = {key: value for key, value in CLICKED.items() if key != "tag"}

        response = self._post(body)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "bad_request")
        self.assertEqual(self.worker_mailbox.pending(), 0)

    def test_missing_scope_is_403(self):
        """Test that a token without a reminder scope is refused."""
        response = self._post(CLICKED, headers=auth_header(scopes=["profile:read"]))

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.worker_mailbox.pending(), 0)

    def test_missing_token_is_401(self):
        """Test that unauthenticated clicks are refused."""
        response = self.client.post(
            CLICK_URL, data=json.dumps(CLICKED), content_type="application/json"
        )

        self.assertEqual(response.status_code, 401)
