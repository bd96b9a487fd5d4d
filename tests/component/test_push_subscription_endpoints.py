"""Component tests for the push subscription endpoints."""

import json

from django.test import Client

from reminders.models import PushSubscription
from tests.auth import auth_header
from tests.base import BaseComponentTest

URL = "/api/v1/reminders/push-subscriptions"


class TestPushSubscriptionEndpoints(BaseComponentTest):
    """Component tests for POST and DELETE /push-subscriptions."""

    def setUp(self):
        """Set up test fixtures."""
        super().setUp()
        self.client = Client()
        self.subscription = {
            "endpoint": "https://fcm.googleapis.com/fcm/send/abc123",
            "keys": {
                "p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz",
                "auth": "tBHItJI5svbpez7KI4CCXg",
            },
        }

    def _send(self, method, body, headers=None):
        return getattr(self.client, method)(
            URL,
            data=json.dumps(body),
            content_type="application/json",
            **(auth_header() if headers is None else headers),
        )

    def test_subscribe_stores_subscription(self):
        """Test that a browser subscription is saved for the caller."""
        response = self._send("post", self.subscription)

        self.assertEqual(response.status_code, 201)
        stored = PushSubscription.objects.get(id=response.json()["id"])
        self.assertEqual(stored.user_id, "user-1")
        self.assertEqual(stored.endpoint, self.subscription["endpoint"])
        self.assertEqual(stored.auth, "tBHItJI5svbpez7KI4CCXg")

    def test_subscribing_twice_updates_keys(self):
        """Test that re-subscribing the same endpoint does not duplicate it."""
        self._send("post", self.subscription)
        self.subscription["keys"]["auth"] = "rotated-auth-secret"

        self._send("post", self.subscription)

        self.assertEqual(PushSubscription.objects.count(), 1)
        self.assertEqual(PushSubscription.objects.get().auth, "rotated-auth-secret")

    def test_same_endpoint_for_two_users(self):
        """Test that subscriptions are scoped per user."""
        self._send("post", self.subscription)
        self._send("post", self.subscription, headers=auth_header("user-2"))

        self.assertEqual(PushSubscription.objects.count(), 2)

    def test_malformed_subscription_is_400(self):
        """Test that missing keys are rejected."""
        response = self._send("post", {"endpoint": "https://push.example.com/x"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(PushSubscription.objects.count(), 0)

    def test_unsubscribe_removes_subscription(self):
        """Test that DELETE by endpoint removes the caller's subscription."""
        self._send("post", self.subscription)
        self._send("post", self.subscription, headers=auth_header("user-2"))

        response = self._send("delete", {"endpoint": self.subscription["endpoint"]})

        self.assertEqual(response.status_code, 204)
        self.assertEqual(
            list(PushSubscription.objects.values_list("user_id", flat=True)),
            ["user-2"],
        )

    def test_unsubscribe_unknown_endpoint_is_204(self):
        """Test that removing a missing subscription succeeds."""
        response = self._send("delete", {"endpoint": "https://push.example.com/none"})

        self.assertEqual(response.status_code, 204)

    def test_missing_scope_is_403(self):
        """Test that a token without reminder scopes cannot subscribe."""
        response = self._send(
            "post", self.subscription, headers=auth_header(scopes=["profile:read"])
        )

        self.assertEqual(response.status_code, 403)
