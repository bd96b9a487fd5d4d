"""Unit tests for RequestIDMiddleware."""

import unittest
import uuid

from django.http import HttpRequest, HttpResponse

from reminders.constants import REQUEST_ID_HEADER
from reminders.logging.context import get_request_id
from reminders.middleware import RequestIDMiddleware


class TestRequestIDMiddleware(unittest.TestCase):
    """Test cases for RequestIDMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.seen_request_ids = []

        def get_response(request):
            self.seen_request_ids.append(get_request_id())
            return HttpResponse("OK")

        self.middleware = RequestIDMiddleware(get_response)

    def _create_request(self, headers=None):
        """Helper to create a test request."""
        request = HttpRequest()
        request.method = "GET"
        request.path = "/api/v1/reminders/scheduled"
        for key, value in (headers or {}).items():
            request.META[f"HTTP_{key.upper().replace('-', '_')}"] = value
        return request

    def test_generates_request_id_when_not_present(self):
        """Test that middleware generates a UUID when no request ID is provided."""
        request = self._create_request()
        response = self.middleware(request)

        uuid.UUID(request.request_id)
        self.assertEqual(response[REQUEST_ID_HEADER], request.request_id)

    def test_uses_existing_request_id(self):
        """Test that middleware uses existing X-Request-ID header."""
        request = self._create_request(headers={REQUEST_ID_HEADER: "trace-abc"})

        response = self.middleware(request)

        self.assertEqual(request.request_id, "trace-abc")
        self.assertEqual(response[REQUEST_ID_HEADER], "trace-abc")

    def test_request_id_visible_during_request_only(self):
        """Test that logs inside the view see the id and it is cleared afterwards."""
        request = self._create_request(headers={REQUEST_ID_HEADER: "trace-abc"})

        self.middleware(request)

        self.assertEqual(self.seen_request_ids, ["trace-abc"])
        self.assertIsNone(get_request_id())

    def test_request_id_cleared_when_view_raises(self):
        """Test that a failing view does not leak the id to the next request."""

        def failing_view(request):
            raise RuntimeError("view failed")

        middleware = RequestIDMiddleware(failing_view)

        with self.assertRaises(RuntimeError):
            middleware(self._create_request())

        self.assertIsNone(get_request_id())

    def test_malformed_request_id_is_replaced(self):
        """Test that an id unsafe to echo into headers is not reused."""
        request = self._create_request(headers={REQUEST_ID_HEADER: "bad id<script>"})

        response = self.middleware(request)

        self.assertNotEqual(request.request_id, "bad id<script>")
        uuid.UUID(response[REQUEST_ID_HEADER])
