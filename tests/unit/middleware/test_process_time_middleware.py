"""Unit tests for ProcessTimeMiddleware."""

import unittest
from unittest.mock import patch

from django.http import HttpRequest, HttpResponse

from reminders.auth.jwt_authentication import AuthenticatedUser
from reminders.constants import PROCESS_TIME_HEADER, SCOPE_USER
from reminders.middleware import ProcessTimeMiddleware


class TestProcessTimeMiddleware(unittest.TestCase):
    """Test cases for ProcessTimeMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.middleware = ProcessTimeMiddleware(lambda request: HttpResponse("OK"))
        self.request = HttpRequest()
        self.request.method = "GET"
        self.request.path = "/api/v1/reminders/health/live"

    def test_adds_process_time_header(self):
        """Test that the duration is reported in seconds."""
        response = self.middleware(self.request)

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0.0)

    @patch("reminders.middleware.process_time.logger")
    @patch("reminders.middleware.process_time.time.perf_counter")
    def test_slow_request_is_logged(self, mock_perf_counter, mock_logger):
        """Test that requests above the threshold produce a warning."""
        mock_perf_counter.side_effect = [0.0, 5.0]

        response = self.middleware(self.request)

        self.assertEqual(response[PROCESS_TIME_HEADER], "5.000000")
        mock_logger.warning.assert_called_once()
        self.assertEqual(mock_logger.warning.call_args.args[0], "slow_request")
        self.assertIsNone(mock_logger.warning.call_args.kwargs["user_id"])

    @patch("reminders.middleware.process_time.logger")
    @patch("reminders.middleware.process_time.time.perf_counter")
    def test_slow_request_names_user(self, mock_perf_counter, mock_logger):
        """Test that the token subject is attached to the slow request warning."""
        mock_perf_counter.side_effect = [0.0, 2.5]
        self.request.user = AuthenticatedUser("user-7", None, [SCOPE_USER])

        self.middleware(self.request)

        self.assertEqual(mock_logger.warning.call_args.kwargs["user_id"], "user-7")

    @patch("reminders.middleware.process_time.logger")
    def test_fast_request_is_not_logged(self, mock_logger):
        """Test that normal requests are quiet."""
        self.middleware(self.request)

        mock_logger.warning.assert_not_called()
