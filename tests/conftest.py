"""Pytest configuration and shared fixtures."""

import os
from datetime import UTC, datetime

import django

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "reminder_service.settings_test")
django.setup()

from reminders.bridge.mailbox import LocalMailbox, reset_local_mailboxes  # noqa: E402
from reminders.services import health_service  # noqa: E402
from reminders.worker import InMemoryNotificationSurface, WindowClients  # noqa: E402
from tests.fakes import FakeClock, FakeTimerFactory, epoch_ms  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Give every test fresh local mailboxes and health results."""
    reset_local_mailboxes()
    health_service.clear_cache()
    yield
    reset_local_mailboxes()


@pytest.fixture
def clock():
    """Clock fixed at 2026-03-10 08:00 UTC (a Tuesday)."""
    return FakeClock(epoch_ms(datetime(2026, 3, 10, 8, 0, tzinfo=UTC)))


@pytest.fixture
def timers():
    """Timer factory whose timers only fire when told to."""
    return FakeTimerFactory()


@pytest.fixture
def surface():
    """In-memory notification surface with permission granted."""
    return InMemoryNotificationSurface()


@pytest.fixture
def clients():
    """Empty window client registry."""
    return WindowClients()


@pytest.fixture
def worker_mailbox():
    """Local mailbox standing in for the worker's channel."""
    return LocalMailbox("test-worker")
