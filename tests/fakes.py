"""Deterministic stand-ins for time, timers and windows."""

from datetime import datetime
from typing import Any

from reminders.enums import RepeatInterval
from reminders.schemas.notification import ScheduledNotificationRecord


def epoch_ms(value: datetime) -> int:
    """Epoch milliseconds of an aware datetime."""
    return int(value.timestamp() * 1000)


DAY_MS = 24 * 60 * 60 * 1000
HOUR_MS = 60 * 60 * 1000


class FakeClock:
    """Callable clock returning a settable instant in epoch milliseconds."""

    def __init__(self, now_ms: int) -> None:
        self.now = now_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms

    def set(self, value: datetime) -> None:
        self.now = epoch_ms(value)


class FakeTimer:
    """``threading.Timer`` look-alike fired by hand."""

    def __init__(self, interval, function, args=None, kwargs=None) -> None:
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Run the callback as the real timer thread would."""
        self.function(*self.args, **self.kwargs)

    @property
    def notification_id(self) -> str:
        return self.args[0]


class FakeTimerFactory:
    """Creates ``FakeTimer``s and remembers them."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function, args=None, kwargs=None) -> FakeTimer:
        timer = FakeTimer(interval, function, args=args, kwargs=kwargs)
        self.timers.append(timer)
        return timer

    def active(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.started and not t.cancelled]

    def active_for(self, notification_id: str) -> FakeTimer:
        matches = [t for t in self.active() if t.notification_id == notification_id]
        assert len(matches) == 1, f"expected one armed timer, got {len(matches)}"
        return matches[0]


class StubWindow:
    """Window client recording focus calls and messages."""

    def __init__(self, url: str) -> None:
        self.url = url
        self.focused = 0
        self.messages: list[Any] = []

    def focus(self) -> None:
        self.focused += 1

    def post_message(self, message) -> None:
        self.messages.append(message)


def make_record(**overrides) -> ScheduledNotificationRecord:
    """Build a valid record, daily by default."""
    fields = {
        "id": "notification-1773129600000-abc123xyz",
        "title": "Log your run",
        "body": "Don't miss today",
        "icon": "/icon-192.png",
        "badge": "/icon-192.png",
        "tag": "scheduled-notification",
        "scheduled_time": 0,
        "repeat": RepeatInterval.DAILY,
        "enabled": True,
        "user_id": "user-1",
        "data": {},
    }
    fields.update(overrides)
    return ScheduledNotificationRecord(**fields)
