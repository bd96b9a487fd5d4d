"""Recurrence settings for scheduled notifications."""

from enum import Enum


class RepeatInterval(str, Enum):
    """How often a scheduled notification fires.

    ``NONE`` records fire once and are removed afterwards. ``DAILY`` and
    ``WEEKLY`` records are advanced to their next future occurrence after
    every fire.
    """

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"

    @property
    def step_days(self) -> int:
        """Number of calendar days between two occurrences (0 for one-shot)."""
        return {"none": 0, "daily": 1, "weekly": 7}[self.value]
