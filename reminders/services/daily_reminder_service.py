"""Daily reminder for challenges the user has not completed yet.

Challenge data lives outside this service. The list of incomplete challenges
comes from a provider configured as a dotted path in
``REMINDERS["INCOMPLETE_CHALLENGES_PROVIDER"]``; the provider is called as
``provider(user_id, date)`` and returns mappings or objects with ``id`` and
``title``.
"""

import datetime
from collections.abc import Callable, Iterable
from typing import Any

from django.utils import timezone
from django.utils.module_loading import import_string

import structlog

from reminders.conf import get_notification_defaults
from reminders.repositories.push_subscription_repository import (
    PushSubscriptionRepository,
)
from reminders.schemas.notification import (
    DailyReminderResult,
    DailyReminderSweepResult,
    IncompleteChallenge,
    PushPayload,
)
from reminders.services.push_notification_service import (
    PushNotificationService,
    push_notification_service,
)

logger = structlog.get_logger(__name__)

IncompleteChallengesProvider = Callable[[str, datetime.date], Iterable[Any]]


def build_reminder_text(challenges: list[IncompleteChallenge]) -> tuple[str, str]:
    """Return the ``(title, body)`` of the reminder for the given challenges."""
    count = len(challenges)
    if count == 1:
        return (
            "Daily Challenge Reminder",
            f"Don't forget to complete today's challenge: {challenges[0].title}",
        )
    return (
        f"{count} Daily Challenge Reminders",
        f"Don't forget to complete your {count} daily challenges today",
    )


class DailyReminderService:
    """Checks users for incomplete challenges and pushes one reminder each."""

    def __init__(
        self,
        provider: IncompleteChallengesProvider | None = None,
        push_service: PushNotificationService | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            provider: Incomplete challenge lookup, resolved from settings if omitted
            push_service: Push delivery service
        """
        self._provider = provider
        self.push_service = push_service or push_notification_service

    @property
    def provider(self) -> IncompleteChallengesProvider | None:
        """The configured provider, or None when none is set."""
        if self._provider is None:
            path = get_notification_defaults().incomplete_challenges_provider
            if path:
                self._provider = import_string(path)
        return self._provider

    def check_user(
        self, user_id: str, date: datetime.date | None = None
    ) -> DailyReminderResult:
        """Send a reminder to one user if they have incomplete challenges.

        Args:
            user_id: User to check
            date: Day to check, defaults to today in the current time zone

        Returns:
            DailyReminderResult describing what was found and sent
        """
        date = date or timezone.localdate()
        provider = self.provider
        if provider is None:
            logger.warning("incomplete_challenges_provider_missing", user_id=user_id)
            return DailyReminderResult(user_id=user_id, date=date)

        challenges = [
            IncompleteChallenge.model_validate(challenge)
            for challenge in provider(user_id, date)
        ]
        if not challenges:
            logger.debug("no_incomplete_challenges", user_id=user_id, date=str(date))
            return DailyReminderResult(user_id=user_id, date=date)

        title, body = build_reminder_text(challenges)
        data: dict[str, Any] = {"type": "daily-reminder", "date": date.isoformat()}
        if len(challenges) == 1:
            data["challengeId"] = challenges[0].id

        delivery = self.push_service.send_to_user(
            user_id, PushPayload(title=title, body=body, data=data)
        )
        logger.info(
            "daily_reminder_sent",
            user_id=user_id,
            date=str(date),
            incomplete=len(challenges),
            sent=delivery.sent,
        )
        return DailyReminderResult(
            user_id=user_id,
            date=date,
            incomplete_challenges=challenges,
            notified=delivery.sent > 0,
            delivery=delivery,
        )

    def run_for_all_users(
        self, date: datetime.date | None = None
    ) -> DailyReminderSweepResult:
        """Check every user with a push subscription.

        A failure for one user is logged and the sweep continues.
        """
        date = date or timezone.localdate()
        result = DailyReminderSweepResult(date=date)
        if self.provider is None:
            logger.warning("daily_reminder_sweep_skipped", reason="no provider")
            return result

        for user_id in PushSubscriptionRepository.subscribed_user_ids():
            try:
                outcome = self.check_user(user_id, date)
            except Exception:
                logger.exception("daily_reminder_failed", user_id=user_id)
                result.failures += 1
                continue
            result.users_checked += 1
            if outcome.notified:
                result.notifications_sent += 1

        logger.info(
            "daily_reminder_sweep_finished",
            date=str(date),
            users_checked=result.users_checked,
            notifications_sent=result.notifications_sent,
            failures=result.failures,
        )
        return result


# Global daily reminder service instance
daily_reminder_service = DailyReminderService()
