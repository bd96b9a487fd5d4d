"""Custom exceptions for reminder scheduling and delivery."""

from typing import Any


class ReminderError(Exception):
    """Base exception for the reminder subsystem."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize reminder error.

        Args:
            message: Error message
            status_code: HTTP status code the API should answer with
        """
        self.status_code = status_code
        super().__init__(message)


class StorageUnavailableError(ReminderError):
    """The notification store could not be opened or written (503)."""

    def __init__(self, operation: str, reason: str | None = None):
        """Initialize storage unavailable error.

        Args:
            operation: Store operation that failed (save, get_all, delete)
            reason: Underlying error description
        """
        self.operation = operation
        self.reason = reason
        message = f"Notification storage unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, status_code=503)


class InvalidScheduleParametersError(ReminderError):
    """Schedule request rejected before anything was persisted (400)."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        """Initialize invalid schedule parameters error.

        Args:
            message: Error message
            errors: Field-level validation errors
        """
        self.errors = errors or []
        super().__init__(message=message, status_code=400)


class PushConfigurationError(ReminderError):
    """Web Push cannot be used because VAPID keys are not configured."""

    def __init__(self, message: str = "VAPID keys not configured"):
        """Initialize push configuration error.

        Args:
            message: Error message
        """
        super().__init__(message=message, status_code=500)


class PushDeliveryError(ReminderError):
    """A push message could not be delivered to a subscription."""

    def __init__(self, endpoint: str, reason: str):
        """Initialize push delivery error.

        Args:
            endpoint: Push service endpoint of the subscription
            reason: Failure description
        """
        self.endpoint = endpoint
        super().__init__(message=f"Failed to send notification: {reason}")


class PushSubscriptionGoneError(PushDeliveryError):
    """The push service reported the subscription as expired (404/410)."""

    def __init__(self, endpoint: str):
        """Initialize subscription gone error.

        Args:
            endpoint: Push service endpoint of the subscription
        """
        super().__init__(endpoint=endpoint, reason="Subscription expired")
