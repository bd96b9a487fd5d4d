"""API views for the reminders application."""

from django.db import DatabaseError

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from reminders.auth import JWTAuthentication
from reminders.constants import SCOPE_ADMIN, SCOPE_USER
from reminders.exceptions import StorageUnavailableError
from reminders.repositories import PushSubscriptionRepository
from reminders.schemas import (
    DisplayedNotification,
    NotificationClickMessage,
    PushSubscriptionDeleteRequest,
    PushSubscriptionRequest,
    ScheduleDailyRequest,
    ScheduleOptions,
    ScheduleRequest,
)
from reminders.services import health_service, notification_scheduler

logger = structlog.get_logger(__name__)

_OPTION_FIELDS = {"icon", "badge", "tag", "repeat", "data"}


def _forbidden_unless_scoped(request) -> Response | None:
    """Return a 403 response unless the caller has a reminder scope."""
    if request.user.has_any_scope(SCOPE_USER, SCOPE_ADMIN):
        return None
    logger.warning(
        "missing_reminder_scope",
        user_id=request.user.user_id,
        scopes=request.user.scopes,
    )
    return Response(
        {
            "error": "forbidden",
            "message": "You do not have permission to perform this action",
            "detail": f"Requires {SCOPE_USER} or {SCOPE_ADMIN} scope",
        },
        status=status.HTTP_403_FORBIDDEN,
    )


def _bad_request(e: ValidationError) -> Response:
    errors = e.errors(include_url=False, include_context=False)
    logger.warning("invalid_request_body", validation_errors=errors)
    return Response(
        {
            "error": "bad_request",
            "message": "Invalid request parameters",
            "errors": errors,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _options_for(request, schedule_request) -> ScheduleOptions:
    return ScheduleOptions(
        **schedule_request.model_dump(include=_OPTION_FIELDS),
        user_id=request.user.user_id,
    )


class LivenessCheckView(APIView):
    """Liveness probe endpoint.

    Returns 200 if the service is alive. Exempt from authentication.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint.

    Returns 200 with a degraded status when a dependency is down, so the
    service stays deployable while it reconnects. Exempt from authentication.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(), status=status.HTTP_200_OK)


class ScheduledNotificationListView(APIView):
    """List and create scheduled notifications of the caller.

    Admins see every record. Requires reminder:user or reminder:admin scope.
    """

    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Handle GET request listing scheduled notifications.

        Returns:
            200 OK with ``{"notifications": [...]}``
            403 Forbidden if the caller lacks the required scope
            503 Service Unavailable if the store cannot be read
        """
        forbidden = _forbidden_unless_scoped(request)
        if forbidden:
            return forbidden

        records = notification_scheduler.get_all()
        if not request.user.has_scope(SCOPE_ADMIN):
            records = [r for r in records if r.user_id == request.user.user_id]

        return Response(
            {"notifications": [record.to_wire() for record in records]},
            status=status.HTTP_200_OK,
        )

    def post(self, request):
        """Handle POST request scheduling a notification at an instant.

        Returns:
            201 Created with ``{"id": ...}``
            400 Bad Request if validation fails
            403 Forbidden if the caller lacks the required scope
            503 Service Unavailable if the store cannot be written
        """
        forbidden = _forbidden_unless_scoped(request)
        if forbidden:
            return forbidden

        try:
            schedule_request = ScheduleRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        notification_id = notification_scheduler.schedule(
            schedule_request.title,
            schedule_request.body,
            schedule_request.scheduled_time,
            _options_for(request, schedule_request),
        )
        logger.info(
            "scheduled_notification_created",
            notification_id=notification_id,
            user_id=request.user.user_id,
        )
        return Response({"id": notification_id}, status=status.HTTP_201_CREATED)


class ScheduledDailyNotificationView(APIView):
    """Create a daily reminder at a local wall-clock time.

    Requires reminder:user or reminder:admin scope.
    """

    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request scheduling a daily notification.

        Returns:
            201 Created with ``{"id": ...}``
            400 Bad Request if hour or minute is out of range
        """
        forbidden = _forbidden_unless_scoped(request)
        if forbidden:
            return forbidden

        try:
            daily_request = ScheduleDailyRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        notification_id = notification_scheduler.schedule_daily(
            daily_request.title,
            daily_request.body,
            daily_request.hour,
            daily_request.minute,
            _options_for(request, daily_request),
        )
        logger.info(
            "daily_notification_created",
            notification_id=notification_id,
            user_id=request.user.user_id,
        )
        return Response({"id": notification_id}, status=status.HTTP_201_CREATED)


class ScheduledNotificationDetailView(APIView):
    """Remove one scheduled notification.

    Removing an unknown id succeeds. Requires reminder:user or reminder:admin
    scope; only admins may remove another user's record.
    """

    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def delete(self, request, notification_id):
        """Handle DELETE request for a scheduled notification.

        Returns:
            204 No Content
            403 Forbidden if the record belongs to someone else
        """
        forbidden = _forbidden_unless_scoped(request)
        if forbidden:
            return forbidden

        record = notification_scheduler.store.get(notification_id)
        if (
            record is not None
            and record.user_id != request.user.user_id
            and not request.user.has_scope(SCOPE_ADMIN)
        ):
            logger.warning(
                "foreign_notification_delete_denied",
                notification_id=notification_id,
                user_id=request.user.user_id,
            )
            return Response(
                {
                    "error": "forbidden",
                    "message": "You do not have permission to perform this action",
                },
                status=status.HTTP_403_FORBIDDEN,
            )

        notification_scheduler.remove(notification_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PushSubscriptionView(APIView):
    """Register or remove a Web Push subscription of the caller."""

    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request registering a browser subscription.

        Returns:
            201 Created with ``{"id": ...}``
            400 Bad Request if the subscription is malformed
        """
        forbidden = _forbidden_unless_scoped(request)
        if forbidden:
            return forbidden

        try:
            subscription_request = PushSubscriptionRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        try:
            subscription = PushSubscriptionRepository.upsert(
                user_id=request.user.user_id,
                endpoint=subscription_request.endpoint,
                p256dh=subscription_request.keys.p256dh,
                auth=subscription_request.keys.auth,
            )
        except DatabaseError as e:
            raise StorageUnavailableError(operation="subscribe", reason=str(e)) from e

        logger.info("push_subscription_saved", user_id=request.user.user_id)
        return Response({"id": str(subscription.id)}, status=status.HTTP_201_CREATED)

    def delete(self, request):
        """Handle DELETE request removing a browser subscription.

        Returns:
            204 No Content, also when nothing matched
            400 Bad Request if no endpoint was given
        """
        forbidden = _forbidden_unless_scoped(request)
        if forbidden:
            return forbidden

        try:
            delete_request = PushSubscriptionDeleteRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        deleted = PushSubscriptionRepository.delete(
            user_id=request.user.user_id, endpoint=delete_request.endpoint
        )
        logger.info(
            "push_subscription_deleted",
            user_id=request.user.user_id,
            deleted=deleted,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationClickView(APIView):
    """Hand a notification click from the browser to the delivery worker.

    The body is the clicked notification as it was displayed. The worker
    closes it and focuses or opens the application window. Requires
    reminder:user or reminder:admin scope.
    """

    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request forwarding a click.

        Returns:
            202 Accepted once the click is queued for the worker
            400 Bad Request if the notification is malformed
        """
        forbidden = _forbidden_unless_scoped(request)
        if forbidden:
            return forbidden

        try:
            notification = DisplayedNotification(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        notification_scheduler.mailbox.post(
            NotificationClickMessage(notification=notification)
        )
        logger.info(
            "notification_click_forwarded",
            tag=notification.tag,
            user_id=request.user.user_id,
        )
        return Response(status=status.HTTP_202_ACCEPTED)
