"""DRF exception handler for the reminder API."""

import logging
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from reminders.exceptions.reminder_exceptions import (
    InvalidScheduleParametersError,
    ReminderError,
)
from reminders.logging.context import get_request_id

logger = logging.getLogger(__name__)

# Client-facing messages; exception text may carry store or push internals
_PUBLIC_MESSAGES = {
    status.HTTP_403_FORBIDDEN: "You do not have permission to perform this action.",
    status.HTTP_404_NOT_FOUND: "The requested resource was not found.",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "An internal server error occurred.",
    status.HTTP_503_SERVICE_UNAVAILABLE: (
        "Notification storage is temporarily unavailable."
    ),
}


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Turn any exception raised by a reminder view into a JSON error.

    DRF's own exceptions keep DRF's response. Everything else answers with
    ``{status, message, request_id, timestamp}``; schedule validation errors
    also carry the field-level ``errors``.
    """
    view = context.get("view")
    request = getattr(view, "request", None)
    request_id = get_request_id()

    response = exception_handler(exc, context)
    if response is None:
        status_code = _status_for(exc)
        body = error_body(status_code, _message_for(exc, status_code), request_id)
        if isinstance(exc, InvalidScheduleParametersError):
            body["errors"] = exc.errors
        response = Response(body, status=status_code)

    if request_id:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response.status_code)
    return response


def error_body(
    status_code: int, message: str, request_id: str | None
) -> dict[str, Any]:
    return {
        "status": status_code,
        "message": message,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _status_for(exc: Exception) -> int:
    if isinstance(exc, ReminderError) and exc.status_code:
        return exc.status_code
    if isinstance(exc, Http404):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, PermissionDenied):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _message_for(exc: Exception, status_code: int) -> str:
    if isinstance(exc, InvalidScheduleParametersError):
        return str(exc)
    return _PUBLIC_MESSAGES.get(status_code, _PUBLIC_MESSAGES[500])


def _log_exception(exc: Exception, request: Any, status_code: int) -> None:
    level = logging.WARNING if status_code < 500 else logging.ERROR
    method = getattr(request, "method", "unknown")
    path = getattr(request, "path", "unknown")
    logger.log(
        level,
        "%s %s answered %s: %s: %s",
        method,
        path,
        status_code,
        type(exc).__name__,
        exc,
        exc_info=exc if settings.DEBUG or status_code >= 500 else None,
    )
