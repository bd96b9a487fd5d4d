"""URL routing configuration for the reminders application."""

from django.urls import path

from .views import (
    LivenessCheckView,
    NotificationClickView,
    PushSubscriptionView,
    ReadinessCheckView,
    ScheduledDailyNotificationView,
    ScheduledNotificationDetailView,
    ScheduledNotificationListView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Scheduled notification endpoints
    path(
        "scheduled",
        ScheduledNotificationListView.as_view(),
        name="scheduled-list",
    ),
    path(
        "scheduled/daily",
        ScheduledDailyNotificationView.as_view(),
        name="scheduled-daily",
    ),
    path(
        "scheduled/<str:notification_id>",
        ScheduledNotificationDetailView.as_view(),
        name="scheduled-detail",
    ),
    # Notification interaction
    path(
        "notifications/click",
        NotificationClickView.as_view(),
        name="notification-click",
    ),
    # Web Push subscription endpoints
    path(
        "push-subscriptions",
        PushSubscriptionView.as_view(),
        name="push-subscriptions",
    ),
]
