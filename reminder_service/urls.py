"""URL configuration for the reminder service project."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/reminders/", include("reminders.urls")),
]
