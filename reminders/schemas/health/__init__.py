"""Health check schemas."""

from reminders.schemas.health.dependency_health import DependencyHealth
from reminders.schemas.health.liveness_response import LivenessResponse
from reminders.schemas.health.readiness_response import ReadinessResponse

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
