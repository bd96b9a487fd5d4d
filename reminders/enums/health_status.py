"""Outcome of a dependency probe."""

from enum import Enum


class HealthStatus(str, Enum):
    """``unhealthy`` means unreachable; ``error`` means the probe itself broke."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    ERROR = "error"
