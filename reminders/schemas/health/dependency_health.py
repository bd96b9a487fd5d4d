"""Dependency health schema."""

from typing import Any

from pydantic import Field

from reminders.enums import HealthStatus
from reminders.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Result of probing one dependency of the reminder service."""

    healthy: bool
    status: HealthStatus
    message: str
    response_time_ms: float | None = Field(None, description="Probe duration")
    details: dict[str, Any] | None = Field(
        None, description="Probe specific figures, e.g. scheduled record counts"
    )
