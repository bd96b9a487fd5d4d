"""Readiness response schema."""

from pydantic import Field

from reminders.schemas.base_schema_model import BaseSchemaModel
from reminders.schemas.health.dependency_health import DependencyHealth


class ReadinessResponse(BaseSchemaModel):
    """Answer of the readiness probe.

    ``ready`` stays true while dependencies fail; ``status`` is ``degraded``
    then and ``dependencies`` says which probe failed.
    """

    ready: bool
    status: str = Field(..., description="'ready' or 'degraded'")
    degraded: bool
    dependencies: dict[str, DependencyHealth]
