"""Liveness response schema."""

from reminders.schemas.base_schema_model import BaseSchemaModel


class LivenessResponse(BaseSchemaModel):
    """Answer of the liveness probe; the process is up if it can answer."""

    status: str
