"""Base pydantic model shared by every reminder schema."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model for wire, request and response schemas.

    Fields are declared in snake_case and exchanged in camelCase, the shape
    the bridge messages, push payloads and the REST API all use.
    ``from_attributes`` lets Django model instances be validated directly.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """JSON-safe dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
