"""Static tool manifest advertised during tool discovery."""

from __future__ import annotations

from .models import PropertySchema, ToolDefinition, ToolInputSchema

TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="list_fields",
        description="List dataset columns",
    ),
    ToolDefinition(
        name="search_facilities",
        description="Search facilities by province and/or ODHF facility type",
        input_schema=ToolInputSchema(
            properties={
                "province": PropertySchema(type="string"),
                "facility_type": PropertySchema(type="string"),
            },
        ),
    ),
)


def list_tools() -> list[dict]:
    """Return the manifest as plain JSON-ready dicts. Does not touch the dataset."""
    return [tool.model_dump() for tool in TOOLS]
