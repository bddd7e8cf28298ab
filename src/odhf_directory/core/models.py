"""Pydantic data models.

The HTTP routes, the event streams and the MCP tools all speak in terms of
these models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

# One CSV row: column name -> cell value, in header order.
Record = dict[str, Optional[str]]


class PropertySchema(BaseModel):
    """Type of a single tool parameter."""

    type: str = "string"


class ToolInputSchema(BaseModel):
    """JSON-schema style description of a tool's arguments."""

    type: str = "object"
    properties: dict[str, PropertySchema] = Field(default_factory=dict)


class ToolDefinition(BaseModel):
    """An operation advertised to agent frameworks during tool discovery."""

    name: str
    description: str
    input_schema: ToolInputSchema = Field(default_factory=ToolInputSchema)


class SearchMessage(BaseModel):
    """Informational reply returned instead of an empty result list."""

    message: str


class ResolvedColumns(BaseModel):
    """Actual header names backing the two logical search fields."""

    province: str
    facility_type: str
