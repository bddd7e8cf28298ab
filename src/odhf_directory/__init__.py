"""ODHF Directory MCP Server.

Search the Open Database of Healthcare Facilities by province and facility type,
over plain HTTP, MCP tools, or SSE tool discovery.
"""

__version__ = "0.1.0"

from .core.manifest import list_tools


def get_tools_manifest() -> dict:
    """Return the discovery manifest as sent in the list_tools event."""
    return {"tools": list_tools()}
