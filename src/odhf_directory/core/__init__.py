"""Core directory logic: dataset loading, column resolution, search and the tool manifest.

This module is framework-agnostic. It has no dependency on MCP, Starlette,
or any server framework. The HTTP routes and the MCP tools both import
from here.
"""
