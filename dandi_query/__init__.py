"""MCP server exposing DANDI archive search and SQL tools."""

__version__ = "0.1.0"
