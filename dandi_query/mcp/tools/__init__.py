"""FastMCP tool registrations grouped by domain."""

from fastmcp import FastMCP

from ...core.gateway import ToolGateway
from . import schema, search, sql

__all__ = ["register_tools", "schema", "search", "sql"]


def register_tools(mcp: FastMCP, gateway: ToolGateway) -> None:
    """Attach every gateway tool to the server."""

    search.register(mcp, gateway)
    sql.register(mcp, gateway)
    schema.register(mcp, gateway)
