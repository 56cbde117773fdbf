"""Schema discovery and filter option MCP tools."""

from __future__ import annotations

from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from ...core.gateway import TOOL_DEFINITIONS, ToolGateway
from .utils import present


def register(mcp: FastMCP, gateway: ToolGateway) -> None:
    @mcp.tool(name="get_schema", description=TOOL_DEFINITIONS["get_schema"].description)
    async def get_schema(
        table: Annotated[
            str | None,
            Field(description="Specific table name to get details for (optional)"),
        ] = None,
    ) -> dict[str, Any]:
        return await gateway.invoke("get_schema", present(table=table))

    @mcp.tool(
        name="get_filter_options",
        description=TOOL_DEFINITIONS["get_filter_options"].description,
    )
    async def get_filter_options() -> dict[str, Any]:
        return await gateway.invoke("get_filter_options")

    @mcp.tool(
        name="get_full_schema",
        description=TOOL_DEFINITIONS["get_full_schema"].description,
    )
    async def get_full_schema() -> dict[str, Any]:
        """Fetches every allowed table's schema; failing tables carry an error entry."""

        return await gateway.invoke("get_full_schema")
