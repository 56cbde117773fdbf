"""SQL execution and validation MCP tools.

Queries are forwarded verbatim; the archive enforces read-only access and
size limits.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from ...core.gateway import TOOL_DEFINITIONS, ToolGateway


def register(mcp: FastMCP, gateway: ToolGateway) -> None:
    @mcp.tool(name="execute_sql", description=TOOL_DEFINITIONS["execute_sql"].description)
    async def execute_sql(
        sql: Annotated[
            str,
            Field(description="SQL query to execute (SELECT statements only, max 10,000 chars)"),
        ],
    ) -> dict[str, Any]:
        return await gateway.invoke("execute_sql", {"sql": sql})

    @mcp.tool(name="validate_sql", description=TOOL_DEFINITIONS["validate_sql"].description)
    async def validate_sql(
        sql: Annotated[str, Field(description="SQL query to validate")],
    ) -> dict[str, Any]:
        return await gateway.invoke("validate_sql", {"sql": sql})
