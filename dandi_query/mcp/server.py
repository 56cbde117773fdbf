"""FastMCP server factory and in-process helpers."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_REQUEST, METHOD_NOT_FOUND, ErrorData

from .. import __version__
from ..core.config import GatewaySettings, get_settings
from ..core.content import StaticContentProvider
from ..core.gateway import ToolGateway
from ..core.logging_config import get_logger
from .health import health_check
from .protocol import StaticResourceMiddleware, install_tool_call_handler
from .resources import register_resources
from .tools import register_tools

logger = get_logger(__name__)

SERVER_NAME = "dandi-query-server"
INSTRUCTIONS = (
    "Query the DANDI Archive. Use search_datasets/search_assets for filtered "
    "search, execute_sql for advanced read-only SQL, and get_schema or "
    "get_full_schema to discover tables. Documentation is available under "
    "dandi://docs/ and examples under dandi://examples/."
)


def create_server(
    settings: GatewaySettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    """Build a FastMCP server wired to a gateway for the given settings.

    ``transport`` replaces the HTTP transport used to reach the archive.
    """

    settings = settings or get_settings()
    gateway = ToolGateway.from_settings(settings, transport=transport)
    content = StaticContentProvider()

    mcp = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS, version=__version__)
    register_tools(mcp, gateway)
    register_resources(mcp, content)
    mcp.add_middleware(StaticResourceMiddleware(content))
    install_tool_call_handler(mcp)
    mcp.custom_route("/health", methods=["GET"])(health_check)

    logger.info(
        "mcp_server_created",
        name=SERVER_NAME,
        api_base=settings.api_base_url,
        timeout=settings.request_timeout,
        tools=[definition.name for definition in gateway.definitions()],
        resources=[descriptor.uri for descriptor in content.list_resources()],
    )
    return mcp


async def list_tools_schema(mcp: FastMCP) -> list[dict[str, Any]]:
    """Return the advertised tool catalog as plain dictionaries."""

    tools = await mcp.get_tools()
    schema: list[dict[str, Any]] = []
    for tool in tools.values():
        if not tool.enabled:
            continue
        mcp_tool = tool.to_mcp_tool()
        schema.append(
            {
                "name": mcp_tool.name,
                "description": mcp_tool.description or "",
                "inputSchema": mcp_tool.inputSchema or {"type": "object", "properties": {}},
            }
        )
    return schema


async def call_tool(mcp: FastMCP, name: str, arguments: Mapping[str, Any] | None = None) -> Any:
    """Execute a registered tool by name and return its JSON payload."""

    logger.debug("mcp_tool_call", name=name, arguments=arguments)
    tools = await mcp.get_tools()
    tool = tools.get(name)
    if tool is None or not tool.enabled:
        raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

    tool_result = await tool.run(dict(arguments or {}))
    return _serialize_tool_result(tool_result)


async def read_resource(mcp: FastMCP, uri: str) -> str:
    """Read a registered resource's text by URI."""

    resources = await mcp.get_resources()
    resource = resources.get(uri)
    if resource is None:
        raise McpError(ErrorData(code=INVALID_REQUEST, message=f"Unknown resource: {uri}"))

    content = await resource.read()
    return content if isinstance(content, str) else content.decode("utf-8")


def _serialize_tool_result(tool_result: ToolResult) -> Any:
    """Convert FastMCP ToolResult into JSON-serialisable payload."""

    if tool_result.structured_content is not None:
        payload = tool_result.structured_content
        if isinstance(payload, dict) and set(payload.keys()) == {"result"}:
            return payload["result"]
        return payload

    serialised_blocks: list[Any] = []
    for block in tool_result.content:
        if hasattr(block, "model_dump"):
            serialised_blocks.append(block.model_dump())
        else:  # pragma: no cover
            serialised_blocks.append(str(block))
    if len(serialised_blocks) == 1:
        return serialised_blocks[0]
    return serialised_blocks
