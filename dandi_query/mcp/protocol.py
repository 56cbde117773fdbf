"""Protocol-level error routing for tool calls and resource reads.

The MCP SDK folds any exception raised while a tool runs into an ``isError``
result, so unknown tool names are rejected before the SDK handler runs.
"""

from __future__ import annotations

from collections.abc import Sequence

from fastmcp import FastMCP
from fastmcp.exceptions import NotFoundError
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from mcp import types
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, ErrorData

from ..core.content import StaticContentProvider
from ..core.envelopes import is_error_envelope
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def install_tool_call_handler(mcp: FastMCP) -> None:
    """Wrap the ``tools/call`` handler of ``mcp``.

    Unknown names become a JSON-RPC METHOD_NOT_FOUND error and failure
    envelopes are flagged with ``isError``.
    """

    handlers = mcp._mcp_server.request_handlers
    call_tool = handlers[types.CallToolRequest]

    async def handler(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        tools = await mcp.get_tools()
        if name not in tools:
            logger.warning("mcp_unknown_tool", name=name)
            raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

        result = await call_tool(request)
        call_result = result.root
        if isinstance(call_result, types.CallToolResult) and is_error_envelope(
            call_result.structuredContent
        ):
            return types.ServerResult(call_result.model_copy(update={"isError": True}))
        return result

    handlers[types.CallToolRequest] = handler


class StaticResourceMiddleware(Middleware):
    """Resolve reads FastMCP has no exact match for through the content provider.

    The provider matches by location, so ``dandi://docs/schema?format=md``
    still finds the schema guide; anything else is an INVALID_REQUEST error.
    """

    def __init__(self, content: StaticContentProvider) -> None:
        self._content = content

    async def on_read_resource(
        self,
        context: MiddlewareContext[types.ReadResourceRequestParams],
        call_next: CallNext[types.ReadResourceRequestParams, Sequence[ReadResourceContents]],
    ) -> Sequence[ReadResourceContents]:
        try:
            return await call_next(context)
        except NotFoundError:
            uri = str(context.message.uri)
            logger.debug("mcp_resource_fallback", uri=uri)
            resource = self._content.read_resource(uri)
            return [ReadResourceContents(content=resource.text, mime_type=resource.mime_type)]
