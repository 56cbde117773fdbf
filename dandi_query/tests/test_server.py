import json

import httpx
import pytest
from fastmcp import Client
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_REQUEST, METHOD_NOT_FOUND, TextResourceContents

from dandi_query.mcp.health import health_check
from dandi_query.mcp.server import call_tool, create_server, list_tools_schema, read_resource

from .fakes import FakeArchive

TOOL_NAMES = {
    "search_datasets",
    "search_assets",
    "execute_sql",
    "validate_sql",
    "get_schema",
    "get_filter_options",
    "get_full_schema",
}


def _server(settings, handler=None):
    archive = FakeArchive(handler or (lambda request: httpx.Response(200, json={})))
    return create_server(settings, transport=archive.transport), archive


@pytest.mark.asyncio
async def test_catalog_lists_all_tools(settings):
    server, _ = _server(settings)

    schema = await list_tools_schema(server)

    assert {entry["name"] for entry in schema} == TOOL_NAMES
    by_name = {entry["name"]: entry for entry in schema}
    assert by_name["execute_sql"]["inputSchema"]["required"] == ["sql"]
    assert "species" in by_name["search_datasets"]["inputSchema"]["properties"]
    assert by_name["get_filter_options"]["description"] == (
        "Get available filter options for basic search"
    )


@pytest.mark.asyncio
async def test_client_calls_search_tool(settings):
    server, archive = _server(
        settings, lambda request: httpx.Response(200, json={"results": [{"id": 7}], "count": 1})
    )

    async with Client(server) as client:
        result = await client.call_tool(
            "search_datasets", {"species": ["Mus musculus"], "limit": 5}
        )

    assert result.structured_content == {
        "success": True,
        "results": [{"id": 7}],
        "total": 1,
        "message": "Found 1 datasets",
    }
    assert archive.requests[0].url.params.multi_items() == [
        ("species", "Mus musculus"),
        ("limit", "5"),
    ]


@pytest.mark.asyncio
async def test_client_reads_resources(settings):
    server, _ = _server(settings)

    async with Client(server) as client:
        resources = await client.list_resources()
        contents = await client.read_resource("dandi://docs/schema")

    assert len(resources) == 5
    assert contents[0].text.startswith("# Database Schema Reference")


@pytest.mark.asyncio
async def test_call_tool_helper_returns_envelope(settings):
    server, archive = _server(
        settings, lambda request: httpx.Response(400, json={"message": "syntax error"})
    )

    payload = await call_tool(server, "validate_sql", {"sql": "SELEC"})

    assert payload == {"success": False, "error": "SQL validation failed: syntax error"}
    assert archive.requests[0].url.path == "/api/sql/validate/"


@pytest.mark.asyncio
async def test_call_tool_helper_unknown_tool(settings):
    server, _ = _server(settings)

    with pytest.raises(McpError) as exc_info:
        await call_tool(server, "search_everything", {})

    assert exc_info.value.error.code == METHOD_NOT_FOUND


@pytest.mark.asyncio
async def test_read_resource_helper(settings):
    server, _ = _server(settings)

    text = await read_resource(server, "dandi://examples/sql")
    assert json.loads(text)["examples"]

    with pytest.raises(McpError) as exc_info:
        await read_resource(server, "dandi://examples/unknown")
    assert exc_info.value.error.code == INVALID_REQUEST


@pytest.mark.asyncio
async def test_health_check():
    response = await health_check(None)

    payload = json.loads(response.body)
    assert response.status_code == 200
    assert payload["status"] == "ok"


@pytest.mark.asyncio
async def test_client_unknown_tool_is_method_not_found(settings):
    server, archive = _server(settings)

    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.call_tool_mcp("drop_everything", {})

    assert exc_info.value.error.code == METHOD_NOT_FOUND
    assert "drop_everything" in exc_info.value.error.message
    assert archive.requests == []


@pytest.mark.asyncio
async def test_client_unknown_resource_is_invalid_request(settings):
    server, _ = _server(settings)

    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.read_resource_mcp("dandi://examples/unknown")

    assert exc_info.value.error.code == INVALID_REQUEST


@pytest.mark.asyncio
async def test_client_resource_read_matches_by_location(settings):
    server, _ = _server(settings)

    async with Client(server) as client:
        result = await client.read_resource_mcp("dandi://docs/schema?format=md")

    (content,) = result.contents
    assert isinstance(content, TextResourceContents)
    assert content.mimeType == "text/markdown"
    assert content.text.startswith("# Database Schema Reference")


@pytest.mark.asyncio
async def test_client_failure_envelope_sets_is_error(settings):
    server, _ = _server(settings, lambda request: httpx.Response(400, json={"error": "bad"}))

    async with Client(server) as client:
        result = await client.call_tool_mcp("execute_sql", {"sql": "x"})

    assert result.isError is True
    assert result.structuredContent == {"success": False, "error": "SQL execution failed: bad"}


@pytest.mark.asyncio
async def test_client_success_result_is_not_error(settings):
    server, _ = _server(settings, lambda request: httpx.Response(200, json={"valid": True}))

    async with Client(server) as client:
        result = await client.call_tool_mcp("validate_sql", {"sql": "SELECT 1"})

    assert result.isError is False
    assert result.structuredContent == {"valid": True}
