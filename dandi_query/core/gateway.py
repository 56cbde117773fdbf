"""Tool gateway: maps MCP tool calls onto archive API requests."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx
from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, ErrorData
from pydantic import ValidationError

from . import translation
from .config import GatewaySettings
from .dandi_client import DandiClient
from .envelopes import error_envelope, search_envelope, wrap_response
from .exceptions import ExternalServiceError, GatewayError, SchemaUnavailableError
from .logging_config import get_logger
from .models import (
    AssetSearchRequest,
    DatasetSearchRequest,
    EmptyRequest,
    SchemaRequest,
    SqlRequest,
    ToolRequest,
)
from .types import ToolInvocation

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Static catalog entry for one tool."""

    name: str
    description: str
    request_model: type[ToolRequest]
    failure_label: str


TOOL_DEFINITIONS: dict[str, ToolDefinition] = {
    definition.name: definition
    for definition in (
        ToolDefinition(
            "search_datasets",
            "Search DANDI datasets using basic filters",
            DatasetSearchRequest,
            "Dataset search failed",
        ),
        ToolDefinition(
            "search_assets",
            "Search DANDI assets (files/sessions) using basic filters",
            AssetSearchRequest,
            "Asset search failed",
        ),
        ToolDefinition(
            "execute_sql",
            "Execute advanced SQL queries against the DANDI database",
            SqlRequest,
            "SQL execution failed",
        ),
        ToolDefinition(
            "validate_sql",
            "Validate SQL query without executing it",
            SqlRequest,
            "SQL validation failed",
        ),
        ToolDefinition(
            "get_schema",
            "Get database schema information",
            SchemaRequest,
            "Schema query failed",
        ),
        ToolDefinition(
            "get_filter_options",
            "Get available filter options for basic search",
            EmptyRequest,
            "Filter options query failed",
        ),
        ToolDefinition(
            "get_full_schema",
            "Get complete database schema with all tables and their columns",
            EmptyRequest,
            "Full schema query failed",
        ),
    )
}


class ToolGateway:
    """Translate tool invocations into archive requests and wrap the replies.

    ``invoke`` only raises for unknown tool names (a protocol error). Every
    other failure is returned as ``{"success": False, "error": ...}``.
    """

    def __init__(self, client: DandiClient) -> None:
        self._client = client
        self._handlers: dict[str, Callable[[Any], Awaitable[dict[str, Any]]]] = {
            "search_datasets": self.search_datasets,
            "search_assets": self.search_assets,
            "execute_sql": self.execute_sql,
            "validate_sql": self.validate_sql,
            "get_schema": self.get_schema,
            "get_filter_options": self.get_filter_options,
            "get_full_schema": self.get_full_schema,
        }

    @classmethod
    def from_settings(
        cls,
        settings: GatewaySettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ToolGateway":
        return cls(DandiClient(settings, transport=transport))

    @staticmethod
    def definitions() -> list[ToolDefinition]:
        return list(TOOL_DEFINITIONS.values())

    async def invoke(
        self, tool_name: str, arguments: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a tool by name and return its response envelope."""

        invocation = ToolInvocation(tool_name, dict(arguments or {}))
        definition = TOOL_DEFINITIONS.get(invocation.tool_name)
        if definition is None:
            raise McpError(
                ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {tool_name}")
            )

        logger.info(
            "dandi_tool_invoked", tool=invocation.tool_name, arguments=invocation.arguments
        )
        try:
            request = definition.request_model.model_validate(invocation.arguments)
            return await self._handlers[invocation.tool_name](request)
        except ValidationError as exc:
            detail = _validation_detail(exc)
        except GatewayError as exc:
            detail = str(exc)
        except Exception as exc:  # noqa: BLE001 - envelope every tool failure
            logger.exception("dandi_tool_crashed", tool=invocation.tool_name)
            detail = str(exc) or "Unknown error"

        message = f"{definition.failure_label}: {detail}"
        logger.error("dandi_tool_failed", tool=invocation.tool_name, error=message)
        return error_envelope(message)

    async def search_datasets(self, request: DatasetSearchRequest) -> dict[str, Any]:
        response = await self._client.send(translation.dataset_search(request))
        return search_envelope(response, "datasets")

    async def search_assets(self, request: AssetSearchRequest) -> dict[str, Any]:
        response = await self._client.send(translation.asset_search(request))
        return search_envelope(response, "assets")

    async def execute_sql(self, request: SqlRequest) -> dict[str, Any]:
        return wrap_response(await self._client.send(translation.sql_execute(request)))

    async def validate_sql(self, request: SqlRequest) -> dict[str, Any]:
        return wrap_response(await self._client.send(translation.sql_validate(request)))

    async def get_schema(self, request: SchemaRequest) -> dict[str, Any]:
        return wrap_response(await self._client.send(translation.schema(request)))

    async def get_filter_options(self, request: EmptyRequest | None = None) -> dict[str, Any]:
        return wrap_response(await self._client.send(translation.filter_options()))

    async def get_full_schema(self, request: EmptyRequest | None = None) -> dict[str, Any]:
        """Fetch the table list, then every table's schema concurrently.

        A failing table is recorded as an error entry instead of failing the
        whole call.
        """

        async with self._client.session() as http:
            listing = await self._client.send(translation.schema(), client=http)
            tables = listing.get("allowed_tables") if isinstance(listing, dict) else None
            if not isinstance(tables, list):
                raise SchemaUnavailableError("No table list found in schema response")

            names = [str(table) for table in tables]
            outcomes = await asyncio.gather(
                *(self._fetch_table_schema(http, name) for name in names)
            )

        full_schema = dict(zip(names, outcomes))
        table_count = len(full_schema)
        logger.info("dandi_full_schema_collected", table_count=table_count)
        return {
            "success": True,
            "schema": full_schema,
            "table_count": table_count,
            "message": f"Retrieved schema for {table_count} tables",
        }

    async def _fetch_table_schema(self, http: httpx.AsyncClient, table: str) -> Any:
        try:
            return await self._client.send(translation.table_schema(table), client=http)
        except ExternalServiceError as exc:
            logger.warning("dandi_table_schema_failed", table=table, error=str(exc))
            return {"error": f"Failed to fetch schema for {table}"}


def _validation_detail(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "arguments"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "invalid arguments"
