"""Dataset and asset search MCP tools."""

from __future__ import annotations

from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from ...core.gateway import TOOL_DEFINITIONS, ToolGateway
from ...core.models import LIMIT_HINT, OFFSET_HINT
from .utils import present

Limit = Annotated[
    int | None,
    Field(
        description="Maximum number of results (default: 20, max: 100)",
        json_schema_extra=LIMIT_HINT,
    ),
]
Offset = Annotated[
    int | None,
    Field(
        description="Number of results to skip for pagination",
        json_schema_extra=OFFSET_HINT,
    ),
]
Terms = list[str] | None


def register(mcp: FastMCP, gateway: ToolGateway) -> None:
    @mcp.tool(
        name="search_datasets",
        description=TOOL_DEFINITIONS["search_datasets"].description,
    )
    async def search_datasets(
        name: Annotated[str | None, Field(description="Search in dataset names")] = None,
        description: Annotated[
            str | None, Field(description="Search in dataset descriptions")
        ] = None,
        species: Annotated[
            Terms,
            Field(description="Filter by species (e.g., ['Mus musculus', 'Rattus norvegicus'])"),
        ] = None,
        approach: Annotated[
            Terms,
            Field(description="Filter by experimental approach (e.g., ['electrophysiology'])"),
        ] = None,
        measurement_technique: Annotated[
            Terms,
            Field(
                description=(
                    "Filter by measurement technique "
                    "(e.g., ['extracellular electrophysiology'])"
                )
            ),
        ] = None,
        anatomy: Annotated[
            Terms,
            Field(description="Filter by anatomical region (e.g., ['hippocampus', 'cortex'])"),
        ] = None,
        limit: Limit = None,
        offset: Offset = None,
    ) -> dict[str, Any]:
        return await gateway.invoke(
            "search_datasets",
            present(
                name=name,
                description=description,
                species=species,
                approach=approach,
                measurement_technique=measurement_technique,
                anatomy=anatomy,
                limit=limit,
                offset=offset,
            ),
        )

    @mcp.tool(
        name="search_assets",
        description=TOOL_DEFINITIONS["search_assets"].description,
    )
    async def search_assets(
        dandiset_id: Annotated[
            int | None, Field(description="Filter by specific dataset ID")
        ] = None,
        session_type: Annotated[Terms, Field(description="Filter by session type")] = None,
        variable_measured: Annotated[
            Terms,
            Field(description="Filter by variables measured (e.g., ['ElectricalSeries'])"),
        ] = None,
        species: Annotated[Terms, Field(description="Filter by species")] = None,
        limit: Limit = None,
        offset: Offset = None,
    ) -> dict[str, Any]:
        return await gateway.invoke(
            "search_assets",
            present(
                dandiset_id=dandiset_id,
                session_type=session_type,
                variable_measured=variable_measured,
                species=species,
                limit=limit,
                offset=offset,
            ),
        )
