"""Typed argument models for each gateway tool.

Numeric bounds and length hints are published in the JSON schema for clients
but are not enforced here; the archive API owns that validation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

LIMIT_HINT = {"minimum": 1, "maximum": 100}
OFFSET_HINT = {"minimum": 0}


class ToolRequest(BaseModel):
    """Base class for tool arguments; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class PaginatedRequest(ToolRequest):
    limit: int | None = Field(
        None,
        description="Maximum number of results (default: 20, max: 100)",
        json_schema_extra=LIMIT_HINT,
    )
    offset: int | None = Field(
        None,
        description="Number of results to skip for pagination",
        json_schema_extra=OFFSET_HINT,
    )


class DatasetSearchRequest(PaginatedRequest):
    """Basic filters for the dataset search endpoint."""

    name: str | None = Field(None, description="Search in dataset names")
    description: str | None = Field(None, description="Search in dataset descriptions")
    species: list[str] | None = Field(
        None, description="Filter by species (e.g., ['Mus musculus', 'Rattus norvegicus'])"
    )
    approach: list[str] | None = Field(
        None, description="Filter by experimental approach (e.g., ['electrophysiology'])"
    )
    measurement_technique: list[str] | None = Field(
        None,
        description="Filter by measurement technique (e.g., ['extracellular electrophysiology'])",
    )
    anatomy: list[str] | None = Field(
        None, description="Filter by anatomical region (e.g., ['hippocampus', 'cortex'])"
    )


class AssetSearchRequest(PaginatedRequest):
    """Basic filters for the asset (file/session) search endpoint."""

    dandiset_id: int | None = Field(None, description="Filter by specific dataset ID")
    session_type: list[str] | None = Field(None, description="Filter by session type")
    variable_measured: list[str] | None = Field(
        None, description="Filter by variables measured (e.g., ['ElectricalSeries'])"
    )
    species: list[str] | None = Field(None, description="Filter by species")


class SqlRequest(ToolRequest):
    sql: str = Field(
        ..., description="SQL query (SELECT statements only, max 10,000 chars)"
    )


class SchemaRequest(ToolRequest):
    table: str | None = Field(
        None, description="Specific table name to get details for (optional)"
    )


class EmptyRequest(ToolRequest):
    """Tools that take no arguments."""
