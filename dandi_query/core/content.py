"""Static documentation and example resources."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlsplit

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_REQUEST, ErrorData

from .types import ResourceContent, ResourceDescriptor

MARKDOWN_MIME = "text/markdown"
JSON_MIME = "application/json"

BASIC_SEARCH_GUIDE = """\
# Basic Search Guide

The basic search functionality allows you to filter DANDI datasets and assets using predefined criteria.

## Searching Datasets

Use the `search_datasets` tool to find datasets matching specific criteria:

```
{
  "name": "mouse",
  "species": ["Mus musculus"],
  "approach": ["electrophysiology"],
  "limit": 10
}
```

### Available Filters:
- **name**: Search in dataset names
- **description**: Search in dataset descriptions
- **species**: Filter by species (array)
- **approach**: Filter by experimental approach (array)
- **measurement_technique**: Filter by measurement techniques (array)
- **anatomy**: Filter by anatomical regions (array)
- **limit**: Maximum results (1-100, default 20)
- **offset**: Skip results for pagination

## Searching Assets

Use the `search_assets` tool to find specific files/sessions:

```
{
  "variable_measured": ["ElectricalSeries"],
  "species": ["Mus musculus"],
  "limit": 50
}
```

### Additional Asset Filters:
- **dandiset_id**: Filter by specific dataset ID
- **session_type**: Filter by session type (array)
- **variable_measured**: Filter by measured variables (array)

## Getting Filter Options

Use `get_filter_options` to see all available filter values:

```
{}
```

This returns lists of valid species, approaches, anatomical regions, etc.
"""

SQL_QUERY_GUIDE = """\
# SQL Query Guide

The SQL query functionality provides maximum flexibility for complex data analysis.

## Security Features

Queries are checked by the archive server before they run:

- Only SELECT statements allowed
- Access limited to DANDI tables only
- Query complexity limits enforced
- Automatic result limits (max 1000 rows)
- SQL injection prevention

## Available Tables

### Core Tables:
- `dandisets_dandiset` - Dataset metadata
- `dandisets_asset` - Individual files/sessions
- `dandisets_participant` - Subject information
- `dandisets_assetdandiset` - Asset-dataset relationships
- `dandisets_assetwasattributedto` - Asset-participant relationships

### Reference Tables:
- `dandisets_species` - Species information
- `dandisets_anatomy` - Anatomical regions
- `dandisets_approach` - Experimental approaches
- `dandisets_measurementtechnique` - Measurement methods

## Query Tools

### execute_sql
Execute SQL queries directly:
```
{
  "sql": "SELECT id, name FROM dandisets_dandiset WHERE name ILIKE '%mouse%' LIMIT 10"
}
```

### validate_sql
Check query validity without execution:
```
{
  "sql": "SELECT * FROM dandisets_dandiset"
}
```

### get_schema
Get table structure information:
```
{
  "table": "dandisets_dandiset"
}
```

### get_full_schema
Get every allowed table with its columns in one call:
```
{}
```

## Best Practices

1. Use LIMIT clauses to avoid large result sets
2. Filter early with WHERE clauses
3. Test complex queries with validate_sql first
4. Use JOINs efficiently
5. Leverage indexes on id, name, created_at fields
"""

SCHEMA_GUIDE = """\
# Database Schema Reference

## Core Tables

### dandisets_dandiset
Main dataset table containing metadata about each DANDI dataset.

**Key Fields:**
- `id` (integer) - Unique dataset identifier
- `name` (text) - Dataset name
- `description` (text) - Dataset description
- `created_at` (timestamp) - Creation date
- `modified_at` (timestamp) - Last modification date

### dandisets_asset
Individual files/sessions within datasets.

**Key Fields:**
- `id` (integer) - Unique asset identifier
- `path` (text) - File path within dataset
- `size` (bigint) - File size in bytes
- `variable_measured` (jsonb) - Array of measured variables
- `session_description` (text) - Session description
- `session_start_time` (timestamp) - Session start time

### dandisets_participant
Subject/participant information.

**Key Fields:**
- `id` (integer) - Unique participant identifier
- `participant_id` (text) - Participant identifier within dataset
- `species_id` (integer) - Foreign key to species table
- `sex_id` (integer) - Foreign key to sex table
- `age` (text) - Subject age information

## Relationship Tables

### dandisets_assetdandiset
Links assets to datasets (many-to-many).

**Fields:**
- `asset_id` (integer) - Foreign key to asset
- `dandiset_id` (integer) - Foreign key to dataset

### dandisets_assetwasattributedto
Links assets to participants (many-to-many).

**Fields:**
- `asset_id` (integer) - Foreign key to asset
- `participant_id` (integer) - Foreign key to participant

## Reference Tables

### dandisets_species
Species taxonomy information.

### dandisets_anatomy
Anatomical region ontology.

### dandisets_approach
Experimental approach classifications.

### dandisets_measurementtechnique
Measurement technique classifications.

Use `get_schema` tool with a table name to get detailed column information.
"""

BASIC_SEARCH_EXAMPLES: dict[str, Any] = {
    "examples": [
        {
            "name": "Find mouse electrophysiology datasets",
            "tool": "search_datasets",
            "params": {
                "species": ["Mus musculus"],
                "approach": ["electrophysiology"],
                "limit": 20,
            },
        },
        {
            "name": "Search for hippocampus recordings",
            "tool": "search_datasets",
            "params": {
                "anatomy": ["hippocampus"],
                "measurement_technique": ["extracellular electrophysiology"],
            },
        },
        {
            "name": "Find assets with ElectricalSeries data",
            "tool": "search_assets",
            "params": {"variable_measured": ["ElectricalSeries"], "limit": 50},
        },
        {
            "name": "Get assets from specific dataset",
            "tool": "search_assets",
            "params": {"dandiset_id": 124, "limit": 100},
        },
    ]
}

SQL_QUERY_EXAMPLES: dict[str, Any] = {
    "examples": [
        {
            "name": "Simple dataset search",
            "sql": (
                "SELECT id, name, description FROM dandisets_dandiset "
                "WHERE name ILIKE '%mouse%' ORDER BY name LIMIT 20"
            ),
        },
        {
            "name": "Count datasets by species",
            "sql": (
                "SELECT s.genus_species, COUNT(DISTINCT d.id) as dataset_count "
                "FROM dandisets_dandiset d "
                "JOIN dandisets_assetdandiset ad ON d.id = ad.dandiset_id "
                "JOIN dandisets_asset a ON ad.asset_id = a.id "
                "JOIN dandisets_assetwasattributedto awo ON a.id = awo.asset_id "
                "JOIN dandisets_participant p ON awo.participant_id = p.id "
                "JOIN dandisets_species s ON p.species_id = s.id "
                "GROUP BY s.genus_species ORDER BY dataset_count DESC"
            ),
        },
        {
            "name": "Find datasets with multiple subjects having multiple sessions",
            "sql": (
                "SELECT d.id, d.name, qualified_subjects.subject_count "
                "FROM dandisets_dandiset d JOIN ("
                "SELECT sessions_per_subject.dandiset_id, "
                "COUNT(DISTINCT sessions_per_subject.participant_id) as subject_count FROM ("
                "SELECT ad.dandiset_id, awo.participant_id, COUNT(*) as session_count "
                "FROM dandisets_asset a "
                "JOIN dandisets_assetdandiset ad ON a.id = ad.asset_id "
                "JOIN dandisets_assetwasattributedto awo ON a.id = awo.asset_id "
                "WHERE UPPER(a.variable_measured::text) LIKE UPPER('%ElectricalSeries%') "
                "GROUP BY ad.dandiset_id, awo.participant_id HAVING COUNT(*) >= 3"
                ") sessions_per_subject GROUP BY sessions_per_subject.dandiset_id "
                "HAVING COUNT(DISTINCT sessions_per_subject.participant_id) >= 3"
                ") qualified_subjects ON d.id = qualified_subjects.dandiset_id "
                "ORDER BY qualified_subjects.subject_count DESC"
            ),
        },
        {
            "name": "Analyze variable measurements",
            "sql": (
                "SELECT a.variable_measured, COUNT(*) as asset_count, "
                "COUNT(DISTINCT ad.dandiset_id) as dataset_count "
                "FROM dandisets_asset a "
                "JOIN dandisets_assetdandiset ad ON a.id = ad.asset_id "
                "WHERE a.variable_measured IS NOT NULL "
                "GROUP BY a.variable_measured ORDER BY asset_count DESC LIMIT 20"
            ),
        },
    ]
}

# location -> (descriptor, text)
_RESOURCES: dict[str, tuple[ResourceDescriptor, str]] = {
    "/docs/basic-search": (
        ResourceDescriptor(
            "dandi://docs/basic-search",
            "Basic Search Guide",
            MARKDOWN_MIME,
            "Guide to using the basic search functionality with filters",
        ),
        BASIC_SEARCH_GUIDE,
    ),
    "/docs/sql-queries": (
        ResourceDescriptor(
            "dandi://docs/sql-queries",
            "SQL Query Guide",
            MARKDOWN_MIME,
            "Guide to writing advanced SQL queries with examples",
        ),
        SQL_QUERY_GUIDE,
    ),
    "/docs/schema": (
        ResourceDescriptor(
            "dandi://docs/schema",
            "Database Schema Reference",
            MARKDOWN_MIME,
            "Complete reference of available tables and fields",
        ),
        SCHEMA_GUIDE,
    ),
    "/examples/basic": (
        ResourceDescriptor(
            "dandi://examples/basic",
            "Basic Search Examples",
            JSON_MIME,
            "Collection of example basic search queries",
        ),
        json.dumps(BASIC_SEARCH_EXAMPLES, indent=2),
    ),
    "/examples/sql": (
        ResourceDescriptor(
            "dandi://examples/sql",
            "SQL Query Examples",
            JSON_MIME,
            "Collection of example SQL queries for common use cases",
        ),
        json.dumps(SQL_QUERY_EXAMPLES, indent=2),
    ),
}


def resource_location(uri: str) -> str:
    """Return the authority plus path of a URI, e.g. ``/docs/schema``."""

    parts = urlsplit(uri)
    return "/" + f"{parts.netloc}{parts.path}".strip("/")


class StaticContentProvider:
    """Serves the fixed documentation and example resources."""

    def list_resources(self) -> list[ResourceDescriptor]:
        return [descriptor for descriptor, _ in _RESOURCES.values()]

    def read_resource(self, uri: str) -> ResourceContent:
        entry = _RESOURCES.get(resource_location(uri))
        if entry is None:
            raise McpError(
                ErrorData(code=INVALID_REQUEST, message=f"Unknown resource: {uri}")
            )
        descriptor, text = entry
        return ResourceContent(uri=uri, mime_type=descriptor.mime_type, text=text)
