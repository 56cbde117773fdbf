"""Translate typed tool requests into archive API requests."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import (
    AssetSearchRequest,
    DatasetSearchRequest,
    PaginatedRequest,
    SchemaRequest,
    SqlRequest,
)
from .types import RemoteRequestSpec

DATASET_SEARCH_PATH = "/api/search/"
ASSET_SEARCH_PATH = "/api/assets/search/"
SQL_EXECUTE_PATH = "/api/sql/execute/"
SQL_VALIDATE_PATH = "/api/sql/validate/"
SCHEMA_PATH = "/api/sql/schema/"
FILTER_OPTIONS_PATH = "/api/filter-options/"

_DATASET_SCALARS = ("name", "description")
_DATASET_ARRAYS = ("species", "approach", "measurement_technique", "anatomy")
_ASSET_SCALARS = ("dandiset_id",)
_ASSET_ARRAYS = ("session_type", "variable_measured", "species")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def build_query_params(
    request: PaginatedRequest,
    scalars: Iterable[str],
    arrays: Iterable[str],
) -> tuple[tuple[str, str], ...]:
    """Flatten a search request into ordered query pairs.

    Scalars come first, then one pair per array element, then pagination.
    Unset (None) fields are skipped.
    """

    params: list[tuple[str, str]] = []
    for key in scalars:
        value = getattr(request, key)
        if value is not None:
            params.append((key, _query_value(value)))
    for key in arrays:
        for item in getattr(request, key) or ():
            params.append((key, _query_value(item)))
    for key in ("limit", "offset"):
        value = getattr(request, key)
        if value is not None:
            params.append((key, _query_value(value)))
    return tuple(params)


def dataset_search(request: DatasetSearchRequest) -> RemoteRequestSpec:
    return RemoteRequestSpec(
        "GET",
        DATASET_SEARCH_PATH,
        build_query_params(request, _DATASET_SCALARS, _DATASET_ARRAYS),
    )


def asset_search(request: AssetSearchRequest) -> RemoteRequestSpec:
    return RemoteRequestSpec(
        "GET",
        ASSET_SEARCH_PATH,
        build_query_params(request, _ASSET_SCALARS, _ASSET_ARRAYS),
    )


def sql_execute(request: SqlRequest) -> RemoteRequestSpec:
    return RemoteRequestSpec("POST", SQL_EXECUTE_PATH, json_body={"sql": request.sql})


def sql_validate(request: SqlRequest) -> RemoteRequestSpec:
    return RemoteRequestSpec("POST", SQL_VALIDATE_PATH, json_body={"sql": request.sql})


def schema(request: SchemaRequest | None = None) -> RemoteRequestSpec:
    table = request.table if request else None
    params = (("table", table),) if table is not None else ()
    return RemoteRequestSpec("GET", SCHEMA_PATH, params)


def table_schema(table: str) -> RemoteRequestSpec:
    return schema(SchemaRequest(table=table))


def filter_options() -> RemoteRequestSpec:
    return RemoteRequestSpec("GET", FILTER_OPTIONS_PATH)
