from dandi_query.core import translation
from dandi_query.core.models import (
    AssetSearchRequest,
    DatasetSearchRequest,
    SchemaRequest,
    SqlRequest,
)


def test_dataset_search_orders_scalars_arrays_then_pagination():
    request = DatasetSearchRequest.model_validate(
        {
            "limit": 10,
            "anatomy": ["hippocampus", "cortex"],
            "species": ["Mus musculus", "Rattus norvegicus"],
            "name": "mouse",
            "offset": 20,
        }
    )

    spec = translation.dataset_search(request)

    assert spec.method == "GET"
    assert spec.path == "/api/search/"
    assert spec.query_params == (
        ("name", "mouse"),
        ("species", "Mus musculus"),
        ("species", "Rattus norvegicus"),
        ("anatomy", "hippocampus"),
        ("anatomy", "cortex"),
        ("limit", "10"),
        ("offset", "20"),
    )
    assert spec.json_body is None


def test_dataset_search_example_query():
    request = DatasetSearchRequest.model_validate({"species": ["Mus musculus"], "limit": 5})

    spec = translation.dataset_search(request)

    assert spec.query_params == (("species", "Mus musculus"), ("limit", "5"))


def test_empty_arrays_and_unset_fields_add_nothing():
    spec = translation.dataset_search(DatasetSearchRequest.model_validate({"approach": []}))

    assert spec.query_params == ()


def test_zero_offset_is_still_sent():
    spec = translation.asset_search(AssetSearchRequest.model_validate({"offset": 0}))

    assert spec.query_params == (("offset", "0"),)


def test_asset_search_params():
    request = AssetSearchRequest.model_validate(
        {
            "species": ["Mus musculus"],
            "variable_measured": ["ElectricalSeries", "LFP"],
            "dandiset_id": 124,
            "session_type": ["behavior"],
        }
    )

    spec = translation.asset_search(request)

    assert spec.path == "/api/assets/search/"
    assert spec.query_params == (
        ("dandiset_id", "124"),
        ("session_type", "behavior"),
        ("variable_measured", "ElectricalSeries"),
        ("variable_measured", "LFP"),
        ("species", "Mus musculus"),
    )


def test_sql_requests_post_json_body():
    request = SqlRequest(sql="SELECT 1")

    assert translation.sql_execute(request).json_body == {"sql": "SELECT 1"}
    assert translation.sql_execute(request).path == "/api/sql/execute/"
    assert translation.sql_validate(request).method == "POST"
    assert translation.sql_validate(request).path == "/api/sql/validate/"


def test_schema_request_with_and_without_table():
    assert translation.schema(SchemaRequest()).query_params == ()
    assert translation.schema(SchemaRequest(table="dandisets_asset")).query_params == (
        ("table", "dandisets_asset"),
    )
    assert translation.table_schema("dandisets_species").path == "/api/sql/schema/"


def test_filter_options_has_no_params():
    spec = translation.filter_options()

    assert (spec.method, spec.path, spec.query_params) == ("GET", "/api/filter-options/", ())


def test_limit_bounds_are_advertised_but_not_enforced():
    schema = DatasetSearchRequest.model_json_schema()
    assert schema["properties"]["limit"]["minimum"] == 1
    assert schema["properties"]["limit"]["maximum"] == 100

    request = DatasetSearchRequest.model_validate({"limit": 500, "offset": -1})
    assert translation.dataset_search(request).query_params == (
        ("limit", "500"),
        ("offset", "-1"),
    )
