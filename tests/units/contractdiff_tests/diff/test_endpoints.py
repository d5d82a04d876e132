import pytest

from contractdiff import get_diff, get_endpoints_diff, parse_document
from contractdiff.config import Config
from contractdiff.diff import DiffResult
from tests.units.contractdiff_tests.helpers import petstore


@pytest.fixture
def base():
    return parse_document(petstore())


def test_identical_documents_have_empty_diff(base):
    result = get_endpoints_diff(base, base)

    assert result.is_empty()
    assert result.to_dict() == {}


def test_identical_copies_have_empty_diff(base):
    # recursive Pet <-> Owner schemas must terminate
    result = get_endpoints_diff(base, parse_document(petstore()))
    assert result.is_empty()


def test_added_endpoint():
    raw = petstore()
    raw["paths"]["/pets"] = {
        "get": {"operationId": "listPets", "responses": {"200": {"description": "ok"}}}
    }

    result = get_endpoints_diff(parse_document(petstore()), parse_document(raw))

    assert result.added_endpoints == ["GET /pets"]
    assert result.deleted_endpoints == []
    assert result.modified_endpoints == {}
    assert result.to_dict() == {"addedEndpoints": ["GET /pets"]}


def test_removed_required_property_is_reported_through_refs():
    raw = petstore()
    raw["components"]["schemas"]["Pet"]["required"] = ["id"]

    result = get_endpoints_diff(parse_document(petstore()), parse_document(raw))

    operation = result.modified_endpoints["GET /pets/{id}"]
    media = operation.responses_diff.modified["200"].content_diff.modified["application/json"]
    assert media.schema_diff.required_diff.deleted == ["name"]
    assert media.schema_diff.required_diff.added == []
    assert "DELETE /pets/{id}" not in result.modified_endpoints


def test_change_reached_only_through_recursion():
    raw = petstore()
    raw["components"]["schemas"]["Owner"]["properties"]["email"] = {"type": "string"}

    result = get_endpoints_diff(parse_document(petstore()), parse_document(raw))

    # GET /pets/{id} -> Pet.owner -> Owner
    media = (
        result.modified_endpoints["GET /pets/{id}"]
        .responses_diff.modified["200"]
        .content_diff.modified["application/json"]
    )
    owner = media.schema_diff.properties_diff.modified["owner"]
    assert owner.properties_diff.added == ["email"]

    body = result.modified_endpoints["POST /owners"].request_body_diff
    schema = body.content_diff.modified["application/json"].schema_diff
    assert schema.properties_diff.added == ["email"]


def test_swapping_inputs_swaps_added_and_deleted():
    raw = petstore()
    raw["paths"]["/pets"] = {"get": {"responses": {"200": {"description": "ok"}}}}
    del raw["paths"]["/owners"]

    doc1, doc2 = parse_document(petstore()), parse_document(raw)
    forward = get_endpoints_diff(doc1, doc2)
    backward = get_endpoints_diff(doc2, doc1)

    assert forward.added_endpoints == backward.deleted_endpoints == ["GET /pets"]
    assert forward.deleted_endpoints == backward.added_endpoints == ["POST /owners"]


def test_endpoint_keys_are_disjoint():
    raw = petstore()
    raw["paths"]["/pets/{id}"]["get"]["summary"] = "changed"
    raw["paths"]["/pets"] = {"get": {"responses": {"200": {"description": "ok"}}}}
    del raw["paths"]["/owners"]

    result = get_endpoints_diff(parse_document(petstore()), parse_document(raw))

    added = set(result.added_endpoints)
    deleted = set(result.deleted_endpoints)
    modified = set(result.modified_endpoints)
    assert not (added & deleted) and not (added & modified) and not (deleted & modified)
    assert modified == {"GET /pets/{id}"}


def test_path_parameter_change_applies_to_every_method():
    raw = petstore()
    raw["paths"]["/pets/{id}"]["parameters"][0]["schema"] = {"type": "integer"}

    result = get_endpoints_diff(parse_document(petstore()), parse_document(raw))

    assert sorted(result.modified_endpoints) == ["DELETE /pets/{id}", "GET /pets/{id}"]
    param = result.modified_endpoints["GET /pets/{id}"].parameters_diff.modified["path"]["id"]
    assert param.schema_diff.type_diff.to == "integer"


def test_path_filter_from_config():
    raw = petstore()
    raw["paths"]["/pets"] = {"get": {"responses": {"200": {"description": "ok"}}}}
    raw["paths"]["/owners/{id}"] = {"get": {"responses": {"200": {"description": "ok"}}}}

    result = get_endpoints_diff(
        parse_document(petstore()), parse_document(raw), Config(path_filter="/owners")
    )

    assert result.added_endpoints == ["GET /owners/{id}"]


def test_get_diff_reports_schemas_and_servers():
    raw = petstore()
    raw["servers"] = [{"url": "https://petstore.example.com/v2"}]
    raw["components"]["schemas"]["Tag"] = {"type": "string"}
    raw["components"]["schemas"]["Pet"]["properties"]["tag"] = {"type": "integer"}

    diff = get_diff(parse_document(petstore()), parse_document(raw))

    assert diff.servers_diff.added == ["https://petstore.example.com/v2"]
    assert diff.servers_diff.deleted == ["https://petstore.example.com/v1"]
    assert diff.schemas_diff.added == ["Tag"]
    assert sorted(diff.schemas_diff.modified) == ["Owner", "Pet"]
    assert diff.schemas_diff.modified["Pet"].properties_diff.modified["tag"].type_diff.to == "integer"
    assert isinstance(diff.endpoints, DiffResult)
    assert "GET /pets/{id}" in diff.endpoints.modified_endpoints


def test_get_diff_of_identical_documents(base):
    diff = get_diff(base, base)

    assert diff.is_empty()
    assert diff.to_dict() == {}
