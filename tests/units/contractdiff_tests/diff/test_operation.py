from contractdiff.config import Config
from contractdiff.diff.operation import get_operation_diff
from contractdiff.diff.parameters import get_parameters_diff
from contractdiff.diff.request_body import get_request_body_diff
from contractdiff.diff.responses import get_responses_diff
from contractdiff.openapi.models import Operation, Parameter, PathItem
from tests.units.contractdiff_tests.helpers import mk_ctx, mk_document, ref


def mk_operation(**fields) -> Operation:
    fields.setdefault("responses", {"200": {"description": "ok"}})
    return Operation.model_validate(fields)


def mk_params(*defs) -> list[Parameter]:
    return [Parameter.model_validate(d) for d in defs]


def test_identical_operations_have_no_diff():
    op = mk_operation(operationId="x", tags=["a"], summary="s")
    assert get_operation_diff(mk_ctx(), op, op.model_copy(deep=True)) is None


def test_operation_scalar_and_tag_changes():
    op1 = mk_operation(operationId="getPet", tags=["pets"], summary="old", deprecated=False)
    op2 = mk_operation(operationId="fetchPet", tags=["pets", "v2"], summary="new", deprecated=True)

    diff = get_operation_diff(mk_ctx(), op1, op2)

    assert diff.operation_id_diff.to == "fetchPet"
    assert diff.summary_diff.from_ == "old"
    assert diff.deprecated_diff.to is True
    assert diff.tags_diff.added == ["v2"]
    assert diff.parameters_diff is None
    assert diff.responses_diff is None


def test_operation_description_can_be_excluded():
    op1 = mk_operation(description="a")
    op2 = mk_operation(description="b")

    assert get_operation_diff(mk_ctx(), op1, op2).description_diff.to == "b"
    assert get_operation_diff(mk_ctx(config=Config(exclude_description=True)), op1, op2) is None


def test_operation_servers_are_ordered():
    op1 = mk_operation(servers=[{"url": "https://a"}, {"url": "https://b"}])
    op2 = mk_operation(servers=[{"url": "https://b"}, {"url": "https://a"}])

    diff = get_operation_diff(mk_ctx(), op1, op2)

    assert diff.servers_diff.reordered is True


def test_parameters_grouped_by_location():
    params1 = mk_params(
        {"name": "limit", "in": "query", "schema": {"type": "integer"}},
        {"name": "id", "in": "path", "required": True},
        {"name": "X-Trace", "in": "header"},
    )
    params2 = mk_params(
        {"name": "limit", "in": "query", "schema": {"type": "string"}},
        {"name": "id", "in": "path", "required": True},
        {"name": "id", "in": "query"},
    )

    diff = get_parameters_diff(mk_ctx(), params1, params2)

    assert diff.added == {"query": ["id"]}
    assert diff.deleted == {"header": ["X-Trace"]}
    assert list(diff.modified) == ["query"]
    assert diff.modified["query"]["limit"].schema_diff.type_diff.to == "string"


def test_parameter_content_diff():
    params1 = mk_params(
        {"name": "filter", "in": "query", "content": {"application/json": {"schema": {"type": "object"}}}}
    )
    params2 = mk_params(
        {"name": "filter", "in": "query", "content": {"text/plain": {"schema": {"type": "string"}}}}
    )

    diff = get_parameters_diff(mk_ctx(), params1, params2)

    content = diff.modified["query"]["filter"].content_diff
    assert content.added == ["text/plain"]
    assert content.deleted == ["application/json"]


def test_request_body_presence():
    body = mk_operation(requestBody={"content": {"application/json": {}}}).requestBody
    ctx = mk_ctx()

    assert get_request_body_diff(ctx, None, None) is None
    assert get_request_body_diff(ctx, None, body).added is True
    assert get_request_body_diff(ctx, body, None).deleted is True
    assert get_request_body_diff(ctx, body, body) is None


def test_request_body_schema_change():
    base = mk_document(schemas={"Owner": {"required": ["name"]}})
    revision = mk_document(schemas={"Owner": {"required": ["name", "email"]}})
    op1 = mk_operation(requestBody={"content": {"application/json": {"schema": ref("Owner")}}})
    op2 = mk_operation(
        requestBody={"required": True, "content": {"application/json": {"schema": ref("Owner")}}}
    )

    diff = get_request_body_diff(mk_ctx(base, revision), op1.requestBody, op2.requestBody)

    assert diff.required_diff.to is True
    media = diff.content_diff.modified["application/json"]
    assert media.schema_diff.required_diff.added == ["email"]


def test_responses_keyed_by_status_code():
    op1 = mk_operation(
        responses={
            "200": {"description": "ok", "headers": {"X-Rate": {"schema": {"type": "integer"}}}},
            "404": {"description": "missing"},
        }
    )
    op2 = mk_operation(
        responses={
            "200": {"description": "ok", "headers": {"X-Rate": {"schema": {"type": "string"}}}},
            "default": {"description": "error"},
        }
    )

    diff = get_responses_diff(mk_ctx(), op1.responses, op2.responses)

    assert diff.added == ["default"]
    assert diff.deleted == ["404"]
    header = diff.modified["200"].headers_diff.modified["X-Rate"]
    assert header.schema_diff.type_diff.to == "string"


def test_integer_status_codes_are_normalized():
    op = mk_operation(responses={200: {"description": "ok"}})
    assert list(op.responses) == ["200"]


def test_callbacks_are_diffed_as_nested_operations():
    def callback(summary: str) -> dict:
        return {
            "onEvent": {
                "{$request.body#/url}": {
                    "post": {"summary": summary, "responses": {"200": {"description": "ok"}}}
                }
            }
        }

    op1 = mk_operation(callbacks=callback("old"))
    op2 = mk_operation(callbacks=callback("new"))

    diff = get_operation_diff(mk_ctx(), op1, op2)

    nested = diff.callbacks_diff.modified["onEvent"].modified["POST {$request.body#/url}"]
    assert nested.summary_diff.to == "new"


def test_path_level_parameters_are_merged():
    path_item = PathItem.model_validate(
        {
            "parameters": [
                {"name": "id", "in": "path", "required": True},
                {"name": "verbose", "in": "query"},
            ],
            "get": {
                "parameters": [{"name": "verbose", "in": "query", "deprecated": True}],
                "responses": {"200": {"description": "ok"}},
            },
        }
    )

    params = {(p.location, p.name): p for p in path_item.operations()["get"].parameters}

    assert set(params) == {("path", "id"), ("query", "verbose")}
    assert params[("query", "verbose")].deprecated is True


def test_empty_operation_diff_is_empty():
    diff = get_operation_diff(mk_ctx(), mk_operation(), mk_operation())
    assert diff is None


def test_operation_security_change():
    op1 = mk_operation(security=[{"apiKey": []}])
    op2 = mk_operation(security=[{"oauth": ["read"]}])

    diff = get_operation_diff(mk_ctx(), op1, op2)

    assert diff.security_diff.from_ == [{"apiKey": []}]
    assert diff.security_diff.to == [{"oauth": ["read"]}]
    assert diff.to_dict() == {
        "security": {"from": [{"apiKey": []}], "to": [{"oauth": ["read"]}]}
    }
    assert get_operation_diff(mk_ctx(), op1, op1.model_copy(deep=True)) is None
