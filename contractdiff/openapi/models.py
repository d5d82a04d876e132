from __future__ import annotations

from typing import Any, Final, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contractdiff.errors import DocumentError
from contractdiff.utils import values_equal

HTTP_METHODS: Final[tuple[str, ...]] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)

SCHEMA_REF_PREFIX: Final[str] = "#/components/schemas/"

UNRESOLVED_SCHEMA_REF: Final[str] = "schema reference {ref} cannot be resolved"
CIRCULAR_SCHEMA_ALIAS: Final[str] = "schema reference {ref} is an alias of itself"


def _openapi_config(**kwargs: Any) -> ConfigDict:
    return ConfigDict(extra="allow", validate_by_name=True, **kwargs)


def endpoint_key(method: str, path: str) -> str:
    return f"{method.upper()} {path}"


def parameter_key(parameter: "Parameter") -> tuple[str, str]:
    return parameter.location, parameter.name


class Schema(BaseModel):
    """
    The Schema Object. Either a reference (`$ref` is set) or an inline definition.
    """

    ref: Optional[str] = Field(default=None, alias="$ref")

    type: Optional[Union[str, list[str]]] = None
    title: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    enum: Optional[list[Any]] = None
    default: Any = None
    example: Any = None

    nullable: bool = False
    readOnly: bool = False  # noqa: N815
    writeOnly: bool = False  # noqa: N815
    deprecated: bool = False

    allOf: list[Schema] = Field(default_factory=list)  # noqa: N815
    oneOf: list[Schema] = Field(default_factory=list)  # noqa: N815
    anyOf: list[Schema] = Field(default_factory=list)  # noqa: N815
    not_: Optional[Schema] = Field(default=None, alias="not")

    items: Optional[Schema] = None
    uniqueItems: bool = False  # noqa: N815
    minItems: Optional[int] = None  # noqa: N815
    maxItems: Optional[int] = None  # noqa: N815

    properties: dict[str, Schema] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    additionalProperties: Optional[Union[bool, Schema]] = None  # noqa: N815
    minProperties: Optional[int] = None  # noqa: N815
    maxProperties: Optional[int] = None  # noqa: N815

    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusiveMinimum: Optional[Union[bool, float]] = None  # noqa: N815
    exclusiveMaximum: Optional[Union[bool, float]] = None  # noqa: N815
    multipleOf: Optional[float] = None  # noqa: N815

    minLength: Optional[int] = None  # noqa: N815
    maxLength: Optional[int] = None  # noqa: N815
    pattern: Optional[str] = None

    model_config = _openapi_config(
        json_schema_extra={
            "examples": [
                {"$ref": "#/components/schemas/Pet"},
                {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "name": {"type": "string"},
                        "tags": {"type": "array", "items": {"type": "string"}},
                    },
                },
            ]
        }
    )

    def is_ref(self) -> bool:
        return bool(self.ref)

    def signature(self) -> dict[str, Any]:
        """Syntactic form used for exact structural comparison."""
        return self.model_dump(by_alias=True, exclude_none=True)


def schemas_equal(schema1: Optional[Schema], schema2: Optional[Schema]) -> bool:
    if schema1 is None or schema2 is None:
        return schema1 is schema2
    return values_equal(schema1.signature(), schema2.signature())


class MediaType(BaseModel):
    """Provides schema and examples for the media type identified by its key."""

    schema_: Optional[Schema] = Field(default=None, alias="schema")
    example: Any = None
    examples: dict[str, Any] = Field(default_factory=dict)
    encoding: dict[str, Any] = Field(default_factory=dict)

    model_config = _openapi_config()


class Header(BaseModel):
    description: Optional[str] = None
    required: bool = False
    deprecated: bool = False
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    content: dict[str, MediaType] = Field(default_factory=dict)

    model_config = _openapi_config()


class Parameter(BaseModel):
    """Describes a single operation parameter, unique by (in, name)."""

    name: str
    location: str = Field(alias="in")
    description: Optional[str] = None
    required: bool = False
    deprecated: bool = False
    allowEmptyValue: bool = False  # noqa: N815
    style: Optional[str] = None
    explode: Optional[bool] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    content: dict[str, MediaType] = Field(default_factory=dict)
    example: Any = None

    model_config = _openapi_config(
        json_schema_extra={
            "examples": [
                {
                    "name": "petId",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "string"},
                }
            ]
        }
    )


class RequestBody(BaseModel):
    """Describes a single request body."""

    description: Optional[str] = None
    content: dict[str, MediaType]
    required: bool = False

    model_config = _openapi_config()


class Response(BaseModel):
    """
    Describes a single response from an API Operation.
    """

    description: Optional[str] = None
    headers: dict[str, Header] = Field(default_factory=dict)
    content: dict[str, MediaType] = Field(default_factory=dict)
    links: dict[str, Any] = Field(default_factory=dict)

    model_config = _openapi_config()


class Server(BaseModel):
    url: str
    description: Optional[str] = None
    variables: dict[str, Any] = Field(default_factory=dict)

    model_config = _openapi_config()


class Operation(BaseModel):
    """Describes a single API operation on a path."""

    tags: list[str] = Field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    externalDocs: Optional[dict[str, Any]] = None  # noqa: N815
    operationId: Optional[str] = None  # noqa: N815
    parameters: list[Parameter] = Field(default_factory=list)
    requestBody: Optional[RequestBody] = None  # noqa: N815
    responses: dict[str, Response] = Field(default_factory=dict)
    callbacks: dict[str, dict[str, PathItem]] = Field(default_factory=dict)
    deprecated: bool = False
    security: Optional[list[dict[str, Any]]] = None
    servers: list[Server] = Field(default_factory=list)

    model_config = _openapi_config()

    @field_validator("responses", mode="before")
    @classmethod
    def _status_codes_as_strings(cls, value: Any) -> Any:
        # YAML loads bare status codes (200:) as integers
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class PathItem(BaseModel):
    """
    Describes the operations available on a single path.
    """

    ref: Optional[str] = Field(default=None, alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None

    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None

    parameters: list[Parameter] = Field(default_factory=list)
    servers: list[Server] = Field(default_factory=list)

    model_config = _openapi_config()

    def operations(self) -> dict[str, Operation]:
        """
        Operations keyed by method. Path-level parameters are merged into each
        operation; an operation parameter with the same (in, name) wins.
        """

        result: dict[str, Operation] = {}
        for method in HTTP_METHODS:
            operation: Optional[Operation] = getattr(self, method)
            if operation is None:
                continue

            if self.parameters:
                merged = {parameter_key(p): p for p in self.parameters}
                merged.update({parameter_key(p): p for p in operation.parameters})
                operation = operation.model_copy(
                    update={"parameters": list(merged.values())}
                )
            result[method] = operation
        return result


def operations_by_endpoint(paths: dict[str, PathItem]) -> dict[str, Operation]:
    """Flatten path items into an "METHOD PATH" -> Operation mapping."""

    endpoints: dict[str, Operation] = {}
    for path, path_item in paths.items():
        for method, operation in path_item.operations().items():
            endpoints[endpoint_key(method, path)] = operation
    return endpoints


class Components(BaseModel):
    schemas: dict[str, Schema] = Field(default_factory=dict)
    parameters: dict[str, Any] = Field(default_factory=dict)
    responses: dict[str, Any] = Field(default_factory=dict)
    requestBodies: dict[str, Any] = Field(default_factory=dict)  # noqa: N815
    headers: dict[str, Any] = Field(default_factory=dict)
    securitySchemes: dict[str, Any] = Field(default_factory=dict)  # noqa: N815
    examples: dict[str, Any] = Field(default_factory=dict)
    links: dict[str, Any] = Field(default_factory=dict)
    callbacks: dict[str, Any] = Field(default_factory=dict)

    model_config = _openapi_config()


class Document(BaseModel):
    """An already-parsed OpenAPI document."""

    openapi: str = "3.0.3"
    info: dict[str, Any] = Field(default_factory=dict)
    servers: list[Server] = Field(default_factory=list)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    model_config = _openapi_config()

    def endpoints(self) -> dict[str, Operation]:
        return operations_by_endpoint(self.paths)

    def resolve_schema(self, ref: str) -> Schema:
        if not ref.startswith(SCHEMA_REF_PREFIX):
            raise DocumentError(UNRESOLVED_SCHEMA_REF.format(ref=ref))

        name = ref[len(SCHEMA_REF_PREFIX) :].replace("~1", "/").replace("~0", "~")
        schema = self.components.schemas.get(name)
        if schema is None:
            raise DocumentError(UNRESOLVED_SCHEMA_REF.format(ref=ref))
        return schema

    def deref(self, schema: Schema) -> Schema:
        """Follow a reference (and reference chains) to the defining schema."""

        seen: set[str] = set()
        while schema.ref:
            if schema.ref in seen:
                raise DocumentError(CIRCULAR_SCHEMA_ALIAS.format(ref=schema.ref))
            seen.add(schema.ref)
            schema = self.resolve_schema(schema.ref)
        return schema


Schema.model_rebuild()
Operation.model_rebuild()
PathItem.model_rebuild()
Document.model_rebuild()
