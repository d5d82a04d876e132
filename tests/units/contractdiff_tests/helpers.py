import copy
from typing import Any, Optional

from contractdiff.config import Config
from contractdiff.diff.state import DiffContext
from contractdiff.openapi import Document, Schema, parse_document


def ref(name: str) -> dict[str, Any]:
    return {"$ref": f"#/components/schemas/{name}"}


def mk_schema(**fields: Any) -> Schema:
    return Schema.model_validate(fields)


def mk_document(
    paths: Optional[dict[str, Any]] = None,
    schemas: Optional[dict[str, Any]] = None,
    servers: Optional[list[dict[str, Any]]] = None,
) -> Document:
    return parse_document(
        {
            "openapi": "3.0.3",
            "info": {"title": "test", "version": "1.0.0"},
            "servers": servers or [],
            "paths": paths or {},
            "components": {"schemas": schemas or {}},
        }
    )


def mk_ctx(
    base: Optional[Document] = None,
    revision: Optional[Document] = None,
    config: Optional[Config] = None,
) -> DiffContext:
    base = base or mk_document()
    return DiffContext(
        config=config or Config(),
        base=base,
        revision=revision or base,
    )


def petstore() -> dict[str, Any]:
    """
    Raw petstore document. Pet refers to itself and to Owner, Owner refers
    back to Pet.
    """

    document = {
        "openapi": "3.0.3",
        "info": {"title": "Petstore", "version": "1.0.0"},
        "servers": [{"url": "https://petstore.example.com/v1"}],
        "paths": {
            "/pets/{id}": {
                "parameters": [
                    {
                        "name": "id",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "string"},
                    }
                ],
                "get": {
                    "operationId": "getPet",
                    "tags": ["pets"],
                    "summary": "Find pet by ID",
                    "responses": {
                        "200": {
                            "description": "A pet",
                            "content": {"application/json": {"schema": ref("Pet")}},
                        },
                        "404": {"description": "Not found"},
                    },
                },
                "delete": {
                    "operationId": "deletePet",
                    "responses": {"204": {"description": "Deleted"}},
                },
            },
            "/owners": {
                "post": {
                    "operationId": "createOwner",
                    "requestBody": {
                        "required": True,
                        "content": {"application/json": {"schema": ref("Owner")}},
                    },
                    "responses": {"201": {"description": "Created"}},
                }
            },
        },
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "required": ["id", "name"],
                    "properties": {
                        "id": {"type": "integer", "format": "int64"},
                        "name": {"type": "string"},
                        "tag": {"type": "string"},
                        "parent": ref("Pet"),
                        "owner": ref("Owner"),
                    },
                },
                "Owner": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "pets": {"type": "array", "items": ref("Pet")},
                    },
                },
            }
        },
    }
    return copy.deepcopy(document)
