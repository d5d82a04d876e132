from __future__ import annotations

import copy
import logging
import collections.abc
from typing import Any, Final, Optional

import fsspec
import yaml
from pydantic import ValidationError

from contractdiff.errors import DocumentError
from contractdiff.openapi.models import Document, Schema

logger = logging.getLogger(__name__)

# Component kinds that are inlined at load time. Schema references stay intact:
# the diff engine compares them by name and resolves them lazily.
INLINED_COMPONENTS: Final[tuple[str, ...]] = (
    "parameters",
    "responses",
    "requestBodies",
    "headers",
    "callbacks",
    "pathItems",
    "examples",
    "links",
)

NOT_A_MAPPING: Final[str] = "document root must be a mapping, got {kind}"
INVALID_YAML: Final[str] = "cannot parse document:\n{err}"
INVALID_DOCUMENT: Final[str] = "invalid OpenAPI document:\n{err}"
UNREADABLE_DOCUMENT: Final[str] = "cannot read document: {err}"
UNSUPPORTED_REF: Final[str] = "unsupported reference {ref}"
CIRCULAR_REF: Final[str] = "circular reference {ref}"


def load_document(
    path: str, fs: Optional[fsspec.AbstractFileSystem] = None
) -> Document:
    """
    Read an OpenAPI document (YAML or JSON) through fsspec and parse it.
    Args:
        path: location of the document; a URL when no filesystem is given
        fs: filesystem to read from, inferred from `path` by default
    """

    try:
        if fs is None:
            with fsspec.open(path, "r", encoding="utf-8") as f:
                text = f.read()
        else:
            text = fs.cat_file(path).decode("utf-8")
    except (OSError, ValueError) as exc:
        raise DocumentError(UNREADABLE_DOCUMENT.format(err=exc), source=path) from exc

    logger.debug("loaded %s (%d bytes)", path, len(text))
    return parse_text(text, source=path)


def parse_text(text: str, source: Optional[str] = None) -> Document:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DocumentError(INVALID_YAML.format(err=exc), source=source) from exc
    return parse_document(data, source=source)


def parse_document(data: Any, source: Optional[str] = None) -> Document:
    """
    Build a Document from a raw mapping: inline non-schema component
    references, validate the result and check that schema references resolve.
    """

    if not isinstance(data, collections.abc.Mapping):
        raise DocumentError(NOT_A_MAPPING.format(kind=type(data).__name__), source)

    components = data.get("components") or {}
    raw = copy.deepcopy(dict(data))
    raw["paths"] = _inline_refs(raw.get("paths") or {}, components, source, ())

    try:
        document = Document.model_validate(raw)
    except ValidationError as exc:
        raise DocumentError(INVALID_DOCUMENT.format(err=exc), source=source) from exc

    for schema in _iter_schemas(document):
        if schema.ref:
            document.deref(schema)
    return document


def _inline_refs(
    node: Any, components: dict[str, Any], source: Optional[str], active: tuple[str, ...]
) -> Any:
    if isinstance(node, list):
        return [_inline_refs(item, components, source, active) for item in node]
    if not isinstance(node, collections.abc.Mapping):
        return node

    ref = node.get("$ref")
    if isinstance(ref, str):
        kind, name = _split_component_ref(ref)
        if kind == "schemas":
            return dict(node)
        if kind not in INLINED_COMPONENTS:
            raise DocumentError(UNSUPPORTED_REF.format(ref=ref), source)
        if ref in active:
            raise DocumentError(CIRCULAR_REF.format(ref=ref), source)

        target = (components.get(kind) or {}).get(name)
        if target is None:
            raise DocumentError(UNSUPPORTED_REF.format(ref=ref), source)
        return _inline_refs(target, components, source, active + (ref,))

    return {
        key: _inline_refs(value, components, source, active)
        for key, value in node.items()
    }


def _split_component_ref(ref: str) -> tuple[str, str]:
    parts = ref.split("/")
    if len(parts) != 4 or parts[:2] != ["#", "components"]:
        return "", ref
    name = parts[3].replace("~1", "/").replace("~0", "~")
    return parts[2], name


def _iter_schemas(document: Document):
    stack: list[Schema] = list(document.components.schemas.values())

    for operation in document.endpoints().values():
        stack.extend(_operation_schemas(operation))

    while stack:
        schema = stack.pop()
        yield schema
        stack.extend(schema.allOf)
        stack.extend(schema.oneOf)
        stack.extend(schema.anyOf)
        stack.extend(schema.properties.values())
        for sub in (schema.items, schema.not_, schema.additionalProperties):
            if isinstance(sub, Schema):
                stack.append(sub)


def _operation_schemas(operation) -> list[Schema]:
    schemas: list[Schema] = []

    def media(content):
        schemas.extend(m.schema_ for m in content.values() if m.schema_ is not None)

    for parameter in operation.parameters:
        if parameter.schema_ is not None:
            schemas.append(parameter.schema_)
        media(parameter.content)

    if operation.requestBody is not None:
        media(operation.requestBody.content)

    for response in operation.responses.values():
        media(response.content)
        for header in response.headers.values():
            if header.schema_ is not None:
                schemas.append(header.schema_)
            media(header.content)

    for callback in operation.callbacks.values():
        for path_item in callback.values():
            for nested in path_item.operations().values():
                schemas.extend(_operation_schemas(nested))
    return schemas
