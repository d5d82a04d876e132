from __future__ import annotations

import logging
from typing import Any, Final, Optional

from contractdiff.diff.base import DiffModel, non_empty
from contractdiff.diff.keyed import CollectionDiff, get_collection_diff
from contractdiff.diff.leaf import (
    SequenceDiff,
    StringSetDiff,
    ValueDiff,
    get_sequence_diff,
    get_string_set_diff,
    get_value_diff,
)
from contractdiff.diff.state import DiffContext
from contractdiff.openapi.models import SCHEMA_REF_PREFIX, Schema

logger = logging.getLogger(__name__)

# diff field -> Schema attribute compared as a plain value
VALUE_FIELDS: Final[dict[str, str]] = {
    "type_diff": "type",
    "title_diff": "title",
    "format_diff": "format",
    "description_diff": "description",
    "default_diff": "default",
    "example_diff": "example",
    "nullable_diff": "nullable",
    "read_only_diff": "readOnly",
    "write_only_diff": "writeOnly",
    "deprecated_diff": "deprecated",
    "unique_items_diff": "uniqueItems",
    "min_items_diff": "minItems",
    "max_items_diff": "maxItems",
    "min_properties_diff": "minProperties",
    "max_properties_diff": "maxProperties",
    "minimum_diff": "minimum",
    "maximum_diff": "maximum",
    "exclusive_minimum_diff": "exclusiveMinimum",
    "exclusive_maximum_diff": "exclusiveMaximum",
    "multiple_of_diff": "multipleOf",
    "min_length_diff": "minLength",
    "max_length_diff": "maxLength",
    "pattern_diff": "pattern",
}


class SchemaDiff(DiffModel):
    """
    Diff of two schema objects, field by field.
    `schema_added` / `schema_deleted` mark a sub-schema present on one side only.
    """

    schema_added: bool = False
    schema_deleted: bool = False

    type_diff: Optional[ValueDiff] = None
    title_diff: Optional[ValueDiff] = None
    format_diff: Optional[ValueDiff] = None
    description_diff: Optional[ValueDiff] = None
    enum_diff: Optional[SequenceDiff] = None
    default_diff: Optional[ValueDiff] = None
    example_diff: Optional[ValueDiff] = None
    nullable_diff: Optional[ValueDiff] = None
    read_only_diff: Optional[ValueDiff] = None
    write_only_diff: Optional[ValueDiff] = None
    deprecated_diff: Optional[ValueDiff] = None

    all_of_diff: Optional[SchemaListDiff] = None
    one_of_diff: Optional[SchemaListDiff] = None
    any_of_diff: Optional[SchemaListDiff] = None
    not_diff: Optional[SchemaDiff] = None

    items_diff: Optional[SchemaDiff] = None
    unique_items_diff: Optional[ValueDiff] = None
    min_items_diff: Optional[ValueDiff] = None
    max_items_diff: Optional[ValueDiff] = None

    required_diff: Optional[StringSetDiff] = None
    properties_diff: Optional[PropertiesDiff] = None
    additional_properties_diff: Optional[SchemaDiff] = None
    additional_properties_allowed_diff: Optional[ValueDiff] = None
    min_properties_diff: Optional[ValueDiff] = None
    max_properties_diff: Optional[ValueDiff] = None

    minimum_diff: Optional[ValueDiff] = None
    maximum_diff: Optional[ValueDiff] = None
    exclusive_minimum_diff: Optional[ValueDiff] = None
    exclusive_maximum_diff: Optional[ValueDiff] = None
    multiple_of_diff: Optional[ValueDiff] = None
    min_length_diff: Optional[ValueDiff] = None
    max_length_diff: Optional[ValueDiff] = None
    pattern_diff: Optional[ValueDiff] = None


class PropertiesDiff(CollectionDiff):
    modified: dict[str, SchemaDiff] = {}


class SchemaListDiff(DiffModel):
    """
    Diff of two unordered schema lists (allOf, oneOf, anyOf).

    Referenced schemas are matched by `$ref` and reported under that key.
    Inline schemas are matched by exact structure; when exactly one inline
    schema is left over on each side the pair is reported as modified under
    `#<index>`, otherwise leftovers are only counted.
    """

    added: int = 0
    deleted: int = 0
    modified: dict[str, SchemaDiff] = {}

    def combine(self, other: SchemaListDiff) -> SchemaListDiff:
        return SchemaListDiff(
            added=self.added + other.added,
            deleted=self.deleted + other.deleted,
            modified={**self.modified, **other.modified},
        )


class SchemasDiff(CollectionDiff):
    """Diff of the named schemas under components.schemas."""

    modified: dict[str, SchemaDiff] = {}


SchemaDiff.model_rebuild()
PropertiesDiff.model_rebuild()
SchemaListDiff.model_rebuild()
SchemasDiff.model_rebuild()


def get_schema_diff(
    ctx: DiffContext, schema1: Optional[Schema], schema2: Optional[Schema]
) -> Optional[SchemaDiff]:
    """
    Diff two schemas, resolving references against their own document.
    Returns None when there is no difference.
    """

    if schema1 is None and schema2 is None:
        return None
    if schema1 is None:
        return SchemaDiff(schema_added=True)
    if schema2 is None:
        return SchemaDiff(schema_deleted=True)

    if not (schema1.is_ref() and schema2.is_ref()):
        return non_empty(
            _diff_definitions(ctx, ctx.base.deref(schema1), ctx.revision.deref(schema2))
        )

    pair = (schema1.ref, schema2.ref)
    if ctx.state.is_visiting(pair):
        logger.debug("reference pair %s / %s is already being diffed", *pair)
        return None

    with ctx.state.visiting(pair):
        diff = _diff_definitions(
            ctx, ctx.base.deref(schema1), ctx.revision.deref(schema2)
        )
    return non_empty(diff)


def _diff_definitions(ctx: DiffContext, schema1: Schema, schema2: Schema) -> SchemaDiff:
    # imported here: schema_list depends on this module
    from contractdiff.diff.schema_list import get_schema_list_diff

    result = SchemaDiff()

    for name, attr in VALUE_FIELDS.items():
        if name == "description_diff" and ctx.config.exclude_description:
            continue
        if name == "example_diff" and ctx.config.exclude_examples:
            continue
        setattr(result, name, get_value_diff(getattr(schema1, attr), getattr(schema2, attr)))

    result.enum_diff = get_sequence_diff(schema1.enum, schema2.enum)
    result.required_diff = get_string_set_diff(schema1.required, schema2.required)

    result.all_of_diff = get_schema_list_diff(ctx, schema1.allOf, schema2.allOf)
    result.one_of_diff = get_schema_list_diff(ctx, schema1.oneOf, schema2.oneOf)
    result.any_of_diff = get_schema_list_diff(ctx, schema1.anyOf, schema2.anyOf)
    result.not_diff = get_schema_diff(ctx, schema1.not_, schema2.not_)
    result.items_diff = get_schema_diff(ctx, schema1.items, schema2.items)

    result.properties_diff = get_collection_diff(
        PropertiesDiff,
        schema1.properties,
        schema2.properties,
        lambda p1, p2: get_schema_diff(ctx, p1, p2),
    )

    ap1, ap2 = schema1.additionalProperties, schema2.additionalProperties
    if isinstance(ap1, bool) or isinstance(ap2, bool) or (ap1 is None and ap2 is None):
        result.additional_properties_allowed_diff = get_value_diff(
            _plain(ap1), _plain(ap2)
        )
    else:
        result.additional_properties_diff = get_schema_diff(ctx, ap1, ap2)

    return result


def _plain(value: Any) -> Any:
    if isinstance(value, Schema):
        return value.signature()
    return value


def get_schemas_diff(
    ctx: DiffContext, schemas1: dict[str, Schema], schemas2: dict[str, Schema]
) -> Optional[SchemasDiff]:
    """Diff named component schemas. Each pair enters the cycle guard as a reference."""

    def diff_named(name: str) -> Optional[SchemaDiff]:
        ref = Schema(ref=SCHEMA_REF_PREFIX + name.replace("~", "~0").replace("/", "~1"))
        return get_schema_diff(ctx, ref, ref)

    return get_collection_diff(
        SchemasDiff,
        {name: name for name in schemas1},
        {name: name for name in schemas2},
        lambda name, _: diff_named(name),
    )
