from __future__ import annotations

from typing import Optional

from contractdiff.diff.keyed import diff_keyed
from contractdiff.diff.matching import match_identical
from contractdiff.diff.schema import SchemaDiff, SchemaListDiff, get_schema_diff
from contractdiff.diff.state import DiffContext
from contractdiff.openapi.models import Schema, schemas_equal


def get_schema_list_diff(
    ctx: DiffContext, schemas1: list[Schema], schemas2: list[Schema]
) -> Optional[SchemaListDiff]:
    diff = get_schema_list_diff_internal(ctx, schemas1, schemas2)
    if diff.is_empty():
        return None
    return diff


def get_schema_list_diff_internal(
    ctx: DiffContext, schemas1: list[Schema], schemas2: list[Schema]
) -> SchemaListDiff:
    refs1 = {s.ref: s for s in schemas1 if s.is_ref()}
    refs2 = {s.ref: s for s in schemas2 if s.is_ref()}

    inline1 = [(i, s) for i, s in enumerate(schemas1) if not s.is_ref()]
    inline2 = [(i, s) for i, s in enumerate(schemas2) if not s.is_ref()]

    diff_refs = get_refs_diff(ctx, refs1, refs2)
    diff_inline = get_inline_diff(ctx, inline1, inline2)
    return diff_refs.combine(diff_inline)


def get_refs_diff(
    ctx: DiffContext, refs1: dict[str, Schema], refs2: dict[str, Schema]
) -> SchemaListDiff:
    """Referenced schemas are matched by their $ref."""

    diff = diff_keyed(refs1, refs2, lambda s1, s2: get_schema_diff(ctx, s1, s2))
    return SchemaListDiff(
        added=len(diff.added),
        deleted=len(diff.deleted),
        modified=diff.modified,
    )


def get_inline_diff(
    ctx: DiffContext,
    inline1: list[tuple[int, Schema]],
    inline2: list[tuple[int, Schema]],
) -> SchemaListDiff:
    """
    Inline schemas are matched by exact syntax. A single leftover pair is
    reported as modified under the position of the schema in the first list.
    """

    matching = match_identical(
        [s for _, s in inline1], [s for _, s in inline2], schemas_equal
    )

    if len(matching.unmatched1) == 1 and len(matching.unmatched2) == 1:
        position, schema1 = inline1[matching.unmatched1[0]]
        _, schema2 = inline2[matching.unmatched2[0]]

        # never equal by syntax, so the pair stays even if the diff is empty
        diff = get_schema_diff(ctx, schema1, schema2) or SchemaDiff()
        return SchemaListDiff(modified={f"#{position}": diff})

    return SchemaListDiff(
        added=len(matching.unmatched2),
        deleted=len(matching.unmatched1),
    )
