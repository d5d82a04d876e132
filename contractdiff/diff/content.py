from __future__ import annotations

from typing import Optional

from contractdiff.diff.base import DiffModel, non_empty
from contractdiff.diff.keyed import CollectionDiff, get_collection_diff
from contractdiff.diff.leaf import ValueDiff, get_value_diff
from contractdiff.diff.schema import SchemaDiff, get_schema_diff
from contractdiff.diff.state import DiffContext
from contractdiff.openapi.models import Header, MediaType


class MediaTypeDiff(DiffModel):
    schema_diff: Optional[SchemaDiff] = None
    example_diff: Optional[ValueDiff] = None
    examples_diff: Optional[ValueDiff] = None


class ContentDiff(CollectionDiff):
    """Diff of a media-type map, keyed by content type."""

    modified: dict[str, MediaTypeDiff] = {}


def get_media_type_diff(
    ctx: DiffContext, media1: MediaType, media2: MediaType
) -> Optional[MediaTypeDiff]:
    result = MediaTypeDiff(
        schema_diff=get_schema_diff(ctx, media1.schema_, media2.schema_),
    )
    if not ctx.config.exclude_examples:
        result.example_diff = get_value_diff(media1.example, media2.example)
        result.examples_diff = get_value_diff(media1.examples, media2.examples)
    return non_empty(result)


def get_content_diff(
    ctx: DiffContext, content1: dict[str, MediaType], content2: dict[str, MediaType]
) -> Optional[ContentDiff]:
    return get_collection_diff(
        ContentDiff,
        content1,
        content2,
        lambda m1, m2: get_media_type_diff(ctx, m1, m2),
    )


class HeaderDiff(DiffModel):
    description_diff: Optional[ValueDiff] = None
    required_diff: Optional[ValueDiff] = None
    deprecated_diff: Optional[ValueDiff] = None
    schema_diff: Optional[SchemaDiff] = None
    content_diff: Optional[ContentDiff] = None


class HeadersDiff(CollectionDiff):
    modified: dict[str, HeaderDiff] = {}


def get_header_diff(
    ctx: DiffContext, header1: Header, header2: Header
) -> Optional[HeaderDiff]:
    result = HeaderDiff(
        required_diff=get_value_diff(header1.required, header2.required),
        deprecated_diff=get_value_diff(header1.deprecated, header2.deprecated),
        schema_diff=get_schema_diff(ctx, header1.schema_, header2.schema_),
        content_diff=get_content_diff(ctx, header1.content, header2.content),
    )
    if not ctx.config.exclude_description:
        result.description_diff = get_value_diff(
            header1.description, header2.description
        )
    return non_empty(result)


def get_headers_diff(
    ctx: DiffContext, headers1: dict[str, Header], headers2: dict[str, Header]
) -> Optional[HeadersDiff]:
    return get_collection_diff(
        HeadersDiff,
        headers1,
        headers2,
        lambda h1, h2: get_header_diff(ctx, h1, h2),
    )
