from __future__ import annotations

from typing import Optional

from contractdiff.diff.base import DiffModel, non_empty
from contractdiff.diff.content import (
    ContentDiff,
    HeadersDiff,
    get_content_diff,
    get_headers_diff,
)
from contractdiff.diff.keyed import CollectionDiff, get_collection_diff
from contractdiff.diff.leaf import ValueDiff, get_value_diff
from contractdiff.diff.state import DiffContext
from contractdiff.openapi.models import Response


class ResponseDiff(DiffModel):
    description_diff: Optional[ValueDiff] = None
    content_diff: Optional[ContentDiff] = None
    headers_diff: Optional[HeadersDiff] = None


class ResponsesDiff(CollectionDiff):
    """Responses keyed by status code ("200", "4XX", "default")."""

    modified: dict[str, ResponseDiff] = {}


def get_response_diff(
    ctx: DiffContext, response1: Response, response2: Response
) -> Optional[ResponseDiff]:
    result = ResponseDiff(
        content_diff=get_content_diff(ctx, response1.content, response2.content),
        headers_diff=get_headers_diff(ctx, response1.headers, response2.headers),
    )
    if not ctx.config.exclude_description:
        result.description_diff = get_value_diff(
            response1.description, response2.description
        )
    return non_empty(result)


def get_responses_diff(
    ctx: DiffContext,
    responses1: dict[str, Response],
    responses2: dict[str, Response],
) -> Optional[ResponsesDiff]:
    return get_collection_diff(
        ResponsesDiff,
        responses1,
        responses2,
        lambda r1, r2: get_response_diff(ctx, r1, r2),
    )
