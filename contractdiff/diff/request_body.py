from __future__ import annotations

from typing import Optional

from contractdiff.diff.base import DiffModel, non_empty
from contractdiff.diff.content import ContentDiff, get_content_diff
from contractdiff.diff.leaf import ValueDiff, get_value_diff
from contractdiff.diff.state import DiffContext
from contractdiff.openapi.models import RequestBody


class RequestBodyDiff(DiffModel):
    added: bool = False
    deleted: bool = False
    description_diff: Optional[ValueDiff] = None
    required_diff: Optional[ValueDiff] = None
    content_diff: Optional[ContentDiff] = None


def get_request_body_diff(
    ctx: DiffContext, body1: Optional[RequestBody], body2: Optional[RequestBody]
) -> Optional[RequestBodyDiff]:
    if body1 is None and body2 is None:
        return None
    if body1 is None:
        return RequestBodyDiff(added=True)
    if body2 is None:
        return RequestBodyDiff(deleted=True)

    result = RequestBodyDiff(
        required_diff=get_value_diff(body1.required, body2.required),
        content_diff=get_content_diff(ctx, body1.content, body2.content),
    )
    if not ctx.config.exclude_description:
        result.description_diff = get_value_diff(body1.description, body2.description)
    return non_empty(result)
