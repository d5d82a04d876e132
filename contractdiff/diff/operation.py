from __future__ import annotations

from typing import Optional

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
from contractdiff.diff.parameters import ParametersDiff, get_parameters_diff
from contractdiff.diff.request_body import RequestBodyDiff, get_request_body_diff
from contractdiff.diff.responses import ResponsesDiff, get_responses_diff
from contractdiff.diff.state import DiffContext
from contractdiff.openapi.models import Operation, PathItem, operations_by_endpoint


class OperationDiff(DiffModel):
    """Diff between two operation objects of the same endpoint."""

    tags_diff: Optional[StringSetDiff] = None
    summary_diff: Optional[ValueDiff] = None
    description_diff: Optional[ValueDiff] = None
    operation_id_diff: Optional[ValueDiff] = None
    deprecated_diff: Optional[ValueDiff] = None
    parameters_diff: Optional[ParametersDiff] = None
    request_body_diff: Optional[RequestBodyDiff] = None
    responses_diff: Optional[ResponsesDiff] = None
    callbacks_diff: Optional[CallbacksDiff] = None
    servers_diff: Optional[SequenceDiff] = None
    security_diff: Optional[ValueDiff] = None


class CallbackDiff(CollectionDiff):
    """Diff of one callback: its path items flattened to "METHOD expression" keys."""

    modified: dict[str, OperationDiff] = {}


class CallbacksDiff(CollectionDiff):
    modified: dict[str, CallbackDiff] = {}


OperationDiff.model_rebuild()
CallbackDiff.model_rebuild()
CallbacksDiff.model_rebuild()


def get_operation_diff(
    ctx: DiffContext, operation1: Operation, operation2: Operation
) -> Optional[OperationDiff]:
    result = OperationDiff(
        tags_diff=get_string_set_diff(operation1.tags, operation2.tags),
        summary_diff=get_value_diff(operation1.summary, operation2.summary),
        operation_id_diff=get_value_diff(
            operation1.operationId, operation2.operationId
        ),
        deprecated_diff=get_value_diff(operation1.deprecated, operation2.deprecated),
        parameters_diff=get_parameters_diff(
            ctx, operation1.parameters, operation2.parameters
        ),
        request_body_diff=get_request_body_diff(
            ctx, operation1.requestBody, operation2.requestBody
        ),
        responses_diff=get_responses_diff(
            ctx, operation1.responses, operation2.responses
        ),
        callbacks_diff=get_callbacks_diff(
            ctx, operation1.callbacks, operation2.callbacks
        ),
        servers_diff=get_sequence_diff(
            [s.url for s in operation1.servers], [s.url for s in operation2.servers]
        ),
        security_diff=get_value_diff(operation1.security, operation2.security),
    )
    if not ctx.config.exclude_description:
        result.description_diff = get_value_diff(
            operation1.description, operation2.description
        )
    return non_empty(result)


def get_callback_diff(
    ctx: DiffContext, callback1: dict[str, PathItem], callback2: dict[str, PathItem]
) -> Optional[CallbackDiff]:
    return get_collection_diff(
        CallbackDiff,
        operations_by_endpoint(callback1),
        operations_by_endpoint(callback2),
        lambda o1, o2: get_operation_diff(ctx, o1, o2),
    )


def get_callbacks_diff(
    ctx: DiffContext,
    callbacks1: dict[str, dict[str, PathItem]],
    callbacks2: dict[str, dict[str, PathItem]],
) -> Optional[CallbacksDiff]:
    return get_collection_diff(
        CallbacksDiff,
        callbacks1,
        callbacks2,
        lambda c1, c2: get_callback_diff(ctx, c1, c2),
    )
