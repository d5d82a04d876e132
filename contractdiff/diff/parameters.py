from __future__ import annotations

from collections import defaultdict
from typing import Optional

from contractdiff.diff.base import DiffModel, non_empty
from contractdiff.diff.content import ContentDiff, get_content_diff
from contractdiff.diff.keyed import diff_keyed
from contractdiff.diff.leaf import ValueDiff, get_value_diff
from contractdiff.diff.schema import SchemaDiff, get_schema_diff
from contractdiff.diff.state import DiffContext
from contractdiff.openapi.models import Parameter


class ParameterDiff(DiffModel):
    description_diff: Optional[ValueDiff] = None
    required_diff: Optional[ValueDiff] = None
    deprecated_diff: Optional[ValueDiff] = None
    allow_empty_value_diff: Optional[ValueDiff] = None
    style_diff: Optional[ValueDiff] = None
    explode_diff: Optional[ValueDiff] = None
    example_diff: Optional[ValueDiff] = None
    schema_diff: Optional[SchemaDiff] = None
    content_diff: Optional[ContentDiff] = None


class ParametersDiff(DiffModel):
    """
    Parameters are unique by (in, name), so every container is grouped by
    location first: {"query": ["limit"], "header": ["X-Request-ID"]}.
    """

    added: dict[str, list[str]] = {}
    deleted: dict[str, list[str]] = {}
    modified: dict[str, dict[str, ParameterDiff]] = {}


def get_parameter_diff(
    ctx: DiffContext, param1: Parameter, param2: Parameter
) -> Optional[ParameterDiff]:
    result = ParameterDiff(
        required_diff=get_value_diff(param1.required, param2.required),
        deprecated_diff=get_value_diff(param1.deprecated, param2.deprecated),
        allow_empty_value_diff=get_value_diff(
            param1.allowEmptyValue, param2.allowEmptyValue
        ),
        style_diff=get_value_diff(param1.style, param2.style),
        explode_diff=get_value_diff(param1.explode, param2.explode),
        schema_diff=get_schema_diff(ctx, param1.schema_, param2.schema_),
        content_diff=get_content_diff(ctx, param1.content, param2.content),
    )
    if not ctx.config.exclude_description:
        result.description_diff = get_value_diff(param1.description, param2.description)
    if not ctx.config.exclude_examples:
        result.example_diff = get_value_diff(param1.example, param2.example)
    return non_empty(result)


def _by_location(parameters: list[Parameter]) -> dict[str, dict[str, Parameter]]:
    grouped: dict[str, dict[str, Parameter]] = defaultdict(dict)
    for parameter in parameters:
        grouped[parameter.location][parameter.name] = parameter
    return grouped


def get_parameters_diff(
    ctx: DiffContext, params1: list[Parameter], params2: list[Parameter]
) -> Optional[ParametersDiff]:
    grouped1, grouped2 = _by_location(params1), _by_location(params2)
    result = ParametersDiff()

    for location in sorted(set(grouped1) | set(grouped2)):
        diff = diff_keyed(
            grouped1.get(location, {}),
            grouped2.get(location, {}),
            lambda p1, p2: get_parameter_diff(ctx, p1, p2),
        )
        if diff.added:
            result.added[location] = diff.added
        if diff.deleted:
            result.deleted[location] = diff.deleted
        if diff.modified:
            result.modified[location] = diff.modified

    return non_empty(result)
