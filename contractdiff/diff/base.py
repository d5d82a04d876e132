from __future__ import annotations

import json
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def diff_alias(name: str) -> str:
    """`responses_diff` is serialized as `responses`, `added_endpoints` as `addedEndpoints`."""
    return to_camel(name.removesuffix("_diff"))


def _field_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, DiffModel):
        return value.is_empty()
    if isinstance(value, (bool, int)):
        return not value
    if isinstance(value, (list, dict, set, tuple)):
        return len(value) == 0
    return False


class DiffModel(BaseModel):
    """
    Base class of every diff node.

    A diff is empty when each of its fields is empty by that field's own
    definition: None, False, 0, an empty container, or a nested empty diff.
    """

    model_config = ConfigDict(alias_generator=diff_alias, validate_by_name=True)

    def is_empty(self) -> bool:
        return all(_field_empty(getattr(self, name)) for name in type(self).model_fields)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            self.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )


def non_empty(diff):
    """Return the diff, or None when it carries no change."""
    if diff is None or diff.is_empty():
        return None
    return diff
