from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Mapping, Optional, TypeVar

from contractdiff.diff.base import DiffModel

V = TypeVar("V")
D = TypeVar("D", bound=DiffModel)


@dataclass
class KeyedDiff(Generic[D]):
    added: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    modified: dict[str, D] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.added and not self.deleted and not self.modified


def diff_keyed(
    items1: Mapping[str, V],
    items2: Mapping[str, V],
    diff_value: Callable[[V, V], Optional[D]],
) -> KeyedDiff[D]:
    """
    Diff two mappings sharing a key space. Keys only in `items2` are added,
    keys only in `items1` are deleted, and keys in both whose value diff is
    non-empty are modified. All outputs are in sorted key order.
    """

    diff: KeyedDiff[D] = KeyedDiff()

    diff.added = sorted(k for k in items2 if k not in items1)
    diff.deleted = sorted(k for k in items1 if k not in items2)

    for k in sorted(k for k in items1 if k in items2):
        value_diff = diff_value(items1[k], items2[k])
        if value_diff is not None and not value_diff.is_empty():
            diff.modified[k] = value_diff
    return diff


class CollectionDiff(DiffModel):
    """
    Serializable keyed-collection diff. Subclasses declare the type of
    `modified`.
    """

    added: list[str] = []
    deleted: list[str] = []

    @classmethod
    def from_keyed(cls, diff: KeyedDiff):
        return cls(added=diff.added, deleted=diff.deleted, modified=diff.modified)


C = TypeVar("C", bound=CollectionDiff)


def get_collection_diff(
    model: type[C],
    items1: Mapping[str, V],
    items2: Mapping[str, V],
    diff_value: Callable[[V, V], Optional[D]],
) -> Optional[C]:
    diff = diff_keyed(items1, items2, diff_value)
    if diff.is_empty():
        return None
    return model.from_keyed(diff)
