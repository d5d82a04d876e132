from __future__ import annotations

from typing import Any, Iterable, Optional

from pydantic import Field

from contractdiff.diff.base import DiffModel
from contractdiff.utils import values_equal


class ValueDiff(DiffModel):
    """A scalar that changed from one value to another."""

    from_: Any = Field(alias="from")
    to: Any

    def is_empty(self) -> bool:
        return values_equal(self.from_, self.to)


def get_value_diff(value1: Any, value2: Any) -> Optional[ValueDiff]:
    if values_equal(value1, value2):
        return None
    return ValueDiff(from_=value1, to=value2)


class StringSetDiff(DiffModel):
    """Order-insensitive diff of two string collections."""

    added: list[str] = []
    deleted: list[str] = []


def get_string_set_diff(
    strings1: Iterable[str], strings2: Iterable[str]
) -> Optional[StringSetDiff]:
    set1, set2 = set(strings1), set(strings2)
    if set1 == set2:
        return None
    return StringSetDiff(added=sorted(set2 - set1), deleted=sorted(set1 - set2))


class SequenceDiff(DiffModel):
    """
    Order-sensitive diff of two sequences. Values present on one side only are
    listed (with multiplicity, in their original order); `reordered` is set
    when both sides hold the same values in a different order.
    """

    added: list[Any] = []
    deleted: list[Any] = []
    reordered: bool = False


def _subtract(values: list[Any], other: list[Any]) -> list[Any]:
    # values may be unhashable (enum members can be objects)
    remaining = list(other)
    result = []
    for value in values:
        index = next(
            (i for i, v in enumerate(remaining) if values_equal(value, v)), None
        )
        if index is None:
            result.append(value)
        else:
            del remaining[index]
    return result


def get_sequence_diff(
    values1: Optional[Iterable[Any]], values2: Optional[Iterable[Any]]
) -> Optional[SequenceDiff]:
    list1, list2 = list(values1 or []), list(values2 or [])
    if values_equal(list1, list2):
        return None

    added = _subtract(list2, list1)
    deleted = _subtract(list1, list2)
    return SequenceDiff(
        added=added,
        deleted=deleted,
        reordered=not added and not deleted,
    )
