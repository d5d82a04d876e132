from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Matching:
    """
    Result of pairing two sequences element by element.
    `pairs` holds (index1, index2) tuples; the leftovers are in ascending order.
    """

    pairs: list[tuple[int, int]] = field(default_factory=list)
    unmatched1: list[int] = field(default_factory=list)
    unmatched2: list[int] = field(default_factory=list)


def match_identical(
    items1: Sequence[T], items2: Sequence[T], equal: Callable[[T, T], bool]
) -> Matching:
    """
    Greedy one-to-one matching: each element of `items1` is paired with the
    first not yet matched element of `items2` that is equal to it.
    """

    matching = Matching()
    matched2: set[int] = set()

    for index1, item1 in enumerate(items1):
        for index2, item2 in enumerate(items2):
            if index2 in matched2:
                continue
            if equal(item1, item2):
                matched2.add(index2)
                matching.pairs.append((index1, index2))
                break
        else:
            matching.unmatched1.append(index1)

    matching.unmatched2 = [i for i in range(len(items2)) if i not in matched2]
    return matching
