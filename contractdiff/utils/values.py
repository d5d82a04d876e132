import collections.abc
from typing import Any


def values_equal(value1: Any, value2: Any) -> bool:
    """
    Structural equality of plain (JSON-like) values that keeps booleans apart
    from numbers: `0 != False`, `1 != True`, `True != 1.0`. Lists and mappings
    are compared element by element.
    """

    if isinstance(value1, bool) or isinstance(value2, bool):
        return type(value1) is type(value2) and value1 == value2

    if isinstance(value1, collections.abc.Mapping) and isinstance(
        value2, collections.abc.Mapping
    ):
        return value1.keys() == value2.keys() and all(
            values_equal(value1[k], value2[k]) for k in value1
        )

    if isinstance(value1, (list, tuple)) and isinstance(value2, (list, tuple)):
        return (
            type(value1) is type(value2)
            and len(value1) == len(value2)
            and all(values_equal(v1, v2) for v1, v2 in zip(value1, value2))
        )

    return value1 == value2
