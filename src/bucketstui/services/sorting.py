"""Column sorting for the bucket list.

The comparison strategy is chosen by a ``SortType`` tag rather than by the
column, so new strategies only need an entry in ``COMPARATORS``.
"""

from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Iterable, TypeVar

from bucketstui.errors import UnknownSortTypeError
from bucketstui.services.filtering import get_field

T = TypeVar("T")
Comparator = Callable[[Any, Any], int]


class SortType(str, Enum):
    STRING = "string"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


def compare_strings(a: Any, b: Any) -> int:
    """Case-sensitive, code-point comparison of the values as strings."""
    a, b = str(a), str(b)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


COMPARATORS: dict[SortType, Comparator] = {
    SortType.STRING: compare_strings,
}


def get_comparator(sort_type: SortType) -> Comparator:
    try:
        return COMPARATORS[sort_type]
    except KeyError:
        raise UnknownSortTypeError(f"No comparator registered for sort type '{sort_type}'") from None


def compare(a: Any, b: Any, sort_key: str, sort_type: SortType = SortType.STRING) -> int:
    """Compare two records by their ``sort_key`` field."""
    comparator = get_comparator(sort_type)
    return comparator(get_field(a, sort_key), get_field(b, sort_key))


def sort_list(
    items: Iterable[T],
    sort_key: str,
    direction: SortDirection = SortDirection.ASCENDING,
    sort_type: SortType = SortType.STRING,
) -> list[T]:
    """Return a stably sorted copy of ``items``.

    Descending order still keeps equal items in their original relative order.
    """
    comparator = get_comparator(sort_type)
    key = cmp_to_key(lambda a, b: comparator(get_field(a, sort_key), get_field(b, sort_key)))
    return sorted(items, key=key, reverse=direction == SortDirection.DESCENDING)
