"""Case-insensitive substring filtering over (possibly nested) record fields.

Search keys are dotted paths. A segment ending in ``[]`` fans out over a
sequence, so ``"labels[].name"`` reads the ``name`` of every label.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Sequence, TypeVar

T = TypeVar("T")

SEQUENCE_MARKER = "[]"


def get_field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def resolve_path(item: Any, path: str) -> Iterator[Any]:
    """Yield every value found at ``path`` on ``item``."""
    values = [item]
    for segment in path.split("."):
        fan_out = segment.endswith(SEQUENCE_MARKER)
        name = segment[: -len(SEQUENCE_MARKER)] if fan_out else segment

        next_values = []
        for value in values:
            field = get_field(value, name)
            if field is None:
                continue
            if fan_out:
                if isinstance(field, (str, bytes)):
                    continue
                next_values.extend(field)
            else:
                next_values.append(field)
        values = next_values

    yield from (value for value in values if value is not None)


def matches(item: Any, search_term: str, search_keys: Sequence[str]) -> bool:
    term = search_term.lower()
    return any(term in str(value).lower() for key in search_keys for value in resolve_path(item, key))


def filter_list(search_term: str, search_keys: Sequence[str], items: Iterable[T]) -> list[T]:
    """Keep the items whose fields at ``search_keys`` contain ``search_term``."""
    if not search_term:
        return list(items)
    return [item for item in items if matches(item, search_term, search_keys)]
