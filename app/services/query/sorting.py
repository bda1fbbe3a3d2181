from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from app.core.errors import InvalidSortDirection

from .descriptors import FieldDescriptor, FieldDescriptorTable
from .values import ordering_key

SORT_DIRECTIONS = ("asc", "desc")


def parse_direction(direction: str | None) -> bool:
    """Return ``True`` for a descending sort. An absent direction means ``asc``."""
    if direction is None or direction == "":
        return False
    normalized = str(direction).strip().lower()
    if normalized not in SORT_DIRECTIONS:
        raise InvalidSortDirection(direction)
    return normalized == "desc"


def _natural_key(descriptor: FieldDescriptor) -> Callable[[Any], Any]:
    access = descriptor.accessor
    kind = descriptor.kind

    def _key(record: Any) -> tuple[bool, Any]:
        # Missing values order before any present value.
        value = ordering_key(kind, access(record))
        if value is None:
            return (False, 0)
        return (True, value)

    return _key


@dataclass(frozen=True)
class SortOrder:
    field: str
    descending: bool
    key: Callable[[Any], Any]

    def apply(self, records: Sequence[Any]) -> list[Any]:
        # sorted() is stable for reverse=True as well, ties keep retrieval order.
        return sorted(records, key=self.key, reverse=self.descending)

    def compare(self, a: Any, b: Any) -> int:
        left, right = self.key(a), self.key(b)
        result = (left > right) - (left < right)
        return -result if self.descending else result


def resolve_sort(field: str | None, direction: str | None, table: FieldDescriptorTable) -> SortOrder | None:
    """Build the sort stage, or ``None`` when no sort field is given.

    The direction is checked even without a field so a bad value never passes
    silently.
    """
    descending = parse_direction(direction)
    if not field:
        return None
    descriptor = table.resolve(field)
    return SortOrder(field=descriptor.name, descending=descending, key=_natural_key(descriptor))
