from __future__ import annotations

from typing import Any

from .descriptors import FieldDescriptorTable
from .predicates import Predicate, accept_all


def search_predicate(term: str | None, table: FieldDescriptorTable) -> Predicate:
    """Match records where any searchable field contains ``term``, ignoring case."""
    if not term:
        return accept_all
    needle = term.casefold()
    accessors = tuple(descriptor.accessor for descriptor in table.searchable_fields)

    def _matches(record: Any) -> bool:
        for access in accessors:
            value = access(record)
            if value is not None and needle in str(value).casefold():
                return True
        return False

    return _matches
