from __future__ import annotations

from typing import Any, Sequence

from app.core.errors import InvalidPage


def validate_page(page_number: int, page_size: int) -> None:
    if page_size < 1 or page_number < 1:
        raise InvalidPage(page_number, page_size)


def paginate(records: Sequence[Any], page_number: int, page_size: int) -> list[Any]:
    skip = (page_number - 1) * page_size
    if skip >= len(records):
        return []
    return list(records[skip : skip + page_size])
