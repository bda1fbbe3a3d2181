from __future__ import annotations

import enum
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable

from sqlalchemy.inspection import inspect as sa_inspect


def _serialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _serialize_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]
    if isinstance(value, datetime):
        # Naive values are stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc).isoformat()
        return value.astimezone(timezone.utc).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, enum.Enum):
        return value.value
    return value


def _columns_map(model: type) -> dict[str, Any]:
    mapper = sa_inspect(model)
    return {column.key: column for column in mapper.columns}


def _row_to_dict(row: Any, include: Iterable[str] = ()) -> dict[str, Any]:
    mapper = sa_inspect(type(row))
    payload = {column.key: _serialize_value(getattr(row, column.key)) for column in mapper.columns}
    for name in include:
        related = getattr(row, name)
        if related is None:
            payload[name] = None
        elif isinstance(related, (list, tuple, set)):
            payload[name] = [_row_to_dict(item) for item in related]
        else:
            payload[name] = _row_to_dict(related)
    return payload
