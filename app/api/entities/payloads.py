from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.sql.sqltypes import Date, DateTime

from app.core.errors import IdMismatch, InvalidPayload, UnknownField
from app.services.query.descriptors import FieldDescriptorTable
from app.services.query.values import ValueKind, convert_value

from .serialization import _columns_map

SYSTEM_FIELDS = {"id", "created_at", "updated_at"}
ID_KEYS = ("id", "Id", "ID")

MODE_CREATE = "create"
MODE_REPLACE = "replace"
MODE_PATCH = "patch"


def _column_value(descriptor, column: Any, raw: Any) -> Any:
    value = convert_value(descriptor.kind, raw, field=descriptor.name, enum_type=descriptor.enum_type)
    if descriptor.kind is ValueKind.DATETIME and isinstance(column.type, Date) and not isinstance(column.type, DateTime):
        return value.date()
    return value


def _scalar_default(column: Any) -> tuple[bool, Any]:
    default = column.default
    if default is None or not getattr(default, "is_scalar", False):
        return False, None
    return True, default.arg


def _sanitize_payload(model: type, table: FieldDescriptorTable, payload: Any, *, mode: str) -> dict[str, Any]:
    """Validate a JSON body against ``model`` and convert it to column values.

    ``create`` leaves absent fields to column defaults, ``replace`` resets absent
    optional fields and ``patch`` only touches the fields present.
    """
    if not isinstance(payload, dict):
        raise InvalidPayload("Request body must be a JSON object")

    columns = _columns_map(model)
    cleaned: dict[str, Any] = {}
    for key, raw in payload.items():
        descriptor = table.get(key)
        name = descriptor.name if descriptor is not None else key
        if name not in columns:
            raise UnknownField(key, table.record_type)
        if name in SYSTEM_FIELDS:
            raise InvalidPayload(f'Field "{name}" is managed by the server', {"field": name})
        column = columns[name]
        if raw is None:
            if not column.nullable:
                raise InvalidPayload(f'Field "{name}" cannot be null', {"field": name})
            cleaned[name] = None
            continue
        cleaned[name] = _column_value(descriptor, column, raw) if descriptor is not None else raw

    if mode == MODE_PATCH:
        return cleaned

    missing: list[str] = []
    for name, column in columns.items():
        if name in SYSTEM_FIELDS or name in cleaned:
            continue
        if mode == MODE_REPLACE:
            has_default, default = _scalar_default(column)
            if has_default:
                cleaned[name] = default
                continue
            if column.nullable:
                cleaned[name] = None
                continue
        elif column.nullable or column.default is not None or column.server_default is not None:
            continue
        missing.append(name)
    if missing:
        raise InvalidPayload("Missing required fields: " + ", ".join(sorted(missing)), {"fields": sorted(missing)})
    return cleaned


def _split_body_id(payload: Any) -> tuple[Any, dict[str, Any]]:
    if not isinstance(payload, dict):
        raise InvalidPayload("Request body must be a JSON object")
    body = dict(payload)
    body_id = None
    for key in ID_KEYS:
        if key in body:
            value = body.pop(key)
            if body_id is None:
                body_id = value
    return body_id, body


def _ensure_ids_match(path_id: uuid.UUID, body_id: Any) -> None:
    try:
        parsed = uuid.UUID(str(body_id)) if body_id is not None else None
    except ValueError:
        parsed = None
    if parsed != path_id:
        raise IdMismatch(path_id, body_id)


def _prepare_create_payload(model: type, table: FieldDescriptorTable, payload: Any) -> dict[str, Any]:
    body_id, body = _split_body_id(payload)
    if body_id is not None:
        raise InvalidPayload('Field "id" is managed by the server', {"field": "id"})
    return _sanitize_payload(model, table, body, mode=MODE_CREATE)


def _prepare_replace_payload(
    model: type,
    table: FieldDescriptorTable,
    record_id: uuid.UUID,
    payload: Any,
    *,
    ignore: tuple[str, ...] = (),
) -> dict[str, Any]:
    body_id, body = _split_body_id(payload)
    _ensure_ids_match(record_id, body_id)
    # A record read back from GET carries timestamps and included relations.
    for key in list(body):
        descriptor = table.get(key)
        name = descriptor.name if descriptor is not None else key
        if name in ("created_at", "updated_at") or name in ignore:
            body.pop(key)
    return _sanitize_payload(model, table, body, mode=MODE_REPLACE)
