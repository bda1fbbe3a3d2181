from __future__ import annotations

import enum
import re
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from app.core.errors import ValueConversionFailed


class ValueKind(str, enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    IDENTIFIER = "identifier"
    ENUMERATION = "enumeration"


# Booleans only support equality.
ORDERABLE_KINDS = frozenset(kind for kind in ValueKind if kind is not ValueKind.BOOLEAN)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_TRUE_LITERALS = {"true", "1"}
_FALSE_LITERALS = {"false", "0"}


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _convert_integer(field: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueConversionFailed(field, ValueKind.INTEGER.value, raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    text = str(raw).strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ValueConversionFailed(field, ValueKind.INTEGER.value, raw)
    return int(text)


def _convert_decimal(field: str, raw: Any) -> Decimal:
    if isinstance(raw, bool):
        raise ValueConversionFailed(field, ValueKind.DECIMAL.value, raw)
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, (int, float)):
        return Decimal(str(raw))
    text = str(raw).strip().replace(",", ".")
    if not text:
        raise ValueConversionFailed(field, ValueKind.DECIMAL.value, raw)
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        raise ValueConversionFailed(field, ValueKind.DECIMAL.value, raw)
    if not parsed.is_finite():
        raise ValueConversionFailed(field, ValueKind.DECIMAL.value, raw)
    return parsed


def _convert_boolean(field: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ValueConversionFailed(field, ValueKind.BOOLEAN.value, raw)


def _convert_datetime(field: str, raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return _to_utc(raw)
    if isinstance(raw, date):
        return datetime.combine(raw, datetime.min.time(), tzinfo=timezone.utc)
    text = str(raw).strip()
    if not text:
        raise ValueConversionFailed(field, ValueKind.DATETIME.value, raw)
    try:
        if "T" not in text and " " not in text and len(text) == 10:
            # Date-only literal -> start of that day.
            parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValueConversionFailed(field, ValueKind.DATETIME.value, raw)
    return _to_utc(parsed)


def _convert_identifier(field: str, raw: Any) -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw).strip())
    except (ValueError, AttributeError):
        raise ValueConversionFailed(field, ValueKind.IDENTIFIER.value, raw)


def _convert_enumeration(field: str, raw: Any, enum_type: type[enum.Enum] | None) -> Any:
    if enum_type is None:
        return str(raw)
    if isinstance(raw, enum_type):
        return raw
    text = str(raw).strip().lower()
    for member in enum_type:
        if member.name.lower() == text or str(member.value).lower() == text:
            return member
    raise ValueConversionFailed(field, ValueKind.ENUMERATION.value, raw)


def convert_value(kind: ValueKind, raw: Any, *, field: str, enum_type: type[enum.Enum] | None = None) -> Any:
    """Convert a filter or payload value to the Python type of ``kind``.

    Filter values always arrive as text; JSON bodies may also carry native
    numbers and booleans, which are accepted when they convert without loss.
    """
    if raw is None:
        raise ValueConversionFailed(field, kind.value, raw)
    if kind is ValueKind.STRING:
        if isinstance(raw, (dict, list)):
            raise ValueConversionFailed(field, kind.value, raw)
        return str(raw)
    if kind is ValueKind.INTEGER:
        return _convert_integer(field, raw)
    if kind is ValueKind.DECIMAL:
        return _convert_decimal(field, raw)
    if kind is ValueKind.BOOLEAN:
        return _convert_boolean(field, raw)
    if kind is ValueKind.DATETIME:
        return _convert_datetime(field, raw)
    if kind is ValueKind.IDENTIFIER:
        return _convert_identifier(field, raw)
    return _convert_enumeration(field, raw, enum_type)


def normalize_record_value(kind: ValueKind, value: Any) -> Any:
    """Bring a stored value into the comparable form ``convert_value`` produces."""
    if value is None:
        return None
    if kind is ValueKind.DECIMAL and not isinstance(value, Decimal):
        return Decimal(str(value))
    if kind is ValueKind.DATETIME:
        if isinstance(value, datetime):
            return _to_utc(value)
        if isinstance(value, date):
            return datetime.combine(value, datetime.min.time(), tzinfo=timezone.utc)
    if kind is ValueKind.IDENTIFIER and not isinstance(value, uuid.UUID):
        try:
            return uuid.UUID(str(value))
        except ValueError:
            return value
    return value


def ordering_key(kind: ValueKind, value: Any) -> Any:
    """Map a normalized value to the form ``<``/``>`` order it by.

    Identifiers order by their byte form and enumeration members by their
    serialized name, so sorting and ordering filters agree for every kind.
    """
    if value is None:
        return None
    if kind is ValueKind.IDENTIFIER:
        return value.bytes if isinstance(value, uuid.UUID) else value
    if kind is ValueKind.ENUMERATION:
        return str(getattr(value, "value", value))
    return value
