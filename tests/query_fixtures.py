import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.models.enums import EventStatus
from app.services.query.descriptors import FieldDescriptor, FieldDescriptorTable
from app.services.query.values import ValueKind, normalize_record_value


@dataclass
class Concert:
    name: Optional[str]
    city: Optional[str] = None
    capacity: Optional[int] = None
    price: Optional[Decimal] = None
    is_sold_out: Optional[bool] = None
    starts_at: Optional[datetime] = None
    status: Optional[EventStatus] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)


def _descriptor(name: str, kind: ValueKind, searchable: bool = False, enum_type=None) -> FieldDescriptor:
    def _access(record):
        return normalize_record_value(kind, getattr(record, name))

    return FieldDescriptor(name=name, kind=kind, accessor=_access, searchable=searchable, enum_type=enum_type)


def concert_table() -> FieldDescriptorTable:
    return FieldDescriptorTable(
        "Concert",
        [
            _descriptor("id", ValueKind.IDENTIFIER),
            _descriptor("name", ValueKind.STRING, searchable=True),
            _descriptor("city", ValueKind.STRING, searchable=True),
            _descriptor("capacity", ValueKind.INTEGER),
            _descriptor("price", ValueKind.DECIMAL),
            _descriptor("is_sold_out", ValueKind.BOOLEAN),
            _descriptor("starts_at", ValueKind.DATETIME),
            _descriptor("status", ValueKind.ENUMERATION, enum_type=EventStatus),
        ],
    )
