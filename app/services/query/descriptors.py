from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.sql.sqltypes import Boolean, Date, DateTime, Enum, Float, Integer, Numeric, String

from app.core.errors import UnknownField

from .values import ValueKind, normalize_record_value

Accessor = Callable[[Any], Any]


def normalize_field_name(name: str) -> str:
    """``VenueId`` / ``venueId`` / ``venue-id`` -> ``venue_id``."""
    raw = (name or "").strip().replace("-", "_")
    if not raw:
        return ""
    chars: list[str] = []
    for index, ch in enumerate(raw):
        if ch.isupper() and index > 0 and raw[index - 1].isalnum() and not raw[index - 1].isupper():
            chars.append("_")
        chars.append(ch.lower())
    return "".join(chars)


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    kind: ValueKind
    accessor: Accessor = field(compare=False)
    searchable: bool = False
    enum_type: type[enum.Enum] | None = None


class FieldDescriptorTable:
    """Read-only field metadata for one record type."""

    def __init__(self, record_type: str, descriptors: Iterable[FieldDescriptor]):
        fields: dict[str, FieldDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in fields:
                raise ValueError(f"Duplicate field {descriptor.name!r} for {record_type}")
            if descriptor.searchable and descriptor.kind is not ValueKind.STRING:
                raise ValueError(f"Field {descriptor.name!r} of {record_type} is searchable but not a string")
            fields[descriptor.name] = descriptor
        aliases: dict[str, str] = {}
        for name in fields:
            normalized = normalize_field_name(name)
            if normalized and normalized not in fields:
                aliases.setdefault(normalized, name)
        self._record_type = record_type
        self._fields: Mapping[str, FieldDescriptor] = MappingProxyType(fields)
        self._aliases: Mapping[str, str] = MappingProxyType(aliases)
        self._searchable = tuple(d for d in fields.values() if d.searchable)

    @property
    def record_type(self) -> str:
        return self._record_type

    @property
    def fields(self) -> Mapping[str, FieldDescriptor]:
        return self._fields

    @property
    def searchable_fields(self) -> tuple[FieldDescriptor, ...]:
        return self._searchable

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, name: str) -> FieldDescriptor | None:
        descriptor = self._fields.get(name)
        if descriptor is not None:
            return descriptor
        normalized = normalize_field_name(name)
        canonical = self._aliases.get(normalized, normalized)
        return self._fields.get(canonical)

    def resolve(self, name: str) -> FieldDescriptor:
        descriptor = self.get(name)
        if descriptor is None:
            raise UnknownField(name, self._record_type)
        return descriptor


def _column_kind(column: Any) -> tuple[ValueKind | None, type[enum.Enum] | None]:
    col_type = column.type
    if isinstance(col_type, Boolean):
        return ValueKind.BOOLEAN, None
    if isinstance(col_type, Enum):
        return ValueKind.ENUMERATION, col_type.enum_class
    if isinstance(col_type, Integer):
        return ValueKind.INTEGER, None
    if isinstance(col_type, (Numeric, Float)):
        return ValueKind.DECIMAL, None
    if isinstance(col_type, (DateTime, Date)):
        return ValueKind.DATETIME, None
    if isinstance(col_type, String):
        return ValueKind.STRING, None
    try:
        python_type = col_type.python_type
    except NotImplementedError:
        python_type = None
    if python_type is uuid.UUID:
        return ValueKind.IDENTIFIER, None
    return None, None


def _column_accessor(key: str, kind: ValueKind) -> Accessor:
    def _access(record: Any) -> Any:
        return normalize_record_value(kind, getattr(record, key))

    return _access


def build_descriptor_table(model: type, searchable: Iterable[str] | None = None) -> FieldDescriptorTable:
    """Describe the mapped columns of ``model``.

    String columns are searchable unless ``searchable`` names an explicit subset.
    Columns whose type has no value kind (JSON and the like) are left out.
    """
    mapper = sa_inspect(model)
    kinds: dict[str, tuple[ValueKind, type[enum.Enum] | None]] = {}
    for column in mapper.columns:
        kind, enum_type = _column_kind(column)
        if kind is None:
            continue
        kinds[column.key] = (kind, enum_type)

    if searchable is None:
        searchable_names = {name for name, (kind, _) in kinds.items() if kind is ValueKind.STRING}
    else:
        searchable_names = set(searchable)
        unknown = searchable_names - set(kinds)
        if unknown:
            raise ValueError(f"Unknown searchable fields for {model.__name__}: {', '.join(sorted(unknown))}")

    return FieldDescriptorTable(
        model.__name__,
        (
            FieldDescriptor(
                name=name,
                kind=kind,
                accessor=_column_accessor(name, kind),
                searchable=name in searchable_names,
                enum_type=enum_type,
            )
            for name, (kind, enum_type) in kinds.items()
        ),
    )


class DescriptorRegistry:
    """Descriptor tables keyed by record type, filled once at startup."""

    def __init__(self):
        self._tables: dict[type, FieldDescriptorTable] = {}
        self._frozen = False

    def register(self, model: type, searchable: Iterable[str] | None = None) -> FieldDescriptorTable:
        if self._frozen:
            raise RuntimeError("Descriptor registry is frozen")
        if model in self._tables:
            raise ValueError(f"{model.__name__} is already registered")
        table = build_descriptor_table(model, searchable)
        self._tables[model] = table
        return table

    def freeze(self) -> None:
        self._frozen = True

    def table_for(self, model: type) -> FieldDescriptorTable:
        try:
            return self._tables[model]
        except KeyError:
            raise LookupError(f"No descriptor table registered for {model.__name__}") from None

    def __contains__(self, model: object) -> bool:
        return model in self._tables

    def __len__(self) -> int:
        return len(self._tables)
