from __future__ import annotations

import logging
import uuid
from typing import Any, Protocol, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import Session, selectinload

from app.core.errors import InvalidPayload
from app.services.query.descriptors import FieldDescriptorTable

from .patching import _patched_changes
from .payloads import MODE_PATCH, _sanitize_payload
from .serialization import _row_to_dict

_LOG = logging.getLogger("app.entities")


class EntityStore(Protocol):
    def fetch_all(self, include: Sequence[str] = ()) -> list[Any]:
        ...

    def fetch_by_id(self, record_id: uuid.UUID, include: Sequence[str] = ()) -> Any | None:
        ...

    def insert(self, values: dict[str, Any]) -> uuid.UUID:
        ...

    def replace(self, record_id: uuid.UUID, values: dict[str, Any]) -> bool:
        ...

    def apply_patch(self, record_id: uuid.UUID, document: Any) -> bool:
        ...

    def remove(self, record_id: uuid.UUID) -> bool:
        ...


def _integrity_error(exc: IntegrityError) -> InvalidPayload:
    return InvalidPayload("Data constraint violated", {"error": str(exc.orig)})


class SqlAlchemyEntityStore:
    """Keyed record access for one model over a request-scoped session.

    Each mutation commits on its own; concurrent writers are not coordinated
    and the last commit wins.
    """

    def __init__(self, db: Session, model: type, table: FieldDescriptorTable):
        self.db = db
        self.model = model
        self.table = table

    def _load_options(self, include: Sequence[str]) -> list[Any]:
        return [selectinload(getattr(self.model, name)) for name in include]

    def _retrieval_order(self) -> list[Any]:
        order = []
        created_at = getattr(self.model, "created_at", None)
        if created_at is not None:
            order.append(created_at.asc())
        order.extend(column.asc() for column in sa_inspect(self.model).primary_key)
        return order

    def fetch_all(self, include: Sequence[str] = ()) -> list[Any]:
        query = self.db.query(self.model).options(*self._load_options(include))
        return query.order_by(*self._retrieval_order()).all()

    def fetch_by_id(self, record_id: uuid.UUID, include: Sequence[str] = ()) -> Any | None:
        return self.db.get(self.model, record_id, options=self._load_options(include))

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise _integrity_error(exc)

    def insert(self, values: dict[str, Any]) -> uuid.UUID:
        row = self.model(**values)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        _LOG.info("created %s id=%s", self.table.record_type, row.id)
        return row.id

    def replace(self, record_id: uuid.UUID, values: dict[str, Any]) -> bool:
        row = self.db.get(self.model, record_id)
        if row is None:
            return False
        for key, value in values.items():
            setattr(row, key, value)
        self.db.add(row)
        self._commit()
        _LOG.info("replaced %s id=%s", self.table.record_type, record_id)
        return True

    def apply_patch(self, record_id: uuid.UUID, document: Any) -> bool:
        row = self.db.get(self.model, record_id)
        if row is None:
            return False
        changes = _patched_changes(_row_to_dict(row), document, self.table)
        values = _sanitize_payload(self.model, self.table, changes, mode=MODE_PATCH)
        for key, value in values.items():
            setattr(row, key, value)
        self.db.add(row)
        self._commit()
        _LOG.info("patched %s id=%s fields=%s", self.table.record_type, record_id, ",".join(sorted(values)))
        return True

    def remove(self, record_id: uuid.UUID) -> bool:
        row = self.db.get(self.model, record_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        _LOG.info("deleted %s id=%s", self.table.record_type, record_id)
        return True
