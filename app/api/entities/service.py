from __future__ import annotations

import uuid
from typing import Any

from app.core.errors import EntityNotFound, PatchDocumentMissing
from app.schemas.query import QueryRequest
from app.services.query.descriptors import FieldDescriptorTable
from app.services.query.engine import run_query

from .catalogue import EntityDefinition
from .payloads import _prepare_create_payload, _prepare_replace_payload
from .serialization import _row_to_dict
from .store import EntityStore


class EntityService:
    """Create/read/list/replace/patch/delete for one entity definition."""

    def __init__(self, definition: EntityDefinition, table: FieldDescriptorTable, store: EntityStore):
        self.definition = definition
        self.table = table
        self.store = store

    def _not_found(self, record_id: uuid.UUID) -> EntityNotFound:
        return EntityNotFound(self.definition.name, record_id)

    def get(self, request: QueryRequest) -> list[dict[str, Any]]:
        include = self.definition.include
        rows = run_query(request, self.table, lambda: self.store.fetch_all(include))
        return [_row_to_dict(row, include) for row in rows]

    def get_by_id(self, record_id: uuid.UUID) -> dict[str, Any]:
        include = self.definition.include
        row = self.store.fetch_by_id(record_id, include)
        if row is None:
            raise self._not_found(record_id)
        return _row_to_dict(row, include)

    def create(self, payload: Any) -> uuid.UUID:
        values = _prepare_create_payload(self.definition.model, self.table, payload)
        return self.store.insert(values)

    def update(self, record_id: uuid.UUID, payload: Any) -> bool:
        values = _prepare_replace_payload(
            self.definition.model,
            self.table,
            record_id,
            payload,
            ignore=self.definition.include,
        )
        if not self.store.replace(record_id, values):
            raise self._not_found(record_id)
        return True

    def patch(self, record_id: uuid.UUID, document: Any) -> bool:
        if document is None:
            raise PatchDocumentMissing()
        if not self.store.apply_patch(record_id, document):
            raise self._not_found(record_id)
        return True

    def delete(self, record_id: uuid.UUID) -> bool:
        if not self.store.remove(record_id):
            raise self._not_found(record_id)
        return True
