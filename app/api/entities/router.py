from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import require_entitlement
from app.db.session import get_db
from app.schemas.query import CreatedResponse, QueryRequest, StatusResponse

from .catalogue import ENTITY_DEFINITIONS, EntityDefinition, table_for
from .service import EntityService
from .store import SqlAlchemyEntityStore


def build_entity_router(definition: EntityDefinition) -> APIRouter:
    table = table_for(definition)
    router = APIRouter()

    def get_service(db: Session = Depends(get_db)) -> EntityService:
        return EntityService(definition, table, SqlAlchemyEntityStore(db, definition.model, table))

    can_create = [Depends(require_entitlement(definition.name, "Create"))]
    can_read = [Depends(require_entitlement(definition.name, "Read"))]
    can_update = [Depends(require_entitlement(definition.name, "Update"))]
    can_delete = [Depends(require_entitlement(definition.name, "Delete"))]

    @router.post("", response_model=CreatedResponse, dependencies=can_create)
    def create_record(payload: Any = Body(default=None), service: EntityService = Depends(get_service)):
        return {"id": str(service.create(payload))}

    @router.get("", dependencies=can_read)
    def list_records(
        filters: str | None = Query(default=None),
        search_term: str | None = Query(default=None, alias="searchTerm"),
        page_number: int = Query(default=settings.DEFAULT_PAGE_NUMBER, alias="pageNumber"),
        page_size: int = Query(default=settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
        sort_field: str | None = Query(default=None, alias="sortField"),
        sort_order: str = Query(default="asc", alias="sortOrder"),
        service: EntityService = Depends(get_service),
    ) -> list[dict[str, Any]]:
        request = QueryRequest(
            filters=filters,
            search_term=search_term,
            sort_field=sort_field,
            sort_order=sort_order,
            page_number=page_number,
            page_size=page_size,
        )
        return service.get(request)

    @router.get("/{record_id}", dependencies=can_read)
    def get_record(record_id: uuid.UUID, service: EntityService = Depends(get_service)) -> dict[str, Any]:
        return service.get_by_id(record_id)

    @router.put("/{record_id}", response_model=StatusResponse, dependencies=can_update)
    def replace_record(
        record_id: uuid.UUID,
        payload: Any = Body(default=None),
        service: EntityService = Depends(get_service),
    ):
        return {"status": service.update(record_id, payload)}

    @router.patch("/{record_id}", response_model=StatusResponse, dependencies=can_update)
    def patch_record(
        record_id: uuid.UUID,
        document: Any = Body(default=None),
        service: EntityService = Depends(get_service),
    ):
        return {"status": service.patch(record_id, document)}

    @router.delete("/{record_id}", response_model=StatusResponse, dependencies=can_delete)
    def delete_record(record_id: uuid.UUID, service: EntityService = Depends(get_service)):
        return {"status": service.delete(record_id)}

    return router


router = APIRouter()
for _definition in ENTITY_DEFINITIONS:
    router.include_router(build_entity_router(_definition), prefix=f"/{_definition.route}", tags=[_definition.name])
