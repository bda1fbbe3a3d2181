from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from pydantic import TypeAdapter, ValidationError

from app.core.errors import MalformedFilter
from app.schemas.query import FilterClause, QueryRequest

from .descriptors import FieldDescriptorTable
from .paging import paginate, validate_page
from .predicates import FilterCriterion, compile_filters
from .search import search_predicate
from .sorting import resolve_sort

_LOG = logging.getLogger("app.query")

_FILTER_LIST = TypeAdapter(list[FilterClause])

RecordSource = Callable[[], Iterable[Any]]


def parse_filter_description(raw: str | None) -> list[FilterCriterion]:
    """Parse ``[{"PropertyName": ..., "Operator": ..., "Value": ...}]``."""
    if raw is None or not raw.strip():
        return []
    try:
        clauses = _FILTER_LIST.validate_json(raw)
    except ValidationError as exc:
        raise MalformedFilter(exc.errors(include_url=False)[0].get("msg", "invalid filter"))
    return [FilterCriterion(field_name=c.field, operator=c.op, value=c.value) for c in clauses]


def run_query(request: QueryRequest, table: FieldDescriptorTable, source: RecordSource) -> list[Any]:
    """Validate, filter, search, sort and paginate one record set.

    Everything that can reject the request runs before ``source`` is called,
    so a rejected query never reaches the store.
    """
    validate_page(request.page_number, request.page_size)
    criteria = parse_filter_description(request.filters)
    predicate = compile_filters(criteria, table)
    matches = search_predicate(request.search_term, table)
    order = resolve_sort(request.sort_field, request.sort_order, table)

    survivors = [record for record in source() if predicate(record) and matches(record)]
    if order is not None:
        survivors = order.apply(survivors)
    page = paginate(survivors, request.page_number, request.page_size)
    _LOG.debug(
        "query %s filters=%d search=%s sort=%s matched=%d page=%d/%d returned=%d",
        table.record_type,
        len(criteria),
        bool(request.search_term),
        order.field if order is not None else None,
        len(survivors),
        request.page_number,
        request.page_size,
        len(page),
    )
    return page
