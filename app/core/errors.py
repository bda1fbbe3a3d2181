from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.request_context import current_request_id

_LOG = logging.getLogger("app.errors")


class ErrorCode(str, Enum):
    INVALID_PAGE = "INVALID_PAGE"
    INVALID_SORT_DIRECTION = "INVALID_SORT_DIRECTION"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    UNSUPPORTED_OPERATOR = "UNSUPPORTED_OPERATOR"
    VALUE_CONVERSION_FAILED = "VALUE_CONVERSION_FAILED"
    MALFORMED_FILTER = "MALFORMED_FILTER"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    PATCH_DOCUMENT_MISSING = "PATCH_DOCUMENT_MISSING"
    ID_MISMATCH = "ID_MISMATCH"
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"


class QueryEngineError(Exception):
    code: ErrorCode
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidPage(QueryEngineError):
    code = ErrorCode.INVALID_PAGE

    def __init__(self, page_number: Any, page_size: Any, message: str | None = None):
        if message is None:
            message = "Page size invalid" if page_size < 1 else "Page number invalid"
        super().__init__(message, {"page_number": page_number, "page_size": page_size})


class InvalidSortDirection(QueryEngineError):
    code = ErrorCode.INVALID_SORT_DIRECTION

    def __init__(self, direction: Any):
        super().__init__("Invalid sort order. Use 'asc' or 'desc'", {"sort_order": direction})


class UnknownField(QueryEngineError):
    code = ErrorCode.UNKNOWN_FIELD

    def __init__(self, field: str, record_type: str | None = None):
        details: dict[str, Any] = {"field": field}
        if record_type:
            details["record_type"] = record_type
        super().__init__(f'Unknown field "{field}"', details)


class UnsupportedOperator(QueryEngineError):
    code = ErrorCode.UNSUPPORTED_OPERATOR

    def __init__(self, operator: str, field: str, kind: str | None = None):
        if kind is None:
            message = f'Unsupported operator "{operator}" for field "{field}"'
        else:
            message = f'Operator "{operator}" is not valid for field "{field}" ({kind})'
        super().__init__(message, {"operator": operator, "field": field, "kind": kind})


class ValueConversionFailed(QueryEngineError):
    code = ErrorCode.VALUE_CONVERSION_FAILED

    def __init__(self, field: str, kind: str, value: Any):
        super().__init__(
            f'Invalid value for field "{field}" ({kind})',
            {"field": field, "kind": kind, "value": value},
        )


class MalformedFilter(QueryEngineError):
    code = ErrorCode.MALFORMED_FILTER

    def __init__(self, reason: str):
        super().__init__("Filter description is malformed", {"reason": reason})


class InvalidPayload(QueryEngineError):
    code = ErrorCode.INVALID_PAYLOAD


class PatchDocumentMissing(QueryEngineError):
    code = ErrorCode.PATCH_DOCUMENT_MISSING

    def __init__(self):
        super().__init__("Patch document is missing")


class IdMismatch(QueryEngineError):
    code = ErrorCode.ID_MISMATCH

    def __init__(self, path_id: Any, body_id: Any):
        super().__init__("Mismatched Id", {"path_id": str(path_id), "body_id": str(body_id) if body_id else None})


class EntityNotFound(QueryEngineError):
    code = ErrorCode.ENTITY_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, record_type: str, record_id: Any):
        super().__init__("No data found", {"record_type": record_type, "id": str(record_id)})


class InvalidRequest(QueryEngineError):
    code = ErrorCode.INVALID_REQUEST


PAGE_PARAMS = {"pageNumber": "Page number invalid", "pageSize": "Page size invalid"}


def _from_validation_error(request: Request, exc: RequestValidationError) -> QueryEngineError:
    """Rephrase FastAPI's parameter validation failure as one of our 400s."""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    details = {"errors": errors}
    loc = errors[0]["loc"] if errors else []
    if loc[:1] == ["query"] and loc[-1] in PAGE_PARAMS:
        params = request.query_params
        error = InvalidPage(params.get("pageNumber"), params.get("pageSize"), PAGE_PARAMS[loc[-1]])
        error.details.update(details)
        return error
    if loc[:1] == ["body"]:
        return InvalidPayload("Request body is invalid", details)
    return InvalidRequest("Request parameters are invalid", details)


def _error_response(request: Request, exc: QueryEngineError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None) or current_request_id()
    _LOG.info("%s %s rejected code=%s", request.method, request.url.path, exc.code.value)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "code": exc.code.value,
            "details": exc.details,
            "request_id": request_id,
        },
    )


async def query_engine_error_handler(request: Request, exc: QueryEngineError) -> JSONResponse:
    return _error_response(request, exc)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(request, _from_validation_error(request, exc))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QueryEngineError, query_engine_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
