from __future__ import annotations

import logging
import re
from contextvars import ContextVar
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request

REQUEST_ID_HEADER = "X-Request-ID"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s]: %(message)s"

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")
_ENTITY_PATH_RE = re.compile(r"^/api/(?P<entity>[a-z]+)(?:/|$)")
_LOG = logging.getLogger("app.http")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

RESPONSE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def current_request_id() -> str | None:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Stamps every record with the id of the request being served, or ``-``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())


def _accepted_request_id(raw: str | None) -> str:
    value = str(raw or "").strip()
    if _REQUEST_ID_RE.fullmatch(value):
        return value
    return uuid4().hex


def _entity_segment(path: str) -> str:
    match = _ENTITY_PATH_RE.match(path)
    return match.group("entity") if match else "-"


def install_request_context(app: FastAPI) -> None:
    @app.middleware("http")
    async def _request_context(request: Request, call_next):
        request_id = _accepted_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = _request_id.set(request_id)
        started_at = perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            _LOG.exception(
                "%s %s failed entity=%s", request.method, request.url.path, _entity_segment(request.url.path)
            )
            raise
        finally:
            _request_id.reset(token)

        response.headers.update(RESPONSE_HEADERS)
        response.headers[REQUEST_ID_HEADER] = request_id
        _LOG.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "%s %s entity=%s status=%s duration_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            _entity_segment(request.url.path),
            response.status_code,
            (perf_counter() - started_at) * 1000.0,
            request_id,
        )
        return response
