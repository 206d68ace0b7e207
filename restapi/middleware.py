"""HTTP middleware shared by every endpoint."""

import logging
import uuid
from time import perf_counter

import fastapi
from fastapi import Request

from components.core.logging import request_id_ctx

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next):
    """Tag the request with a correlation id and echo it back to the caller."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = request_id_ctx.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_ctx.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log one line per request with its outcome and latency."""
    start = perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        logger.info(
            "%s %s %s",
            request.method,
            request.url.path,
            status_code,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "latency_ms": round((perf_counter() - start) * 1000, 3),
            },
        )


def install(app: fastapi.FastAPI) -> None:
    """Install the middleware, request id outermost."""
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(request_id_middleware)
