"""Structured JSON logging with a per-request correlation id."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from components.core.config import get_settings


request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


class RequestIdFilter(logging.Filter):
    """Inject the current request id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger to emit one JSON object per line."""

    handler = logging.StreamHandler(sys.stdout)
    request_filter = RequestIdFilter()
    handler.addFilter(request_filter)
    handler.setFormatter(
        JsonFormatter("%(asctime)s %(levelname)s %(name)s %(request_id)s %(message)s")
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level or get_settings().LOG_LEVEL)

    # Uvicorn's access log duplicates the request log middleware.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
