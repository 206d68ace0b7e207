"""Translate payment exceptions into HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from components.core.exceptions import (
    PaymentNotFoundError,
    PaymentValidationError,
    PaymentsBaseException,
    StoreError,
)

logger = logging.getLogger(__name__)


def describe_request_errors(exc: RequestValidationError) -> str:
    """Flatten the binder's errors into a single message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid request")
        cause = (error.get("ctx") or {}).get("error")
        if cause is not None and str(cause) not in message:
            message = f"{message}: {cause}"
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "invalid request"


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    message = describe_request_errors(exc)
    logger.info("RequestValidationError: %s", message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message},
    )


async def payment_validation_error_handler(
    request: Request,
    exc: PaymentValidationError,
) -> JSONResponse:
    logger.info("PaymentValidationError: %s", exc.message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


async def payment_not_found_handler(
    request: Request,
    exc: PaymentNotFoundError,
) -> JSONResponse:
    logger.info("PaymentNotFoundError: %s", exc.message)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.message},
    )


async def store_error_handler(
    request: Request,
    exc: StoreError,
) -> JSONResponse:
    logger.error("StoreError: %s", exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.message},
    )


async def payments_base_exception_handler(
    request: Request,
    exc: PaymentsBaseException,
) -> JSONResponse:
    logger.error("%s: %s", exc.__class__.__name__, exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.message},
    )


EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    PaymentValidationError: payment_validation_error_handler,
    PaymentNotFoundError: payment_not_found_handler,
    StoreError: store_error_handler,
    PaymentsBaseException: payments_base_exception_handler,
}
