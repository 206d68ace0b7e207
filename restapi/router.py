"""Application configuration and router setup."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import fastapi

from components.core.config import get_settings
from components.core.database import DatabaseManager
from components.core.logging import configure_logging
from components.payment.repository import PaymentRepository, SQLAlchemyPaymentRepository
from restapi import exception_handlers, middleware
from restapi.endpoints import health_check, payments

logger = logging.getLogger(__name__)


def create_store(database_url: Optional[str] = None) -> PaymentRepository:
    """Build the database-backed payments store from settings."""
    return SQLAlchemyPaymentRepository(DatabaseManager(url=database_url))


def create_app(store: Optional[PaymentRepository] = None) -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(get_settings().LOG_LEVEL)
    if store is None:
        store = create_store()

    @asynccontextmanager
    async def lifespan(app: fastapi.FastAPI):
        await store.connect()
        logger.info("payments store ready")
        yield
        await store.close()

    app = fastapi.FastAPI(
        title="Dojo Payments",
        description="CRUD API over payments",
        version="1.0.0",
        lifespan=lifespan,
    )

    for exc_class, handler in exception_handlers.EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    middleware.install(app)

    # Include routers
    app.include_router(health_check.create_router(store))
    app.include_router(payments.create_router(store))

    return app
