"""Root endpoint reporting whether the database can be reached."""

from datetime import datetime, timezone

from fastapi import APIRouter

from components.core import schemas
from components.payment.repository import PaymentRepository


def create_router(store: PaymentRepository) -> APIRouter:
    """Build the status router around the given store."""
    router = APIRouter(
        tags=["services"],
        responses={200: {"description": "Service is up"}},
    )

    @router.get("/", response_model=schemas.RootStatus)
    async def root_status() -> schemas.RootStatus:
        """Check the status of the service and its database."""
        if await store.is_online():
            database_status = schemas.DATABASE_STATUS_ONLINE
        else:
            database_status = schemas.DATABASE_STATUS_OFFLINE
        return schemas.RootStatus(
            database_status=database_status,
            time=datetime.now(timezone.utc),
        )

    return router
