"""Payment endpoints for the API."""

import logging
from typing import List

from fastapi import APIRouter, Response, status

from components.core.exceptions import PaymentNotFoundError
from components.payment import schemas
from components.payment.repository import PaymentRepository
from components.payment.validation import validate

BASE_PATH = "/payments"
NOT_FOUND_MESSAGE = "payment not found"

logger = logging.getLogger(__name__)


def create_router(store: PaymentRepository) -> APIRouter:
    """Build the Payments API router around the given store."""
    router = APIRouter(
        prefix=BASE_PATH,
        tags=["payments"],
        responses={404: {"description": "Not found"}},
    )

    @router.post("", response_model=schemas.Payment, status_code=status.HTTP_201_CREATED)
    async def create_payment(payment: schemas.PaymentCreate):
        """Create a new payment."""
        validate(payment)
        created = await store.create(payment)
        logger.info("created payment %s", created.id)
        return created

    @router.get("", response_model=List[schemas.Payment])
    async def list_payments():
        """Get all payments that have not been deleted."""
        return await store.list()

    @router.get("/{payment_id}", response_model=schemas.Payment)
    async def get_payment(payment_id: str):
        """Get a specific payment by ID."""
        payment = await store.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(NOT_FOUND_MESSAGE)
        return payment

    @router.put("/{payment_id}", response_model=schemas.Payment)
    async def update_payment(payment_id: str, payment: schemas.PaymentCreate):
        """
        Replace a payment.

        The ID in the path always wins over any ID sent in the body, and the
        creation date of the payment is kept.
        """
        validate(payment)
        updated = await store.update(payment_id, payment)
        if updated is None:
            raise PaymentNotFoundError(NOT_FOUND_MESSAGE)
        logger.info("updated payment %s", payment_id)
        return updated

    @router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_payment(payment_id: str):
        """Delete a payment. It stays stored but is no longer served."""
        if not await store.delete(payment_id):
            raise PaymentNotFoundError(NOT_FOUND_MESSAGE)
        logger.info("deleted payment %s", payment_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
