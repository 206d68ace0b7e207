"""In-memory payment repository for tests and local runs."""

from typing import Dict, List, Optional

from components.payment import schemas
from components.payment.repository import (
    Clock,
    PaymentRepository,
    new_payment_id,
    parse_payment_id,
    utcnow,
)


class InMemoryPaymentRepository(PaymentRepository):
    """Repository keeping payments in a dict keyed by id.

    Deleted payments stay in the dict with ``deleted_at`` set, exactly as
    the database-backed repository keeps their rows.
    """

    def __init__(self, clock: Clock = utcnow, online: bool = True):
        self.clock = clock
        self.online = online
        self.payments: Dict[str, schemas.Payment] = {}

    async def is_online(self) -> bool:
        return self.online

    def _live(self, payment_id: str) -> Optional[schemas.Payment]:
        payment = self.payments.get(parse_payment_id(payment_id))
        if payment is None or payment.deleted_at is not None:
            return None
        return payment

    async def create(self, payment: schemas.PaymentCreate) -> schemas.Payment:
        now = self.clock()
        stored = schemas.Payment(
            id=new_payment_id(),
            created_at=now,
            updated_at=now,
            **payment.model_dump(),
        )
        self.payments[stored.id] = stored
        return stored.model_copy(deep=True)

    async def get(self, payment_id: str) -> Optional[schemas.Payment]:
        payment = self._live(payment_id)
        return payment.model_copy(deep=True) if payment else None

    async def list(self) -> List[schemas.Payment]:
        return [
            p.model_copy(deep=True) for p in self.payments.values() if p.deleted_at is None
        ]

    async def update(
        self, payment_id: str, payment: schemas.PaymentCreate
    ) -> Optional[schemas.Payment]:
        existing = self._live(payment_id)
        if existing is None:
            return None
        stored = schemas.Payment(
            id=existing.id,
            created_at=existing.created_at,
            updated_at=self.clock(),
            **payment.model_dump(),
        )
        self.payments[stored.id] = stored
        return stored.model_copy(deep=True)

    async def delete(self, payment_id: str) -> bool:
        existing = self._live(payment_id)
        if existing is None:
            return False
        existing.deleted_at = self.clock()
        return True
