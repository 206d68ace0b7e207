"""Repository for payment operations."""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, TypeVar

from sqlalchemy import and_, select, update
from sqlalchemy.exc import SQLAlchemyError

from components.core.database import DatabaseManager
from components.core.exceptions import InvalidPaymentIdError, StoreError
from components.payment import schemas
from components.payment.models import Payment

T = TypeVar("T")
Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_payment_id() -> str:
    """Generate an id for a payment that is about to be created."""
    return uuid.uuid4().hex


def parse_payment_id(payment_id: str) -> str:
    """Return ``payment_id`` if it is a well-formed id, raise otherwise."""
    try:
        parsed = uuid.UUID(hex=payment_id)
    except (TypeError, ValueError):
        raise InvalidPaymentIdError(payment_id) from None
    if parsed.hex != payment_id:
        raise InvalidPaymentIdError(payment_id)
    return payment_id


class PaymentRepository(ABC):
    """Store for payments with soft-delete semantics.

    Deleted payments keep their row but are invisible to every operation
    below. Operations targeting a missing payment report it through their
    return value, while malformed ids and backend failures raise ``StoreError``.
    """

    async def connect(self) -> None:
        """Prepare the backing store for use."""

    async def close(self) -> None:
        """Release the resources held by the backing store."""

    @abstractmethod
    async def is_online(self) -> bool:
        """Check whether the backing store can be reached. Never raises."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, payment: schemas.PaymentCreate) -> schemas.Payment:
        """Store a new payment and return it with its id and timestamps."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, payment_id: str) -> Optional[schemas.Payment]:
        """Get a live payment by ID."""
        raise NotImplementedError

    @abstractmethod
    async def list(self) -> List[schemas.Payment]:
        """Get all live payments, in no particular order."""
        raise NotImplementedError

    @abstractmethod
    async def update(
        self, payment_id: str, payment: schemas.PaymentCreate
    ) -> Optional[schemas.Payment]:
        """Replace a live payment, keeping its id and creation date."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, payment_id: str) -> bool:
        """Mark a live payment as deleted. Returns False if there was none."""
        raise NotImplementedError


def live():
    """Select payments that have not been deleted."""
    return Payment.deleted_at.is_(None)


def live_by_id(payment_id: str):
    """Select the payment with the given ID, unless it has been deleted."""
    return and_(Payment.id == payment_id, live())


def to_naive_utc(value: datetime) -> datetime:
    """Convert to the naive UTC form stored in DateTime columns."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def payment_values(payment: schemas.PaymentCreate) -> dict:
    """Map the replaceable fields of a payment to column values."""
    return {
        "beneficiary": payment.beneficiary.model_dump(),
        "debtor": payment.debtor.model_dump(),
        "amount": payment.amount,
        "currency": payment.currency,
        "date": to_naive_utc(payment.date),
        "description": payment.description,
    }


class SQLAlchemyPaymentRepository(PaymentRepository):
    """Repository for payments stored through SQLAlchemy."""

    def __init__(self, database: DatabaseManager, clock: Clock = utcnow):
        """Initialize repository with a database manager."""
        self.database = database
        self.clock = clock

    async def connect(self) -> None:
        await self.database.create_tables()

    async def close(self) -> None:
        await self.database.dispose()

    async def is_online(self) -> bool:
        return await self.database.ping()

    async def _run(self, context: str, operation: Awaitable[T]) -> T:
        """Await a database operation under the configured timeout."""
        try:
            return await asyncio.wait_for(operation, self.database.timeout)
        except asyncio.TimeoutError as exc:
            logger.error("%s: timed out after %ss", context, self.database.timeout)
            raise StoreError(f"{context}: operation timed out") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"{context}: {exc}") from exc

    async def create(self, payment: schemas.PaymentCreate) -> schemas.Payment:
        now = to_naive_utc(self.clock())
        db_payment = Payment(
            id=new_payment_id(),
            created_at=now,
            updated_at=now,
            deleted_at=None,
            **payment_values(payment),
        )
        return await self._run("failed to create payment", self._create(db_payment))

    async def _create(self, db_payment: Payment) -> schemas.Payment:
        async with self.database.get_db() as session:
            session.add(db_payment)
            await session.commit()
            return schemas.Payment.model_validate(db_payment)

    async def get(self, payment_id: str) -> Optional[schemas.Payment]:
        parse_payment_id(payment_id)
        return await self._run(
            f'failed to get payment with id "{payment_id}"', self._get(payment_id)
        )

    async def _get(self, payment_id: str) -> Optional[schemas.Payment]:
        async with self.database.get_db() as session:
            result = await session.execute(select(Payment).where(live_by_id(payment_id)))
            db_payment = result.scalar_one_or_none()
            if db_payment is None:
                return None
            return schemas.Payment.model_validate(db_payment)

    async def list(self) -> List[schemas.Payment]:
        return await self._run("failed to list payments", self._list())

    async def _list(self) -> List[schemas.Payment]:
        async with self.database.get_db() as session:
            result = await session.execute(select(Payment).where(live()))
            return [schemas.Payment.model_validate(p) for p in result.scalars().all()]

    async def update(
        self, payment_id: str, payment: schemas.PaymentCreate
    ) -> Optional[schemas.Payment]:
        parse_payment_id(payment_id)
        values = payment_values(payment)
        values["updated_at"] = to_naive_utc(self.clock())
        return await self._run("failed to update payment", self._update(payment_id, values))

    async def _update(self, payment_id: str, values: dict) -> Optional[schemas.Payment]:
        async with self.database.get_db() as session:
            result = await session.execute(
                update(Payment).where(live_by_id(payment_id)).values(**values)
            )
            if result.rowcount == 0:
                await session.rollback()
                return None
            result = await session.execute(select(Payment).where(Payment.id == payment_id))
            db_payment = result.scalar_one()
            await session.commit()
            return schemas.Payment.model_validate(db_payment)

    async def delete(self, payment_id: str) -> bool:
        parse_payment_id(payment_id)
        return await self._run(
            f'failed to delete payment with id "{payment_id}"',
            self._delete(payment_id, to_naive_utc(self.clock())),
        )

    async def _delete(self, payment_id: str, deleted_at: datetime) -> bool:
        async with self.database.get_db() as session:
            result = await session.execute(
                update(Payment).where(live_by_id(payment_id)).values(deleted_at=deleted_at)
            )
            await session.commit()
            return result.rowcount != 0
