"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from components.core.database import DatabaseManager
from components.payment import schemas
from components.payment.memory import InMemoryPaymentRepository
from components.payment.repository import PaymentRepository, SQLAlchemyPaymentRepository
from restapi.router import create_app


class TickingClock:
    """Clock that moves forward by a fixed step every time it is read."""

    def __init__(self, start: datetime, step: timedelta) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2019, 5, 1, 12, 0, tzinfo=timezone.utc), timedelta(seconds=1))


@pytest.fixture
def payment_payload() -> dict:
    """A valid payment as a client would send it."""
    return {
        "amount": 314.15,
        "currency": "EUR",
        "date": "2019-04-30T22:30:00Z",
        "description": "Order #1",
        "beneficiary": {"account_number": "1234", "bank_id": "4321", "name": "John"},
        "debtor": {"account_number": "5678", "bank_id": "8765", "name": "Dave"},
    }


@pytest.fixture
def other_payment_payload() -> dict:
    return {
        "amount": 412.32,
        "currency": "USD",
        "date": "2019-04-30T22:30:00Z",
        "description": "Order #2",
        "beneficiary": {"account_number": "9182", "bank_id": "1312", "name": "John"},
        "debtor": {"account_number": "3424", "bank_id": "2131", "name": "Dave"},
    }


@pytest.fixture
def payment(payment_payload) -> schemas.PaymentCreate:
    return schemas.PaymentCreate.model_validate(payment_payload)


@pytest.fixture
def memory_store(clock) -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository(clock=clock)


@pytest_asyncio.fixture
async def sql_store(tmp_path, clock) -> AsyncGenerator[SQLAlchemyPaymentRepository, Any]:
    """Database-backed store on a throwaway SQLite file."""
    database = DatabaseManager(url=f"sqlite+aiosqlite:///{tmp_path / 'payments.db'}", timeout=5.0)
    store = SQLAlchemyPaymentRepository(database, clock=clock)
    await store.connect()
    yield store
    await store.close()


@pytest_asyncio.fixture(params=["memory", "sqlalchemy"])
async def store(request, tmp_path, clock) -> AsyncGenerator[PaymentRepository, Any]:
    """Every store implementation, so both honour the same contract."""
    if request.param == "memory":
        yield InMemoryPaymentRepository(clock=clock)
        return
    database = DatabaseManager(url=f"sqlite+aiosqlite:///{tmp_path / 'payments.db'}", timeout=5.0)
    sql = SQLAlchemyPaymentRepository(database, clock=clock)
    await sql.connect()
    yield sql
    await sql.close()


@pytest_asyncio.fixture
async def client(memory_store) -> AsyncGenerator[httpx.AsyncClient, Any]:
    """HTTP client talking to the app in-process."""
    app = create_app(memory_store)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
