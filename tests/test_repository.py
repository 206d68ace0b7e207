"""Tests for the payment stores and their soft-delete semantics."""

import asyncio

import pytest
from sqlalchemy import select

from components.core.database import DatabaseManager
from components.core.exceptions import InvalidPaymentIdError, StoreError
from components.payment import schemas
from components.payment.models import Payment
from components.payment.repository import SQLAlchemyPaymentRepository, new_payment_id


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(store, payment):
    created = await store.create(payment)

    assert len(created.id) == 32
    assert created.created_at == created.updated_at
    assert created.deleted_at is None
    assert created.amount == payment.amount
    assert created.beneficiary == payment.beneficiary


@pytest.mark.asyncio
async def test_get_round_trip(store, payment):
    created = await store.create(payment)

    fetched = await store.get(created.id)

    assert fetched == created


@pytest.mark.asyncio
async def test_get_unknown_id_is_not_found(store):
    assert await store.get(new_payment_id()) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("payment_id", ["", "abc", "5cc8d0f1e7179a2a7d8b4567", "Z" * 32])
async def test_malformed_id_raises(store, payment_id):
    with pytest.raises(InvalidPaymentIdError) as exc_info:
        await store.get(payment_id)
    assert exc_info.value.message == f'"{payment_id}" is not a valid payment ID'
    with pytest.raises(StoreError):
        await store.delete(payment_id)
    with pytest.raises(StoreError):
        await store.update(payment_id, schemas.PaymentCreate())


@pytest.mark.asyncio
async def test_list_returns_only_live_payments(store, payment):
    created = [await store.create(payment) for _ in range(5)]
    for deleted in created[:2]:
        assert await store.delete(deleted.id) is True

    listed = await store.list()

    assert sorted(p.id for p in listed) == sorted(p.id for p in created[2:])


@pytest.mark.asyncio
async def test_list_empty(store):
    assert await store.list() == []


@pytest.mark.asyncio
async def test_delete_hides_payment(store, payment):
    created = await store.create(payment)

    assert await store.delete(created.id) is True
    assert await store.get(created.id) is None
    assert await store.delete(created.id) is False
    assert await store.update(created.id, payment) is None


@pytest.mark.asyncio
async def test_update_replaces_fields_but_keeps_identity(store, payment, other_payment_payload):
    created = await store.create(payment)
    replacement = schemas.PaymentCreate.model_validate(other_payment_payload)

    updated = await store.update(created.id, replacement)

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert updated.amount == replacement.amount
    assert updated.debtor == replacement.debtor
    assert await store.get(created.id) == updated


@pytest.mark.asyncio
async def test_update_unknown_id_is_not_found(store, payment):
    assert await store.update(new_payment_id(), payment) is None


@pytest.mark.asyncio
async def test_deleted_payment_stays_stored(sql_store, payment):
    created = await sql_store.create(payment)
    await sql_store.delete(created.id)

    async with sql_store.database.get_db() as session:
        result = await session.execute(select(Payment).where(Payment.id == created.id))
        row = result.scalar_one()

    assert row.deleted_at is not None


@pytest.mark.asyncio
async def test_memory_store_keeps_deleted_payment(memory_store, payment):
    created = await memory_store.create(payment)
    await memory_store.delete(created.id)

    assert memory_store.payments[created.id].deleted_at is not None


@pytest.mark.asyncio
async def test_returned_payments_are_copies(memory_store, payment):
    created = await memory_store.create(payment)
    created.amount = 1.0

    fetched = await memory_store.get(created.id)

    assert fetched.amount == payment.amount


@pytest.mark.asyncio
async def test_sql_store_is_online(sql_store):
    assert await sql_store.is_online() is True


@pytest.mark.asyncio
async def test_unreachable_database_is_offline_and_fails_operations(tmp_path, payment):
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'payments.db'}"
    store = SQLAlchemyPaymentRepository(DatabaseManager(url=url, timeout=5.0))

    assert await store.is_online() is False
    with pytest.raises(StoreError) as exc_info:
        await store.create(payment)
    assert exc_info.value.message.startswith("failed to create payment: ")
    await store.close()


@pytest.mark.asyncio
async def test_update_leaves_deleted_row_untouched(sql_store, payment, other_payment_payload):
    created = await sql_store.create(payment)
    await sql_store.delete(created.id)

    replacement = schemas.PaymentCreate.model_validate(other_payment_payload)
    assert await sql_store.update(created.id, replacement) is None

    async with sql_store.database.get_db() as session:
        result = await session.execute(select(Payment).where(Payment.id == created.id))
        row = result.scalar_one()

    assert row.amount == payment.amount
    assert row.description == payment.description


@pytest.mark.asyncio
async def test_slow_operation_times_out(sql_store, monkeypatch):
    async def slow_list():
        await asyncio.sleep(1)
        return []

    sql_store.database.timeout = 0.01
    monkeypatch.setattr(sql_store, "_list", slow_list)

    with pytest.raises(StoreError) as exc_info:
        await sql_store.list()
    assert exc_info.value.message == "failed to list payments: operation timed out"
