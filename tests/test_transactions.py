"""
Unit-of-work tests: a write that fails partway through leaves the store
exactly as it was, both for the request dependency and for the seeder.
"""
from decimal import Decimal

import pytest

from catalog import database
from catalog.database import get_db, unit_of_work
from catalog.models import Product
from catalog.repository import ProductRepository
from catalog.seed import run_seeder
from catalog.services import product_service


async def _count(session_factory) -> int:
    async with session_factory() as session:
        return await ProductRepository(session).count()


@pytest.mark.asyncio
async def test_unit_of_work_commits_on_success(session_factory):
    async with unit_of_work(session_factory) as session:
        session.add(Product(name="Kept", description=None, price=Decimal("1.00")))

    assert await _count(session_factory) == 1


@pytest.mark.asyncio
async def test_unit_of_work_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        async with unit_of_work(session_factory) as session:
            session.add(Product(name="First", description=None, price=Decimal("1.00")))
            await session.flush()
            raise RuntimeError("second write failed")

    assert await _count(session_factory) == 0


@pytest.mark.asyncio
async def test_get_db_rolls_back_when_handler_raises(session_factory, monkeypatch):
    monkeypatch.setattr(database, "async_session", session_factory)

    dependency = get_db()
    session = await dependency.__anext__()
    session.add(Product(name="Half-done", description=None, price=Decimal("2.00")))
    await session.flush()

    with pytest.raises(ValueError):
        await dependency.athrow(ValueError("handler failed"))

    assert await _count(session_factory) == 0


@pytest.mark.asyncio
async def test_seeder_failure_leaves_store_empty(session_factory, monkeypatch):
    real_add_product = product_service.add_product
    calls = []

    async def failing_add_product(db, data):
        calls.append(data.name)
        if len(calls) == 2:
            raise RuntimeError("store unavailable")
        return await real_add_product(db, data)

    monkeypatch.setattr(product_service, "add_product", failing_add_product)

    with pytest.raises(RuntimeError):
        await run_seeder(session_factory)

    assert calls == ["Laptop Pro", "Wireless Mouse"]
    assert await _count(session_factory) == 0
