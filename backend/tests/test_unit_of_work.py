"""Transaction boundary tests."""

from __future__ import annotations

import asyncio
import uuid

import pytest

from rental_api.core.errors import NotFoundError, TransientStoreError
from rental_api.db.session import get_sessionmaker, unit_of_work
from rental_api.models import Order, OrderStatus
from tests.factories import seed_order, seed_user, seed_vehicle

pytestmark = pytest.mark.asyncio


async def _draft(db_url: str) -> uuid.UUID:
    async with get_sessionmaker(db_url)() as session:
        user = await seed_user(session)
        vehicle = await seed_vehicle(session)
        order = await seed_order(session, user=user, vehicle=vehicle)
        await session.commit()
        return order.id


async def _status(db_url: str, order_id: uuid.UUID) -> OrderStatus:
    async with get_sessionmaker(db_url)() as session:
        stored = await session.get(Order, order_id)
        assert stored is not None
        return stored.status


async def test_clean_exit_commits(reset_database, db_url: str) -> None:
    order_id = await _draft(db_url)
    async with get_sessionmaker(db_url)() as session:
        async with unit_of_work(session):
            stored = await session.get(Order, order_id)
            stored.status = OrderStatus.CANCELED

    assert await _status(db_url, order_id) == OrderStatus.CANCELED


async def test_domain_error_rolls_back_and_propagates(reset_database, db_url: str) -> None:
    order_id = await _draft(db_url)
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(NotFoundError):
            async with unit_of_work(session):
                stored = await session.get(Order, order_id)
                stored.status = OrderStatus.CANCELED
                await session.flush()
                raise NotFoundError("Vehicle status not found.")

    assert await _status(db_url, order_id) == OrderStatus.DRAFT


async def test_timeout_rolls_back(reset_database, db_url: str) -> None:
    order_id = await _draft(db_url)
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(TransientStoreError, match="timed out"):
            async with unit_of_work(session, timeout=0.05):
                stored = await session.get(Order, order_id)
                stored.status = OrderStatus.EXPIRED
                await session.flush()
                await asyncio.sleep(1)

    assert await _status(db_url, order_id) == OrderStatus.DRAFT
