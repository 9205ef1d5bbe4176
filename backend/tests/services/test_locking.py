"""Lock ordering shared by finalization and settlement."""

from __future__ import annotations

from datetime import date

import pytest

from rental_api.db.session import get_sessionmaker
from rental_api.services import booking_service, locking, settlement_service

from tests.factories import seed_order, seed_user, seed_vehicle

pytestmark = pytest.mark.asyncio


@pytest.fixture()
def lock_calls(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    calls: list[str] = []
    lock_vehicle_status = locking.lock_vehicle_status
    lock_order = locking.lock_order

    async def _record_vehicle_status(session, vehicle_id):
        calls.append("vehicle_status")
        return await lock_vehicle_status(session, vehicle_id)

    async def _record_order(session, order_id):
        calls.append("order")
        return await lock_order(session, order_id)

    monkeypatch.setattr(locking, "lock_vehicle_status", _record_vehicle_status)
    monkeypatch.setattr(locking, "lock_order", _record_order)
    return calls


async def test_finalize_then_settle_lock_vehicle_before_order(
    reset_database, db_url: str, lock_calls: list[str]
) -> None:
    async with get_sessionmaker(db_url)() as session:
        user = await seed_user(session)
        vehicle = await seed_vehicle(session)
        order = await seed_order(session, user=user, vehicle=vehicle)
        await session.commit()
        order_id, vehicle_id = order.id, vehicle.id

    async with get_sessionmaker(db_url)() as session:
        await booking_service.finalize_booking(
            session,
            booking_service.BookingRequest(
                order_id=order_id,
                vehicle_id=vehicle_id,
                rent_start_date=date(2024, 6, 1),
                rent_end_date=date(2024, 6, 3),
                terms=True,
                license_image="rent_driving_license/licenseImage1_a.png",
            ),
            today=date(2024, 5, 1),
        )
    assert lock_calls == ["vehicle_status", "order"]

    lock_calls.clear()
    async with get_sessionmaker(db_url)() as session:
        await settlement_service.settle_deferred(session, order_id)
    assert lock_calls == ["vehicle_status", "order"]
