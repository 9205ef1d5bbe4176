"""Row locks shared by the booking and settlement transactions.

Both transactions lock the vehicle's ``vehicle_status`` row before any of its
order rows. Keeping that order everywhere is what prevents a finalization and a
settlement on the same vehicle from deadlocking each other.
"""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.models.order import Order
from rental_api.models.vehicle import VehicleStatus


async def lock_vehicle_status(
    session: AsyncSession, vehicle_id: uuid.UUID
) -> VehicleStatus | None:
    result = await session.execute(
        select(VehicleStatus)
        .where(VehicleStatus.vehicle_id == vehicle_id)
        .with_for_update()
    )
    return result.scalar_one_or_none()


async def lock_order(session: AsyncSession, order_id: uuid.UUID) -> Order | None:
    result = await session.execute(
        select(Order).where(Order.id == order_id).with_for_update()
    )
    return result.scalar_one_or_none()


__all__ = ["lock_order", "lock_vehicle_status"]
