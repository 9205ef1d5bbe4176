"""Cash-on-delivery settlement of rental orders."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.core.errors import NotFoundError
from rental_api.db.session import unit_of_work
from rental_api.models.order import Order
from rental_api.models.vehicle import VehicleStatus
from rental_api.services import locking, order_lifecycle

logger = logging.getLogger(__name__)


async def _release_vehicle(
    session: AsyncSession, vehicle_status: VehicleStatus
) -> None:
    vehicle_status.availability = True
    await session.flush()


async def settle_deferred(
    session: AsyncSession,
    order_id: uuid.UUID,
    *,
    user_id: uuid.UUID | None = None,
) -> tuple[Order, VehicleStatus]:
    """Complete an order for cash on delivery and mark its vehicle available.

    Both rows are written in one transaction; a failure on either leaves both
    unchanged. With ``user_id`` only that user's orders are visible.
    """
    async with unit_of_work(session):
        row = (
            await session.execute(
                select(Order.vehicle_id, Order.user_id).where(Order.id == order_id)
            )
        ).one_or_none()
        if row is None or (user_id is not None and row.user_id != user_id):
            raise NotFoundError("Order not found.")

        vehicle_status = await locking.lock_vehicle_status(session, row.vehicle_id)
        order = await locking.lock_order(session, order_id)
        if order is None or order.vehicle_id != row.vehicle_id:
            raise NotFoundError("Order not found.")

        order_lifecycle.settle_deferred(order)
        if vehicle_status is None:
            raise NotFoundError("Vehicle status not found.")
        await session.flush()

        await _release_vehicle(session, vehicle_status)

    logger.info("Order %s settled by cash on delivery", order.id)
    return order, vehicle_status
