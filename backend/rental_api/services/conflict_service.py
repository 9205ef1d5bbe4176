"""Detect date conflicts between a requested rental and existing orders."""
from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import date

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.core.errors import ConflictingInterval
from rental_api.models.order import Order
from rental_api.services.order_lifecycle import BLOCKING_STATUSES


def _conflict_query(
    vehicle_id: uuid.UUID,
    requested_start: date,
    requested_end: date,
    *,
    exclude_order_id: uuid.UUID | None = None,
) -> Select[tuple[Order]]:
    stmt = (
        select(Order)
        .where(
            Order.vehicle_id == vehicle_id,
            Order.status.in_(BLOCKING_STATUSES),
            Order.rent_start_date.is_not(None),
            Order.rent_end_date.is_not(None),
            or_(
                Order.rent_start_date.between(requested_start, requested_end),
                Order.rent_end_date.between(requested_start, requested_end),
                and_(
                    Order.rent_start_date <= requested_start,
                    Order.rent_end_date >= requested_start,
                ),
                and_(
                    Order.rent_start_date <= requested_end,
                    Order.rent_end_date >= requested_end,
                ),
            ),
        )
        .order_by(Order.rent_start_date)
    )
    if exclude_order_id is not None:
        stmt = stmt.where(Order.id != exclude_order_id)
    return stmt


async def find_conflicts(
    session: AsyncSession,
    *,
    vehicle_id: uuid.UUID,
    requested_start: date,
    requested_end: date,
    exclude_order_id: uuid.UUID | None = None,
    lock: bool = False,
) -> Sequence[Order]:
    """Return active orders on the vehicle whose dates overlap the request.

    With ``lock`` the matching rows are selected ``FOR UPDATE`` so they stay put
    until the surrounding transaction ends.
    """
    stmt = _conflict_query(
        vehicle_id,
        requested_start,
        requested_end,
        exclude_order_id=exclude_order_id,
    )
    if lock:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt)
    return result.scalars().all()


async def has_conflict(
    session: AsyncSession,
    *,
    vehicle_id: uuid.UUID,
    requested_start: date,
    requested_end: date,
    exclude_order_id: uuid.UUID | None = None,
    lock: bool = False,
) -> tuple[bool, list[ConflictingInterval]]:
    orders = await find_conflicts(
        session,
        vehicle_id=vehicle_id,
        requested_start=requested_start,
        requested_end=requested_end,
        exclude_order_id=exclude_order_id,
        lock=lock,
    )
    intervals = [
        ConflictingInterval(
            order_id=order.id,
            rent_start_date=order.rent_start_date,
            rent_end_date=order.rent_end_date,
            status=order.status.value,
        )
        for order in orders
        if order.rent_start_date is not None and order.rent_end_date is not None
    ]
    return bool(intervals), intervals
