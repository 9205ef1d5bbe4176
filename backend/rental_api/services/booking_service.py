"""Finalize rental details on a draft order inside one transaction."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.core.errors import (
    AlreadyFinalizedError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from rental_api.db.session import unit_of_work
from rental_api.models.order import Order
from rental_api.services import (
    conflict_service,
    locking,
    order_lifecycle,
    pricing_service,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BookingRequest:
    order_id: uuid.UUID
    vehicle_id: uuid.UUID
    rent_start_date: date
    rent_end_date: date
    terms: bool
    license_image: str | None
    user_id: uuid.UUID | None = None


def _today() -> date:
    return datetime.now(UTC).date()


def validate_rental_period(start: date, end: date, *, today: date) -> int:
    """Return the rental day count or raise when the period is unusable."""
    if start < today or end < today:
        raise ValidationError("Rental dates cannot be in the past.")
    if start >= end:
        raise ValidationError("Invalid rental period.")
    return (end - start).days


async def finalize_booking(
    session: AsyncSession,
    request: BookingRequest,
    *,
    today: date | None = None,
) -> Order:
    """Attach period, terms, document and price to a draft order.

    The order either ends fully finalized in ``payment_pending`` or is left
    untouched: every check runs inside the same transaction as the write.
    """
    if not request.terms:
        raise ValidationError("You must accept the terms and conditions.")
    if not request.license_image:
        raise ValidationError("All rental details are required.")
    rental_days = validate_rental_period(
        request.rent_start_date,
        request.rent_end_date,
        today=today or _today(),
    )

    async with unit_of_work(session):
        vehicle_status = await locking.lock_vehicle_status(
            session, request.vehicle_id
        )

        conflicting, intervals = await conflict_service.has_conflict(
            session,
            vehicle_id=request.vehicle_id,
            requested_start=request.rent_start_date,
            requested_end=request.rent_end_date,
            exclude_order_id=request.order_id,
            lock=True,
        )
        if conflicting:
            logger.warning(
                "Vehicle %s already booked for %s..%s (%d conflicts)",
                request.vehicle_id,
                request.rent_start_date,
                request.rent_end_date,
                len(intervals),
            )
            raise ConflictError(
                "Vehicle is already rented during the requested period.",
                conflicts=intervals,
            )

        order = await locking.lock_order(session, request.order_id)
        if order is None or (
            request.user_id is not None and order.user_id != request.user_id
        ):
            raise NotFoundError("Order not found.")
        if order_lifecycle.is_finalized(order):
            raise AlreadyFinalizedError(
                "Order already has rental details. Cannot update finalized order."
            )
        if order.vehicle_id != request.vehicle_id:
            raise ValidationError("Order does not belong to the requested vehicle.")

        if vehicle_status is None:
            raise NotFoundError("Vehicle pricing details not found.")

        grand_total = pricing_service.compute_total(
            vehicle_status.final_price,
            vehicle_status.discounted_price,
            rental_days,
        )
        order_lifecycle.finalize(
            order,
            order_lifecycle.RentalTerms(
                rent_start_date=request.rent_start_date,
                rent_end_date=request.rent_end_date,
                terms=request.terms,
                license_image=request.license_image,
                rental_days=rental_days,
                grand_total=grand_total,
            ),
        )
        await session.flush()

    logger.info(
        "Order %s finalized for vehicle %s: %d days, total %s",
        order.id,
        order.vehicle_id,
        rental_days,
        grand_total,
    )
    return order
