"""Pydantic schemas for rental orders."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from rental_api.models.order import (
    DeliveredStatus,
    OrderStatus,
    PaidStatus,
    PaymentMethod,
)


class OrderRead(BaseModel):
    """Serialized order representation."""

    id: uuid.UUID
    user_id: uuid.UUID
    vehicle_id: uuid.UUID
    rent_start_date: date | None = None
    rent_end_date: date | None = None
    rental_days: int | None = None
    terms: bool
    license_image: str | None = None
    grand_total: Decimal | None = None
    status: OrderStatus
    paid_status: PaidStatus
    delivered_status: DeliveredStatus
    payment_method: PaymentMethod | None = None
    transaction_reference: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RentalDetails(BaseModel):
    """Fields written when rental details are finalized."""

    order_id: uuid.UUID
    user_id: uuid.UUID
    vehicle_id: uuid.UUID
    rent_start_date: date
    rent_end_date: date
    rental_days: int
    terms: bool
    license_image: str
    status: OrderStatus
    grand_total: Decimal


class RentalDetailsResponse(BaseModel):
    message: str = "Rental details updated successfully."
    rental_details: RentalDetails


class SettlementResponse(BaseModel):
    """Outcome of a cash-on-delivery settlement."""

    message: str = (
        "Order updated successfully with COD payment, and vehicle is now available."
    )
    order_id: uuid.UUID
    vehicle_id: uuid.UUID
    status: OrderStatus
    paid_status: PaidStatus
    delivered_status: DeliveredStatus
    payment_method: PaymentMethod
    transaction_reference: str
    availability: bool


class ConflictingIntervalRead(BaseModel):
    order_id: uuid.UUID
    rent_start_date: date
    rent_end_date: date
    status: str


class BookingFailure(BaseModel):
    """Structured failure returned for every booking or settlement error."""

    kind: str
    message: str
    conflicts: list[ConflictingIntervalRead] = Field(default_factory=list)
