"""Vehicle and vehicle status models."""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_api.db.base import Base
from rental_api.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from rental_api.models.order import Order


class Vehicle(TimestampMixin, Base):
    """A singly-occupiable vehicle that can be rented."""

    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    plate_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)

    status: Mapped["VehicleStatus | None"] = relationship(
        "VehicleStatus",
        back_populates="vehicle",
        uselist=False,
        cascade="all, delete-orphan",
    )
    orders: Mapped[list["Order"]] = relationship("Order", back_populates="vehicle")


class VehicleStatus(TimestampMixin, Base):
    """Pricing and the administrative availability flag for a vehicle.

    ``availability`` only says whether the vehicle may be booked at all. Which dates
    are taken is answered by the vehicle's active orders, never by this flag.
    """

    __tablename__ = "vehicle_status"

    vehicle_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), primary_key=True
    )
    final_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discounted_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    availability: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    vehicle: Mapped["Vehicle"] = relationship("Vehicle", back_populates="status")
