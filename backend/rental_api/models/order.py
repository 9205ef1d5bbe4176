"""Rental order models."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_api.db.base import Base
from rental_api.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from rental_api.models.user import User
    from rental_api.models.vehicle import Vehicle

NON_GATEWAY_TRANSACTION_REFERENCE = "N/A"


def _values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class OrderStatus(str, enum.Enum):
    """Lifecycle states for rental orders."""

    DRAFT = "draft"
    PAYMENT_PENDING = "payment_pending"
    COMPLETED = "completed"
    CANCELED = "canceled"
    EXPIRED = "expired"


class PaidStatus(str, enum.Enum):
    """Settlement state of the order's charge."""

    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"


class DeliveredStatus(str, enum.Enum):
    """Physical handoff state of the vehicle."""

    NOT_DELIVERED = "not_delivered"
    DELIVERED = "delivered"


class PaymentMethod(str, enum.Enum):
    CASH_ON_DELIVERY = "cod"
    ONLINE = "online"


class Order(TimestampMixin, Base):
    """A reservation of one vehicle by one user for a closed date interval."""

    __tablename__ = "orders"
    __table_args__ = (Index("ix_orders_vehicle_status", "vehicle_id", "status"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    vehicle_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False
    )
    rent_start_date: Mapped[date | None] = mapped_column(Date)
    rent_end_date: Mapped[date | None] = mapped_column(Date)
    rental_days: Mapped[int | None] = mapped_column(Integer)
    terms: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    license_image: Mapped[str | None] = mapped_column(String(512))
    grand_total: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, values_callable=_values),
        default=OrderStatus.DRAFT,
        nullable=False,
    )
    paid_status: Mapped[PaidStatus] = mapped_column(
        Enum(PaidStatus, values_callable=_values),
        default=PaidStatus.UNPAID,
        nullable=False,
    )
    delivered_status: Mapped[DeliveredStatus] = mapped_column(
        Enum(DeliveredStatus, values_callable=_values),
        default=DeliveredStatus.NOT_DELIVERED,
        nullable=False,
    )
    payment_method: Mapped[PaymentMethod | None] = mapped_column(
        Enum(PaymentMethod, values_callable=_values)
    )
    transaction_reference: Mapped[str | None] = mapped_column(String(128))

    user: Mapped["User"] = relationship("User", back_populates="orders")
    vehicle: Mapped["Vehicle"] = relationship("Vehicle", back_populates="orders")
