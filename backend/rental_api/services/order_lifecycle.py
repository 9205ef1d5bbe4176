"""State machine for rental orders.

Orders move ``draft -> payment_pending -> completed``. ``canceled`` and ``expired``
are set by other processes; together with ``completed`` they are terminal for the
transitions owned here. Transitions mutate the ORM object in place and never flush;
persisting is the caller's unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import assert_never

from rental_api.core.errors import (
    AlreadyFinalizedError,
    AlreadySettledError,
    InvalidTransitionError,
    ValidationError,
)
from rental_api.models.order import (
    NON_GATEWAY_TRANSACTION_REFERENCE,
    DeliveredStatus,
    Order,
    OrderStatus,
    PaidStatus,
    PaymentMethod,
)


def is_terminal(status: OrderStatus) -> bool:
    """Whether the order was canceled or expired by an outside process."""
    match status:
        case OrderStatus.CANCELED | OrderStatus.EXPIRED:
            return True
        case OrderStatus.DRAFT | OrderStatus.PAYMENT_PENDING | OrderStatus.COMPLETED:
            return False
        case _:
            assert_never(status)


def blocks_vehicle(status: OrderStatus) -> bool:
    """Whether an order in ``status`` holds its dates against new bookings."""
    match status:
        case OrderStatus.DRAFT | OrderStatus.PAYMENT_PENDING | OrderStatus.COMPLETED:
            return True
        case OrderStatus.CANCELED | OrderStatus.EXPIRED:
            return False
        case _:
            assert_never(status)


BLOCKING_STATUSES: frozenset[OrderStatus] = frozenset(
    status for status in OrderStatus if blocks_vehicle(status)
)


def is_finalized(order: Order) -> bool:
    """Rental details are write-once: all four populated means finalized."""
    return bool(
        order.rent_start_date
        and order.rent_end_date
        and order.terms
        and order.license_image
    )


def is_settled(order: Order) -> bool:
    return order.status == OrderStatus.COMPLETED or order.paid_status == PaidStatus.PAID


@dataclass(frozen=True, slots=True)
class RentalTerms:
    """Validated rental details ready to be written onto an order."""

    rent_start_date: date
    rent_end_date: date
    terms: bool
    license_image: str
    rental_days: int
    grand_total: Decimal


def _ensure_accepts_transitions(order: Order) -> None:
    if is_terminal(order.status):
        raise InvalidTransitionError(
            f"Order is {order.status.value} and cannot be changed."
        )


def finalize(order: Order, details: RentalTerms) -> Order:
    """Attach rental details and move the order to ``payment_pending``."""
    if is_finalized(order):
        raise AlreadyFinalizedError(
            "Order already has rental details. Cannot update finalized order."
        )
    _ensure_accepts_transitions(order)
    if order.status == OrderStatus.COMPLETED:
        raise InvalidTransitionError("Order is already completed.")
    if not details.terms:
        raise ValidationError("You must accept the terms and conditions.")
    if details.rental_days <= 0:
        raise ValidationError("Invalid rental period.")

    order.rent_start_date = details.rent_start_date
    order.rent_end_date = details.rent_end_date
    order.terms = details.terms
    order.license_image = details.license_image
    order.rental_days = details.rental_days
    order.grand_total = details.grand_total
    order.status = OrderStatus.PAYMENT_PENDING
    return order


def settle_deferred(order: Order) -> Order:
    """Complete the order for cash-on-delivery payment."""
    if is_settled(order):
        raise AlreadySettledError("Order is already completed or paid.")
    _ensure_accepts_transitions(order)

    order.status = OrderStatus.COMPLETED
    order.paid_status = PaidStatus.PENDING
    order.delivered_status = DeliveredStatus.NOT_DELIVERED
    order.transaction_reference = NON_GATEWAY_TRANSACTION_REFERENCE
    order.payment_method = PaymentMethod.CASH_ON_DELIVERY
    return order
