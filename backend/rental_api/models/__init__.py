"""ORM models package export."""

from rental_api.models.order import (
    NON_GATEWAY_TRANSACTION_REFERENCE,
    DeliveredStatus,
    Order,
    OrderStatus,
    PaidStatus,
    PaymentMethod,
)
from rental_api.models.user import User, UserRole
from rental_api.models.vehicle import Vehicle, VehicleStatus

__all__ = [
    "NON_GATEWAY_TRANSACTION_REFERENCE",
    "DeliveredStatus",
    "Order",
    "OrderStatus",
    "PaidStatus",
    "PaymentMethod",
    "User",
    "UserRole",
    "Vehicle",
    "VehicleStatus",
]
