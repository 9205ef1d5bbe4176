"""Service layer exports."""
from rental_api.services import (
    auth_service,
    booking_service,
    conflict_service,
    document_service,
    locking,
    order_lifecycle,
    pricing_service,
    revocation_service,
    settlement_service,
)

__all__ = [
    "auth_service",
    "booking_service",
    "conflict_service",
    "document_service",
    "locking",
    "order_lifecycle",
    "pricing_service",
    "revocation_service",
    "settlement_service",
]
