"""Schema exports."""

from rental_api.schemas.auth import LogoutResponse, Token
from rental_api.schemas.order import (
    BookingFailure,
    ConflictingIntervalRead,
    OrderRead,
    RentalDetails,
    RentalDetailsResponse,
    SettlementResponse,
)

__all__ = [
    "BookingFailure",
    "ConflictingIntervalRead",
    "LogoutResponse",
    "OrderRead",
    "RentalDetails",
    "RentalDetailsResponse",
    "SettlementResponse",
    "Token",
]
