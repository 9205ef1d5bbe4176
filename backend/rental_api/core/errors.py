"""Domain error taxonomy for booking and settlement.

Every error carries a machine-readable ``kind``, a human ``message`` and the HTTP
status the transport layer should answer with. Raising any of them inside a unit of
work rolls the whole transaction back before the error reaches the caller.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ConflictingInterval:
    """An existing booking that overlaps a requested rental period."""

    order_id: UUID
    rent_start_date: date
    rent_end_date: date
    status: str

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["order_id"] = str(self.order_id)
        data["rent_start_date"] = self.rent_start_date.isoformat()
        data["rent_end_date"] = self.rent_end_date.isoformat()
        return data


class BookingError(Exception):
    """Base class for failures surfaced to booking callers."""

    kind = "booking_error"
    status_code = 400

    def __init__(
        self, message: str, *, conflicts: list[ConflictingInterval] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.conflicts = list(conflicts or [])

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "conflicts": [conflict.to_dict() for conflict in self.conflicts],
        }


class ValidationError(BookingError):
    kind = "validation"
    status_code = 400


class DocumentRejectedError(ValidationError):
    """Uploaded supporting document is not an accepted image."""

    kind = "document_rejected"


class ConflictError(BookingError):
    """The vehicle is already booked for part of the requested period."""

    kind = "conflict"
    status_code = 409


class NotFoundError(BookingError):
    kind = "not_found"
    status_code = 404


class AlreadyFinalizedError(BookingError):
    kind = "already_finalized"
    status_code = 409


class AlreadySettledError(BookingError):
    kind = "already_settled"
    status_code = 409


class InvalidTransitionError(BookingError):
    """The order is in a state that accepts no further transitions."""

    kind = "invalid_transition"
    status_code = 409


class TransientStoreError(BookingError):
    """The store failed or timed out mid-transaction; nothing was committed."""

    kind = "transient_store"
    status_code = 503


__all__ = [
    "AlreadyFinalizedError",
    "AlreadySettledError",
    "BookingError",
    "ConflictError",
    "ConflictingInterval",
    "DocumentRejectedError",
    "InvalidTransitionError",
    "NotFoundError",
    "TransientStoreError",
    "ValidationError",
]
