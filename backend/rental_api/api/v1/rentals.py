"""Rental finalization and cash-on-delivery endpoints."""

from __future__ import annotations

import re
import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.api import deps
from rental_api.core.config import Settings
from rental_api.core.errors import ValidationError
from rental_api.models.user import User, UserRole
from rental_api.schemas.order import (
    BookingFailure,
    RentalDetails,
    RentalDetailsResponse,
    SettlementResponse,
)
from rental_api.services import booking_service, document_service, settlement_service

router = APIRouter(prefix="/rent")

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_DATE_FORMAT_ERROR = "Rental dates must be ISO formatted (YYYY-MM-DD)."

_FAILURES = {
    code: {"model": BookingFailure} for code in (400, 404, 409, 503)
}


def _parse_terms(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


def _parse_date(value: str | None) -> date:
    if not value:
        raise ValidationError("All rental details are required.")
    text = value.strip()
    if not _ISO_DATE.fullmatch(text):
        raise ValidationError(_DATE_FORMAT_ERROR)
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(_DATE_FORMAT_ERROR) from exc


def _scope_for(user: User) -> uuid.UUID | None:
    return None if user.role == UserRole.ADMIN else user.id


@router.patch(
    "/cod/{order_id}",
    response_model=SettlementResponse,
    responses=_FAILURES,
    summary="Settle an order by cash on delivery",
)
async def settle_cash_on_delivery(
    order_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> SettlementResponse:
    order, vehicle_status = await settlement_service.settle_deferred(
        session, order_id, user_id=_scope_for(current_user)
    )
    return SettlementResponse(
        order_id=order.id,
        vehicle_id=order.vehicle_id,
        status=order.status,
        paid_status=order.paid_status,
        delivered_status=order.delivered_status,
        payment_method=order.payment_method,
        transaction_reference=order.transaction_reference,
        availability=vehicle_status.availability,
    )


@router.patch(
    "/{user_id}/{vehicle_id}/{order_id}",
    response_model=RentalDetailsResponse,
    responses=_FAILURES,
    summary="Finalize rental details for an order",
)
async def update_rental_details(
    user_id: uuid.UUID,
    vehicle_id: uuid.UUID,
    order_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
    settings: Annotated[Settings, Depends(deps.get_app_settings)],
    rent_start_date: Annotated[str | None, Form()] = None,
    rent_end_date: Annotated[str | None, Form()] = None,
    terms: Annotated[str | None, Form()] = None,
    license_image: Annotated[UploadFile | None, File(alias="licenseImage")] = None,
) -> RentalDetailsResponse:
    deps.assert_can_act_for(current_user, user_id)

    start = _parse_date(rent_start_date)
    end = _parse_date(rent_end_date)
    terms_accepted = _parse_terms(terms)
    if not terms_accepted:
        raise ValidationError("You must accept the terms and conditions.")
    if license_image is None:
        raise ValidationError("All rental details are required.")

    reference = await document_service.store_license_image(license_image, settings)
    try:
        order = await booking_service.finalize_booking(
            session,
            booking_service.BookingRequest(
                order_id=order_id,
                vehicle_id=vehicle_id,
                rent_start_date=start,
                rent_end_date=end,
                terms=terms_accepted,
                license_image=reference,
                user_id=user_id,
            ),
        )
    except Exception:
        document_service.discard_document(reference, settings)
        raise

    return RentalDetailsResponse(
        rental_details=RentalDetails(
            order_id=order.id,
            user_id=order.user_id,
            vehicle_id=order.vehicle_id,
            rent_start_date=order.rent_start_date,
            rent_end_date=order.rent_end_date,
            rental_days=order.rental_days,
            terms=order.terms,
            license_image=order.license_image,
            status=order.status,
            grand_total=order.grand_total,
        )
    )
