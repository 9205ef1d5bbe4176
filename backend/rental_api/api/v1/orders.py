"""Order read endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.api import deps
from rental_api.models.order import Order
from rental_api.models.user import User
from rental_api.schemas.order import OrderRead

router = APIRouter()


@router.get("/{order_id}", response_model=OrderRead, summary="Get order")
async def get_order(
    order_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> OrderRead:
    order = await session.get(Order, order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
        )
    deps.assert_can_act_for(current_user, order.user_id)
    return OrderRead.model_validate(order)
