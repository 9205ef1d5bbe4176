"""Seed helpers shared by API and service tests."""
from __future__ import annotations

import uuid
from decimal import Decimal

from rental_api.core.security import get_password_hash
from rental_api.models import Order, User, UserRole, Vehicle, VehicleStatus

CUSTOMER_PASSWORD = "Passw0rd!"
ADMIN_PASSWORD = "Adm1nPass!"


async def seed_vehicle(
    session,
    *,
    final_price: Decimal = Decimal("50.00"),
    discounted_price: Decimal | None = Decimal("40.00"),
    with_status: bool = True,
) -> Vehicle:
    vehicle = Vehicle(name="Hilux", plate_number=f"BA-{uuid.uuid4().hex[:6]}")
    session.add(vehicle)
    await session.flush()
    if with_status:
        session.add(
            VehicleStatus(
                vehicle_id=vehicle.id,
                final_price=final_price,
                discounted_price=discounted_price,
                availability=False,
            )
        )
        await session.flush()
    return vehicle


async def seed_user(
    session,
    *,
    role: UserRole = UserRole.CUSTOMER,
    password: str = CUSTOMER_PASSWORD,
) -> User:
    user = User(
        email=f"{role.value}.{uuid.uuid4().hex[:6]}@example.com",
        hashed_password=get_password_hash(password),
        full_name="Sita Renter",
        role=role,
    )
    session.add(user)
    await session.flush()
    return user


async def seed_order(session, *, user: User, vehicle: Vehicle, **fields) -> Order:
    order = Order(user_id=user.id, vehicle_id=vehicle.id, **fields)
    session.add(order)
    await session.flush()
    return order
