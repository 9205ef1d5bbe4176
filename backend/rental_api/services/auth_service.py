"""Authentication service helpers."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.core.security import (
    create_access_token,
    seconds_until_expiry,
    verify_password,
)
from rental_api.models.user import User
from rental_api.services.revocation_service import RevocationRegistry

logger = logging.getLogger(__name__)


async def get_user_by_email(session: AsyncSession, *, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, *, user_id: uuid.UUID) -> User | None:
    return await session.get(User, user_id)


async def authenticate_user(
    session: AsyncSession, email: str, password: str
) -> User | None:
    """Validate credentials and return a user if correct."""
    user = await get_user_by_email(session, email=email)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token_for_user(user: User) -> str:
    """Generate a JWT for a user."""
    return create_access_token(str(user.id), role=user.role.value)


async def revoke_token(
    registry: RevocationRegistry, token: str, claims: dict[str, object]
) -> None:
    """Make ``token`` unusable for the rest of its lifetime."""
    await registry.revoke(token, seconds_until_expiry(claims))
    logger.info("Revoked access token for subject %s", claims.get("sub"))
