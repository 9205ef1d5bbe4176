"""Common API dependencies."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.core.config import Settings, get_settings
from rental_api.core.security import decode_access_token
from rental_api.db.session import get_session
from rental_api.models.user import User, UserRole
from rental_api.services import auth_service
from rental_api.services.revocation_service import RevocationRegistry

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{get_settings().api_v1_prefix}/auth/token", auto_error=False
)


@dataclass(frozen=True, slots=True)
class VerifiedToken:
    raw: str
    claims: dict[str, Any]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


def get_app_settings() -> Settings:
    return get_settings()


def get_revocation_registry(request: Request) -> RevocationRegistry:
    return request.app.state.revocation_registry


async def get_verified_token(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    registry: Annotated[RevocationRegistry, Depends(get_revocation_registry)],
) -> VerifiedToken:
    """Reject revoked tokens, then verify signature and expiry."""
    if not token:
        raise _unauthorized("Token required.")
    if await registry.is_revoked(token):
        raise _unauthorized("Token has been revoked.")
    try:
        claims = decode_access_token(token)
    except ExpiredSignatureError as exc:
        raise _unauthorized("Token has expired.") from exc
    except JWTError as exc:
        raise _unauthorized("Invalid token.") from exc
    return VerifiedToken(raw=token, claims=claims)


async def get_current_user(
    request: Request,
    verified: Annotated[VerifiedToken, Depends(get_verified_token)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User:
    """Attach the authenticated user to the request."""
    subject = verified.claims.get("sub")
    try:
        user_id = uuid.UUID(str(subject))
    except (ValueError, TypeError) as exc:
        raise _unauthorized("Invalid token.") from exc

    user = await auth_service.get_user(session, user_id=user_id)
    if user is None or not user.is_active:
        raise _unauthorized("Could not validate credentials")
    request.state.user_id = user.id
    return user


def assert_can_act_for(user: User, owner_id: uuid.UUID) -> None:
    """Allow users to act on their own resources, and admins on anyone's."""
    if user.role == UserRole.ADMIN or user.id == owner_id:
        return
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
    )
