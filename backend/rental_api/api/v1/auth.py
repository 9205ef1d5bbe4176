"""Authentication endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.api import deps
from rental_api.core.config import get_settings
from rental_api.schemas.auth import LogoutResponse, Token
from rental_api.services import auth_service
from rental_api.services.revocation_service import RevocationRegistry

router = APIRouter()

_SECONDS = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def _parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    return count, _SECONDS.get(window_str.strip().lower(), fallback[1])


def _rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


_DEFAULT_RATE_DEP = _rate_dependency(
    _parse_rate(get_settings().rate_limit_default, fallback=(100, 60))
)
_LOGIN_RATE_DEP = _rate_dependency(
    _parse_rate(get_settings().rate_limit_login, fallback=(10, 60))
)


@router.post(
    "/token",
    response_model=Token,
    summary="Obtain access token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Token:
    """Validate credentials and issue a bearer token."""
    user = await auth_service.authenticate_user(
        session, email=form_data.username, password=form_data.password
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=auth_service.create_access_token_for_user(user))


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Revoke access token",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def logout(
    verified: Annotated[deps.VerifiedToken, Depends(deps.get_verified_token)],
    registry: Annotated[RevocationRegistry, Depends(deps.get_revocation_registry)],
) -> LogoutResponse:
    await auth_service.revoke_token(registry, verified.raw, verified.claims)
    return LogoutResponse()
