"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from secure import Secure
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi_limiter import FastAPILimiter
import redis.asyncio as redis  # type: ignore[import-untyped]

from rental_api.api import api_router
from rental_api.core.config import get_settings
from rental_api.core.errors import BookingError
from rental_api.core.logging import configure_logging
from rental_api.services.revocation_service import (
    InMemoryRevocationRegistry,
    RedisRevocationRegistry,
)

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    redis_client = None
    if settings.redis_url:
        try:
            redis_client = redis.from_url(
                settings.redis_url, encoding="utf-8", decode_responses=True
            )
            await redis_client.ping()
            await FastAPILimiter.init(redis_client)
            app.state.revocation_registry = RedisRevocationRegistry(redis_client)
            logger.info("Token revocation registry backed by Redis")
        except redis.RedisError:
            logger.exception("Redis unavailable; keeping in-process revocation registry")
            if redis_client is not None:
                await redis_client.aclose()
            redis_client = None
    try:
        yield
    finally:
        if redis_client is not None:
            try:
                await FastAPILimiter.close()
            finally:
                await redis_client.aclose()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.state.revocation_registry = InMemoryRevocationRegistry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowlist,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

_secure_headers = Secure.with_default_headers()


@app.middleware("http")
async def _apply_security_headers(request, call_next):
    response = await call_next(request)
    _secure_headers.set_headers(response)
    return response


@app.exception_handler(BookingError)
async def _booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Return a simple welcome message."""
    return {"message": settings.app_name}
