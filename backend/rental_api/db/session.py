"""Database session, engine and unit-of-work helpers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rental_api.core.config import get_settings
from rental_api.core.errors import BookingError, TransientStoreError

logger = logging.getLogger(__name__)

_engine_cache: dict[str, AsyncEngine] = {}
_sessionmaker_cache: dict[str, async_sessionmaker[AsyncSession]] = {}


def _resolve_database_url(override: str | None = None) -> str:
    settings = get_settings()
    return override or settings.database_url


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return (and cache) an async sessionmaker for the given database URL."""
    url = _resolve_database_url(database_url)
    sessionmaker = _sessionmaker_cache.get(url)
    if sessionmaker is None:
        engine = create_async_engine(url, echo=False, future=True)
        sessionmaker = async_sessionmaker(
            engine, expire_on_commit=False, class_=AsyncSession
        )
        _engine_cache[url] = engine
        _sessionmaker_cache[url] = sessionmaker
    return sessionmaker


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield an async database session using the configured engine."""
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Dispose the cached engine/sessionmaker for the given database URL."""
    url = _resolve_database_url(database_url)
    engine = _engine_cache.pop(url, None)
    if engine is not None:
        await engine.dispose()
    _sessionmaker_cache.pop(url, None)


@asynccontextmanager
async def unit_of_work(
    session: AsyncSession,
    *,
    timeout: float | None = None,
) -> AsyncIterator[AsyncSession]:
    """Run a block as one atomic transaction on ``session``.

    Commits when the block exits cleanly and rolls back on every other path.
    Domain errors propagate unchanged; store failures and timeouts are re-raised as
    :class:`TransientStoreError` once the rollback has happened.
    """
    if timeout is None:
        timeout = get_settings().transaction_timeout_seconds

    if session.in_transaction():
        # Close the implicit read transaction opened by earlier lookups
        # (e.g. resolving the caller) so the unit of work owns its own boundary.
        await session.commit()

    try:
        async with asyncio.timeout(timeout):
            async with session.begin():
                yield session
    except BookingError:
        raise
    except TimeoutError as exc:
        logger.warning("Unit of work exceeded %ss and was rolled back", timeout)
        raise TransientStoreError(
            "The operation timed out and was rolled back."
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception("Unit of work failed and was rolled back")
        raise TransientStoreError(
            "The operation could not be completed and was rolled back."
        ) from exc
