"""Liveness and database readiness endpoint."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.api import deps
from rental_api.core.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="Service and database health")
async def healthcheck(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    settings: Annotated[Settings, Depends(deps.get_app_settings)],
) -> JSONResponse:
    """Report whether the API can reach its order store."""
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        database = "unavailable"

    healthy = database == "ok"
    code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(
        status_code=code,
        content={
            "status": "ok" if healthy else "degraded",
            "service": settings.app_name,
            "database": database,
            "checked_at": datetime.now(UTC).isoformat(),
        },
    )
