"""Health endpoint tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from rental_api.api import deps
from rental_api.main import app

pytestmark = pytest.mark.asyncio


class _UnreachableSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


async def test_healthcheck_reports_database(app_context) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "Vehicle Rental API"
    assert "x-request-id" in response.headers


async def test_healthcheck_degrades_without_database(app_context) -> None:
    async def _unreachable():
        yield _UnreachableSession()

    app.dependency_overrides[deps.get_db_session] = _unreachable
    try:
        response = await app_context["client"].get("/api/v1/health")
    finally:
        app.dependency_overrides.pop(deps.get_db_session, None)

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"
