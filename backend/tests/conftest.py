"""Test fixtures for the rental backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from io import BytesIO
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from rental_api.core.config import get_settings
from rental_api.db.base import Base
from rental_api.db.session import dispose_engine, get_sessionmaker
from rental_api.main import app
from rental_api.models import UserRole
from rental_api.services.revocation_service import InMemoryRevocationRegistry

from tests.factories import ADMIN_PASSWORD, seed_order, seed_user, seed_vehicle


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest_asyncio.fixture()
async def reset_database(db_url: str, upload_dir: Path) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    os.environ["UPLOAD_DIR"] = str(upload_dir)
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest.fixture()
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus a customer, an admin, a vehicle and a draft order."""
    app.state.revocation_registry = InMemoryRevocationRegistry()
    sessionmaker = get_sessionmaker(db_url)

    async with sessionmaker() as session:
        customer = await seed_user(session)
        admin = await seed_user(session, role=UserRole.ADMIN, password=ADMIN_PASSWORD)
        vehicle = await seed_vehicle(session)
        order = await seed_order(session, user=customer, vehicle=vehicle)
        await session.commit()

        context: dict[str, object] = {
            "customer_id": customer.id,
            "customer_email": customer.email,
            "admin_email": admin.email,
            "vehicle_id": vehicle.id,
            "order_id": order.id,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
