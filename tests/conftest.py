import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPPORT_EMAIL", "help@schools.test")

from typing import AsyncGenerator, Awaitable, Callable, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.main import app
from app.db.init_db import init_db
from app.db.session import get_db


@pytest.fixture()
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh SQLite file database per test; every request gets its own session."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False, future=True, hide_parameters=True
    )
    await init_db(engine)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Session for calling services directly and inspecting stored rows."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def school_payload(**overrides) -> Dict:
    payload = {
        "name": "DAV Public School",
        "affiliationCode": "CBSE012345",
        "phone": "+919876543210",
        "email": "principal@dav.example.com",
        "city": "Patna",
        "pinCode": "800001",
        "password": "StrongPass123",
    }
    payload.update(overrides)
    return payload


def student_payload(refer_code: str, **overrides) -> Dict:
    payload = {
        "name": "Aarav Sharma",
        "email": "aarav@example.com",
        "class": "10-A",
        "phone": "+919812345678",
        "schoolReferCode": refer_code,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def register_and_login(client: AsyncClient) -> Callable[..., Awaitable[Dict]]:
    """Register a school and log it in; returns the created school plus auth headers."""

    async def _register_and_login(**overrides) -> Dict:
        payload = school_payload(**overrides)
        resp = await client.post("/api/school/register", json=payload)
        assert resp.status_code == 201, resp.text
        school = resp.json()
        login = await client.post(
            "/api/school/login",
            json={"email": payload["email"], "password": payload["password"]},
        )
        assert login.status_code == 200, login.text
        token = login.json()["token"]
        return {"school": school, "token": token, "headers": {"Authorization": f"Bearer {token}"}}

    return _register_and_login
