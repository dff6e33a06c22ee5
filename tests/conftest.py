"""Shared fixtures: an in-memory database per test and an ASGI client bound to it."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_DEFAULT_CATEGORIES", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import category, tasks, user  # noqa: F401  (register tables)
from app.services.seed import ensure_admin

PASSWORD = "secret123"


@pytest.fixture
async def session_factory():
    # StaticPool keeps one connection so every session sees the same in-memory DB
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register a user over the API; returns {"user", "token", "headers"}."""

    async def _make_user(name: str, email: str, password: str = PASSWORD) -> dict:
        response = await client.post("/register", json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password,
        })
        assert response.status_code == 201, response.text
        data = response.json()
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _make_user


@pytest.fixture
async def admin(client, db):
    await ensure_admin(db, "admin@example.com", PASSWORD, "Admin")
    response = await client.post("/login", json={"email": "admin@example.com", "password": PASSWORD})
    assert response.status_code == 200, response.text
    token = response.json()["token"]
    return {"token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def make_category(client):
    async def _make_category(headers: dict, name: str = "Work", type_: str = "normal") -> dict:
        response = await client.post("/categories", json={"name": name, "type": type_}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_category


@pytest.fixture
def make_task(client):
    async def _make_task(headers: dict, category_id: int, title: str = "Finish project",
                         due_date: str = "2099-01-01T00:00:00Z") -> dict:
        response = await client.post("/tasks", json={
            "title": title,
            "description": "Complete the project by end of the week.",
            "due_date": due_date,
            "category_id": category_id,
        }, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_task
