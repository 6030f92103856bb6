"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own aiosqlite in-memory engine (StaticPool keeps
   the single connection alive) with the full schema created.
2. get_db is overridden so every request in the test shares that session.
3. Auth is NOT overridden: tests register real accounts and send real
   bearer tokens, so the authentication middleware and the route gate
   are exercised on every call.
"""

import os

os.environ.setdefault("TALENTFLOW_ENVIRONMENT", "test")
os.environ.setdefault("TALENTFLOW_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import uuid
from dataclasses import dataclass

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from talentflow.db.engine import get_db
from talentflow.db.models import Base
from talentflow.main import app

TEST_DB_URL = "sqlite+aiosqlite://"


@dataclass
class Account:
    id: int
    email: str
    role: str
    token: str

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a throwaway in-memory database."""
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with only get_db overridden."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ═══════════════════════════════════════════════════════════
# Account + job helpers
# ═══════════════════════════════════════════════════════════


async def register(client, role: str, email: str | None = None,
                   password: str = "password123") -> Account:
    email = email or f"{role.lower()}-{uuid.uuid4().hex[:8]}@example.com"
    r = await client.post(
        "/api/auth/register",
        json={
            "fullName": f"{role.title()} User",
            "email": email,
            "password": password,
            "role": role,
        },
    )
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    return Account(id=data["userId"], email=data["email"], role=role, token=data["token"])


def job_body(**overrides) -> dict:
    body = {
        "title": "Backend Engineer",
        "description": "Build and run the job board APIs.",
        "location": "Berlin, Germany",
        "employmentType": "FULL_TIME",
        "requiredSkills": ["Python", "SQL"],
        "experienceLevel": "Mid",
    }
    body.update(overrides)
    return body


async def post_job(client, account: Account, **overrides) -> dict:
    r = await client.post("/api/jobs", json=job_body(**overrides), headers=account.headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest_asyncio.fixture()
async def recruiter(client) -> Account:
    return await register(client, "RECRUITER")


@pytest_asyncio.fixture()
async def other_recruiter(client) -> Account:
    return await register(client, "RECRUITER")


@pytest_asyncio.fixture()
async def candidate(client) -> Account:
    return await register(client, "CANDIDATE")


@pytest_asyncio.fixture()
async def admin(client) -> Account:
    return await register(client, "ADMIN")


@pytest_asyncio.fixture()
async def job(client, recruiter) -> dict:
    return await post_job(client, recruiter)
