"""
Shared fixtures: in-memory Mongo (mongomock-motor), test settings and an
httpx client bound to the ASGI app.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from notes_app.core.config import Settings
from notes_app.infrastructure.db.bootstrap import ensure_indexes
from notes_app.main import create_app
from notes_app.services.password_service import PasswordHasher
from notes_app.services.token_service import TokenService

TEST_SECRET = "test-secret-please-ignore-0123456789"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL="mongodb://localhost:27017",
        JWT_SECRET=TEST_SECRET,
        mongo_db="notes_test",
        # argon2 barato para tests
        password_time_cost=1,
        password_memory_cost=1024,
        password_parallelism=1,
    )


@pytest.fixture
def hasher(settings) -> PasswordHasher:
    return PasswordHasher.from_settings(settings)


@pytest.fixture
def tokens(settings) -> TokenService:
    return TokenService.from_settings(settings)


@pytest_asyncio.fixture
async def db():
    database = AsyncMongoMockClient()["notes_test"]
    await ensure_indexes(database)
    return database


@pytest.fixture
def app(settings, db):
    return create_app(settings=settings, db=db)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def register(client: AsyncClient, name: str, email: str, password: str) -> str:
    r = await client.post("/api/auth/createuser", json={"name": name, "email": email, "password": password})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    return body["token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
