"""
Tests for configuration, app wiring and the unauthenticated endpoints.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from notes_app.core.config import ConfigurationError, Settings
from notes_app.infrastructure.db.mongo import build_client
from notes_app.main import create_app


class TestSettings:
    def test_require_reports_missing_values(self, monkeypatch):
        for var in ("DATABASE_URL", "MONGO_URI", "JWT_SECRET", "SECRET_KEY"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        with pytest.raises(ConfigurationError) as exc:
            s.require()
        assert "DATABASE_URL" in str(exc.value)
        assert "JWT_SECRET" in str(exc.value)

    def test_require_passes(self, settings):
        settings.require()

    def test_env_aliases(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "mongodb://db:27017")
        monkeypatch.setenv("JWT_SECRET", "from-env")
        s = Settings(_env_file=None)
        assert s.mongo_uri == "mongodb://db:27017"
        assert s.jwt_secret == "from-env"

    @pytest.mark.parametrize(
        "raw, expected",
        [("/api", "/api"), ("api/", "/api"), ("", ""), ("/", "/")],
    )
    def test_api_prefix_normalized(self, settings, raw, expected):
        settings.api_prefix = raw
        assert settings.api_prefix_normalized == expected


class TestStartup:
    @pytest.mark.asyncio
    async def test_startup_fails_without_secret(self, monkeypatch, db):
        for var in ("JWT_SECRET", "SECRET_KEY"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None, DATABASE_URL="mongodb://localhost:27017")
        app = create_app(settings=s, db=db)
        with pytest.raises(ConfigurationError):
            async with app.router.lifespan_context(app):
                pass


class TestMongoClient:
    @pytest.mark.asyncio
    async def test_client_returns_aware_datetimes(self, settings):
        client = build_client(settings)
        try:
            assert client.codec_options.tz_aware is True
        finally:
            client.close()


class TestPublicEndpoints:
    @pytest.mark.asyncio
    async def test_root(self, client):
        r = await client.get("/")
        assert r.status_code == 200
        assert r.text == "Hello"

    @pytest.mark.asyncio
    async def test_ping(self, client):
        r = await client.get("/api/ping")
        assert r.json() == {"message": "pong"}

    @pytest.mark.asyncio
    async def test_health(self, client):
        r = await client.get("/api/health")
        assert r.status_code == 200
        assert r.json()["ok"] is True

    @pytest.mark.asyncio
    async def test_health_without_database(self, settings):
        app = create_app(settings=settings, db=None)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            r = await c.get("/api/health")
        assert r.status_code == 200
        assert r.json() == {"ok": True, "db": False}

    @pytest.mark.asyncio
    async def test_request_id_roundtrip(self, client):
        r = await client.get("/api/ping", headers={"X-Request-Id": "abc123"})
        assert r.headers["X-Request-Id"] == "abc123"
        r = await client.get("/api/ping")
        assert r.headers["X-Request-Id"]
