"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from motor.motor_asyncio import AsyncIOMotorDatabase

from notes_app.api.router import api_router
from notes_app.api.routers.health import root_router
from notes_app.core.config import Settings, settings as default_settings
from notes_app.core.exceptions import register_exception_handlers
from notes_app.core.logging import setup_logging
from notes_app.core.middleware import add_middlewares
from notes_app.infrastructure.db.bootstrap import ensure_collections
from notes_app.infrastructure.db.mongo import build_client, get_database, ping as mongo_ping
from notes_app.services.password_service import PasswordHasher
from notes_app.services.token_service import TokenService

_log = logging.getLogger("notes.startup")


def create_app(settings: Optional[Settings] = None, db: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """Construye la app. `db` permite inyectar una base ya creada (p. ej. en tests)."""
    settings = settings or default_settings
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Sin DATABASE_URL o JWT_SECRET no se arranca
        settings.require()
        if app.state.tokens is None:
            app.state.tokens = TokenService.from_settings(settings)
        if app.state.db is None:
            client = build_client(settings)
            app.state.mongo_client = client
            app.state.db = get_database(client, settings)
            if await mongo_ping(app.state.db):
                _log.info("Mongo conectado (db=%s)", app.state.db.name)
                await ensure_collections(app.state.db)
            else:
                _log.warning("Mongo no listo; omitiendo ensure_collections()")
        try:
            yield
        finally:
            if app.state.mongo_client is not None:
                app.state.mongo_client.close()
                app.state.mongo_client = None

    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    # Recursos de proceso: se crean una vez y se inyectan vía api/deps.py
    app.state.db = db
    app.state.mongo_client = None
    app.state.hasher = PasswordHasher.from_settings(settings)
    app.state.tokens = TokenService.from_settings(settings) if settings.jwt_secret else None

    add_middlewares(app, settings)
    register_exception_handlers(app)

    app.include_router(root_router)
    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notes_app.main:app", host="0.0.0.0", port=default_settings.port)
