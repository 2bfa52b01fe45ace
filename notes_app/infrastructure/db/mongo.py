"""Cliente MongoDB asíncrono (Motor).

El cliente se crea una sola vez en el arranque y se guarda en `app.state`;
repositorios y servicios reciben la base por parámetro (ver `api/deps.py`).
"""
from __future__ import annotations

import logging

import certifi
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from notes_app.core.config import Settings

_log = logging.getLogger("notes.mongo")


def build_client(settings: Settings) -> AsyncIOMotorClient:
    """Construye el cliente Motor con opciones TLS según la URI y los ajustes."""
    uri = settings.mongo_uri
    kwargs = dict(serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms, tz_aware=True)
    if uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return AsyncIOMotorClient(uri, **kwargs)


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    """Devuelve la DB configurada; usa la de la URI si `mongo_db` está vacío."""
    if settings.mongo_db:
        return client[settings.mongo_db]
    return client.get_default_database()


async def ping(db: AsyncIOMotorDatabase) -> bool:
    try:
        await db.command("ping")
        return True
    except Exception as e:
        _log.warning("Mongo ping falló: %s", e)
        return False
