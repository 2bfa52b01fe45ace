"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
Los validadores son best-effort (solo warnings); el índice único de email sí se
considera parte del contrato del almacén.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from notes_app.repositories.note_repo import COLLECTION as NOTE_COLL
from notes_app.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("notes.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["name", "email", "password_hash", "created_at"],
    "properties": {
        "name": {"bsonType": "string", "minLength": 3},
        "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
        "password_hash": {"bsonType": "string"},
        "created_at": {"bsonType": "date"},
    },
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["user_id", "title", "description", "created_at"],
    "properties": {
        "user_id": {"bsonType": "objectId"},
        "title": {"bsonType": "string", "minLength": 5},
        "description": {"bsonType": "string", "minLength": 7},
        "created_at": {"bsonType": "date"},
        "updated_at": {"bsonType": "date"},
    },
}

INDEXES: Dict[str, List[Dict[str, Any]]] = {
    USER_COLL: [
        {"keys": [("email", ASCENDING)], "unique": True, "name": "uniq_email"},
    ],
    NOTE_COLL: [
        {"keys": [("user_id", ASCENDING), ("created_at", DESCENDING)], "name": "user_created"},
    ],
}


async def _collmod_or_create(db: AsyncIOMotorDatabase, name: str, validator: Dict[str, Any]) -> None:
    try:
        if name in await db.list_collection_names():
            await db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            await db.create_collection(name, validator={"$jsonSchema": validator})
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    for name, indexes in INDEXES.items():
        coll = db[name]
        for ix in indexes:
            opts = dict(ix)
            keys = opts.pop("keys")
            try:
                await coll.create_index(keys, **opts)
            except PyMongoError as e:
                # p. ej. datos no únicos previos
                _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


async def ensure_collections(db: AsyncIOMotorDatabase) -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    await _collmod_or_create(db, USER_COLL, USER_VALIDATOR)
    await _collmod_or_create(db, NOTE_COLL, NOTE_VALIDATOR)
    await ensure_indexes(db)
