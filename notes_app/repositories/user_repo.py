"""Persistencia de usuarios (colección `user`)."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

COLLECTION = "user"

# Nunca sale del repositorio hacia la API
_PUBLIC_PROJECTION = {"password_hash": 0}


def _oid(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


async def find_user_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[Dict[str, Any]]:
    """Busca usuario por email (email en minúsculas)."""
    return await db[COLLECTION].find_one({"email": email})


async def get_user_by_id(db: AsyncIOMotorDatabase, user_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str). Excluye `password_hash`."""
    oid = _oid(user_id)
    if oid is None:
        return None
    return await db[COLLECTION].find_one({"_id": oid}, _PUBLIC_PROJECTION)


async def insert_user(db: AsyncIOMotorDatabase, *, name: str, email: str, password_hash: str) -> str:
    """Inserta usuario y devuelve id (str). Propaga DuplicateKeyError del índice único."""
    doc = {
        "name": name,
        "email": email,
        "password_hash": password_hash,
        "created_at": datetime.now(timezone.utc),
    }
    res = await db[COLLECTION].insert_one(doc)
    return str(res.inserted_id)

