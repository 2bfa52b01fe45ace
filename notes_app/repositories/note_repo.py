"""Repo de la colección `note`."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

COLLECTION = "note"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _oid(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


async def insert_note(db: AsyncIOMotorDatabase, *, user_id: str, title: str, description: str) -> Dict[str, Any]:
    """Inserta nota del usuario y devuelve el documento tal como quedó guardado."""
    now = _now()
    doc = {
        "user_id": ObjectId(user_id),
        "title": title,
        "description": description,
        "created_at": now,
        "updated_at": now,
    }
    res = await db[COLLECTION].insert_one(doc)
    # Releer: el almacén trunca a milisegundos
    return await db[COLLECTION].find_one({"_id": res.inserted_id})


async def list_notes(db: AsyncIOMotorDatabase, user_id: str) -> List[Dict[str, Any]]:
    """Lista notas del dueño (ordenadas por created_at desc)."""
    cursor = db[COLLECTION].find({"user_id": ObjectId(user_id)}, sort=[("created_at", -1)])
    return await cursor.to_list(length=None)


async def get_note(db: AsyncIOMotorDatabase, note_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene nota por id; None si no existe o el id no es un ObjectId."""
    oid = _oid(note_id)
    if oid is None:
        return None
    return await db[COLLECTION].find_one({"_id": oid})


async def update_note(db: AsyncIOMotorDatabase, note_id: str, user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Aplica `$set` parcial (solo si `user_id` es el dueño) y devuelve el documento actualizado."""
    changes = dict(fields)
    changes["updated_at"] = _now()
    return await db[COLLECTION].find_one_and_update(
        {"_id": ObjectId(note_id), "user_id": ObjectId(user_id)},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )


async def delete_note(db: AsyncIOMotorDatabase, note_id: str, user_id: str) -> bool:
    res = await db[COLLECTION].delete_one({"_id": ObjectId(note_id), "user_id": ObjectId(user_id)})
    return res.deleted_count == 1
