"""
Service layer for notes: owner-scoped CRUD over the note repository.

The principal id always comes from the verified token; update and delete go
through `ensure_owner` first.
"""
import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from notes_app.api.schemas.note import NoteCreate, NoteUpdate
from notes_app.core.exceptions import Forbidden, InternalError, NotFound
from notes_app.repositories import note_repo as repo

_log = logging.getLogger("notes.notes")


async def ensure_owner(db: AsyncIOMotorDatabase, note_id: str, user_id: str) -> Dict[str, Any]:
    """Carga la nota y verifica que pertenezca a `user_id`.

    Raises NotFound if the note does not exist, Forbidden if it belongs to
    somebody else.
    """
    try:
        note = await repo.get_note(db, note_id)
    except PyMongoError as e:
        raise InternalError() from e
    if not note:
        raise NotFound()
    if str(note.get("user_id")) != str(user_id):
        _log.warning("Acceso denegado a nota id=%s por user=%s", note_id, user_id)
        raise Forbidden()
    return note


async def create_note(db: AsyncIOMotorDatabase, user_id: str, payload: NoteCreate) -> Dict[str, Any]:
    try:
        return await repo.insert_note(
            db, user_id=user_id, title=payload.title, description=payload.description
        )
    except PyMongoError as e:
        raise InternalError() from e


async def list_notes(db: AsyncIOMotorDatabase, user_id: str) -> List[Dict[str, Any]]:
    try:
        return await repo.list_notes(db, user_id)
    except PyMongoError as e:
        raise InternalError() from e


async def update_note(db: AsyncIOMotorDatabase, user_id: str, note_id: str, payload: NoteUpdate) -> Dict[str, Any]:
    note = await ensure_owner(db, note_id, user_id)
    changes = payload.changes()
    if not changes:
        return note
    try:
        updated = await repo.update_note(db, note_id, user_id, changes)
    except PyMongoError as e:
        raise InternalError() from e
    if not updated:
        # Borrada entre la verificación y el update
        raise NotFound()
    return updated


async def delete_note(db: AsyncIOMotorDatabase, user_id: str, note_id: str) -> None:
    await ensure_owner(db, note_id, user_id)
    try:
        deleted = await repo.delete_note(db, note_id, user_id)
    except PyMongoError as e:
        raise InternalError() from e
    if not deleted:
        raise NotFound()
