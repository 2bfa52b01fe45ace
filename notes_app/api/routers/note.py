"""
Endpoints para `notes` del usuario autenticado.

Las rutas legadas (`/fetchallnotes`, `/addnote`, ...) se mantienen como alias
ocultos para clientes anteriores.
"""
from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from notes_app.api.deps import get_current_user_id, get_db
from notes_app.api.schemas.note import NoteCreate, NoteDeleted, NoteOut, NoteUpdate
from notes_app.services import note_service as service


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteOut],
    summary="Listar notas",
    description="Lista todas las notas del usuario autenticado (más recientes primero).",
)
@router.get("/fetchallnotes", response_model=List[NoteOut], include_in_schema=False)
async def list_notes(
    user_id: str = Depends(get_current_user_id),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> List[NoteOut]:
    items = await service.list_notes(db, user_id)
    return [NoteOut.from_doc(i) for i in items]


@router.post(
    "",
    response_model=NoteOut,
    summary="Crear nota",
    description="Crea una nota cuyo dueño es el usuario del token.",
)
@router.post("/addnote", response_model=NoteOut, include_in_schema=False)
async def add_note(
    payload: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> NoteOut:
    return NoteOut.from_doc(await service.create_note(db, user_id, payload))


@router.put(
    "/{note_id}",
    response_model=NoteOut,
    summary="Actualizar nota",
    description="Actualiza title y/o description; solo el dueño puede hacerlo.",
)
@router.put("/updatenote/{note_id}", response_model=NoteOut, include_in_schema=False)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> NoteOut:
    return NoteOut.from_doc(await service.update_note(db, user_id, note_id, payload))


@router.delete(
    "/{note_id}",
    response_model=NoteDeleted,
    summary="Eliminar nota",
    description="Elimina la nota; solo el dueño puede hacerlo.",
)
@router.delete("/deletenote/{note_id}", response_model=NoteDeleted, include_in_schema=False)
async def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> NoteDeleted:
    await service.delete_note(db, user_id, note_id)
    return NoteDeleted()
