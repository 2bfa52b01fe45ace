"""
Lógica de autenticación: registro, login y perfil del principal.

Los errores de dominio (`DuplicateUser`, `InvalidCredentials`, ...) salen tal
cual; las fallas del almacén o del hasher se envuelven en `InternalError`.
"""
import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from notes_app.api.schemas.auth import LoginPayload, RegisterPayload
from notes_app.core.exceptions import DuplicateUser, InternalError, InvalidCredentials, NotFound
from notes_app.repositories import user_repo as repo
from notes_app.services.password_service import PasswordHasher, PasswordHashingError
from notes_app.services.token_service import TokenService

_log = logging.getLogger("notes.auth")


async def register_user(
    db: AsyncIOMotorDatabase,
    payload: RegisterPayload,
    *,
    hasher: PasswordHasher,
    tokens: TokenService,
) -> Dict[str, Any]:
    """
    Registra un usuario local: CheckDuplicate -> hash -> insert -> token.

    Un email repetido termina el flujo antes de hashear o persistir.
    """
    try:
        existing = await repo.find_user_by_email(db, payload.email)
    except PyMongoError as e:
        raise InternalError() from e
    if existing:
        raise DuplicateUser()

    try:
        password_hash = await hasher.hash(payload.password)
        user_id = await repo.insert_user(
            db, name=payload.name, email=payload.email, password_hash=password_hash
        )
    except DuplicateKeyError:
        # Carrera entre el chequeo y el insert; el índice único decide
        raise DuplicateUser()
    except (PyMongoError, PasswordHashingError) as e:
        raise InternalError() from e

    _log.info("Usuario registrado id=%s", user_id)
    return {"success": True, "token": tokens.issue(user_id)}


async def login_local(
    db: AsyncIOMotorDatabase,
    payload: LoginPayload,
    *,
    hasher: PasswordHasher,
    tokens: TokenService,
) -> Dict[str, Any]:
    try:
        u = await repo.find_user_by_email(db, payload.email)
        if not u or not await hasher.verify(payload.password, u.get("password_hash") or ""):
            raise InvalidCredentials()
    except (PyMongoError, PasswordHashingError) as e:
        raise InternalError() from e
    return {"success": True, "token": tokens.issue(str(u["_id"]))}


async def get_user(db: AsyncIOMotorDatabase, user_id: str) -> Dict[str, Any]:
    """Usuario autenticado sin `password_hash`."""
    try:
        u = await repo.get_user_by_id(db, user_id)
    except PyMongoError as e:
        raise InternalError() from e
    if not u:
        raise NotFound()
    return u
