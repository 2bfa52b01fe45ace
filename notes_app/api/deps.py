"""
Dependencias reutilizables para routers (FastAPI Depends).

- Recursos de proceso (DB, hasher, tokens) viven en `app.state`.
- Autenticación: extrae y valida el token, deja el user id en `request.state`.
- Mantener esta capa delgada: sin lógica de negocio pesada.
"""
from typing import Optional

from fastapi import Depends, Header, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from notes_app.core.exceptions import InternalError
from notes_app.services.auth_gate import authenticate, extract_token
from notes_app.services.password_service import PasswordHasher
from notes_app.services.token_service import TokenService


def get_db(request: Request) -> AsyncIOMotorDatabase:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise InternalError() from RuntimeError("Mongo no inicializado")
    return db


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    auth_token: Optional[str] = Header(default=None, alias="auth-token"),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    user_id = authenticate(extract_token(authorization, auth_token), tokens)
    request.state.user_id = user_id
    return user_id
