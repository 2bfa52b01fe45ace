"""Rutas de autenticación: registro, login y perfil del usuario autenticado."""
from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from notes_app.api.deps import get_current_user_id, get_db, get_password_hasher, get_token_service
from notes_app.api.schemas.auth import LoginPayload, RegisterPayload, TokenOut
from notes_app.api.schemas.user import UserOut
from notes_app.services import auth_service as service
from notes_app.services.password_service import PasswordHasher
from notes_app.services.token_service import TokenService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/createuser",
    response_model=TokenOut,
    summary="Registrar usuario",
    description="Valida payload, rechaza emails repetidos, guarda el hash y emite token.",
)
async def create_user(
    payload: RegisterPayload,
    db: AsyncIOMotorDatabase = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    return await service.register_user(db, payload, hasher=hasher, tokens=tokens)


@router.post(
    "/login",
    response_model=TokenOut,
    summary="Login local",
    description="Verifica email + password y emite token.",
)
async def login(
    payload: LoginPayload,
    db: AsyncIOMotorDatabase = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    return await service.login_local(db, payload, hasher=hasher, tokens=tokens)


@router.post(
    "/getuser",
    response_model=UserOut,
    summary="Usuario autenticado",
    description="Devuelve el usuario del token, sin el hash de la contraseña.",
)
async def get_user(
    user_id: str = Depends(get_current_user_id),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> UserOut:
    return UserOut.from_doc(await service.get_user(db, user_id))
