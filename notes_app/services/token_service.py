"""
Creación y verificación de JWTs de identidad (HS256 por defecto).

Claims: user.id, sub(user_id), iat, jti y, solo si hay expiración configurada, exp.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

import jwt as pyjwt
from bson import ObjectId

from notes_app.core.config import Settings


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(self, *, secret: str, algorithm: str = "HS256", expire_minutes: Optional[int] = None) -> None:
        if not secret:
            raise ValueError("JWT secret vacío")
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def issue(self, user_id: str) -> str:
        """Genera un token firmado para `user_id`."""
        now = _now_utc()
        payload: Dict[str, Any] = {
            "user": {"id": str(user_id)},
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "jti": str(uuid4()),
        }
        if self._expire_minutes:
            payload["exp"] = int((now + timedelta(minutes=self._expire_minutes)).timestamp())
        return pyjwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[str]:
        """
        Decodifica y valida firma (y exp si existe). Devuelve el user id o None
        si el token es inválido por cualquier motivo (incluido un id que no es ObjectId).
        """
        if not token:
            return None
        try:
            payload = pyjwt.decode(token, key=self._secret, algorithms=[self._algorithm])
        except pyjwt.InvalidTokenError:
            return None
        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
            return None
        return user_id
