"""
Hashing y verificación de contraseñas con argon2id.

El trabajo de argon2 es CPU-bound: se ejecuta en un hilo (`asyncio.to_thread`)
para no bloquear el event loop mientras se espera el resultado.
"""
import asyncio

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import Type

from notes_app.core.config import Settings


class PasswordHashingError(Exception):
    """Falla interna del primitivo de hashing (nunca equivale a 'contraseña incorrecta')."""


class PasswordHasher:
    def __init__(self, *, time_cost: int = 2, memory_cost: int = 51200, parallelism: int = 2) -> None:
        self._ph = _Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
            type=Type.ID,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(
            time_cost=settings.password_time_cost,
            memory_cost=settings.password_memory_cost,
            parallelism=settings.password_parallelism,
        )

    def hash_sync(self, password: str) -> str:
        try:
            return self._ph.hash(password)
        except (HashingError, TypeError) as e:
            raise PasswordHashingError(str(e)) from e

    def verify_sync(self, password: str, password_hash: str) -> bool:
        try:
            return self._ph.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError, TypeError) as e:
            raise PasswordHashingError(str(e)) from e

    async def hash(self, password: str) -> str:
        """Hash con salt aleatorio por llamada."""
        return await asyncio.to_thread(self.hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        """True si coincide; False si no. Hash malformado -> PasswordHashingError."""
        return await asyncio.to_thread(self.verify_sync, password, password_hash)
