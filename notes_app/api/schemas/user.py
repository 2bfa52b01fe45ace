"""
Esquemas Pydantic para la colección `user`.

Reglas clave:
- Campos en snake_case.
- `email` se guarda siempre en minúsculas.
- `password_hash` nunca se expone.
"""
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "UserOut":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            created_at=doc["created_at"],
        )
